from .async_helpers import drain_pending_tasks, run_until_settled, track_task

__all__ = ["drain_pending_tasks", "run_until_settled", "track_task"]
