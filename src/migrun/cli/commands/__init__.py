"""CLI command handlers for migrun."""

from .run import handle_run
from .status import handle_pending, handle_status

__all__ = [
    "handle_pending",
    "handle_run",
    "handle_status",
]
