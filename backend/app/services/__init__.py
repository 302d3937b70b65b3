"""Application service helpers."""

from .birthday_sweep import SweepReport, run_birthday_sweep
from .email import DispatchResult, EmailDispatcher, get_email_dispatcher

__all__ = [
    "SweepReport",
    "run_birthday_sweep",
    "DispatchResult",
    "EmailDispatcher",
    "get_email_dispatcher",
]
