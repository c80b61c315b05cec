"""
Utilities package initialization.
"""
from .logger import get_logger, log_business_event, log_performance, setup_logging
from .metrics import completion_rate_pct, safe_div

__all__ = [
    "get_logger",
    "log_business_event",
    "log_performance",
    "setup_logging",
    "completion_rate_pct",
    "safe_div",
]
