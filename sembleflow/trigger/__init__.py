from .config import PollConfig, calculate_date_range_start
from .poller import Poller, PollResult

__all__ = [
    "PollConfig",
    "Poller",
    "PollResult",
    "calculate_date_range_start",
]
