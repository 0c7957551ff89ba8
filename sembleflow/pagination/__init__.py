from .config import PaginationConfig, normalize
from .driver import AUTO_PAGE_SIZE, PaginationDriver
from .models import PageEnvelope, PaginationMeta, PaginationResult, QuerySpec

__all__ = [
    "AUTO_PAGE_SIZE",
    "PaginationConfig",
    "PaginationDriver",
    "PageEnvelope",
    "PaginationMeta",
    "PaginationResult",
    "QuerySpec",
    "normalize",
]
