"""검색 엔진"""

from .cancellation import CancellationCoordinator, CancellationToken
from .engine import SearchEngine
from .result_store import ResultStore
from .selection import ResultSelection
from .task import SearchTask

__all__ = [
    "CancellationCoordinator",
    "CancellationToken",
    "ResultSelection",
    "ResultStore",
    "SearchEngine",
    "SearchTask",
]
