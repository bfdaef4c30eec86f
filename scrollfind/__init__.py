"""scrollfind: 스크롤백 대상 비동기 퍼지 검색 엔진"""

from .core.config import Config
from .core.models import Line, MatchResult, ResultSet
from .corpus import Corpus, ListCorpusSource, TextFileCorpusSource
from .search import ResultSelection, SearchEngine

__version__ = "0.1.0"

__all__ = [
    "Config",
    "Corpus",
    "Line",
    "ListCorpusSource",
    "MatchResult",
    "ResultSelection",
    "ResultSet",
    "SearchEngine",
    "TextFileCorpusSource",
]
