"""스크롤백 코퍼스 캡처"""

from .snapshot import Corpus
from .sources import ListCorpusSource, StreamCorpusSource, TextFileCorpusSource

__all__ = [
    "Corpus",
    "ListCorpusSource",
    "StreamCorpusSource",
    "TextFileCorpusSource",
]
