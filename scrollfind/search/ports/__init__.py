"""검색 포트"""

from .matcher_port import MatcherFactory, MatcherPort

__all__ = ["MatcherFactory", "MatcherPort"]
