from .fzf_matcher import FzfMatcher
from .rapidfuzz_matcher import RapidfuzzMatcher

__all__ = ["FzfMatcher", "RapidfuzzMatcher"]
