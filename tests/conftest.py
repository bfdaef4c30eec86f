"""공통 테스트 fixture"""

import pytest

from scrollfind.core.config import Config
from scrollfind.corpus.snapshot import Corpus
from scrollfind.corpus.sources import ListCorpusSource
from scrollfind.search.adapters.matcher.fzf_matcher import FzfMatcher
from scrollfind.search.engine import SearchEngine

from .doubles import SAMPLE_LINES, Gate


@pytest.fixture
def sample_source():
    """테스트용 스크롤백 소스"""
    return ListCorpusSource(SAMPLE_LINES)


@pytest.fixture
def sample_corpus(sample_source):
    """테스트용 코퍼스"""
    return Corpus.capture(sample_source)


@pytest.fixture
def gate():
    """느린 매처 제어용 gate (테스트 종료 시 항상 개방)"""
    g = Gate()
    yield g
    g.open.set()


@pytest.fixture
def make_engine():
    """SearchEngine 생성 헬퍼 (테스트 종료 시 shutdown)"""
    engines = []

    def _make(source, matcher_factory=FzfMatcher, on_results_changed=None, **config_kwargs):
        engine = SearchEngine(
            source,
            matcher_factory=matcher_factory,
            on_results_changed=on_results_changed,
            config=Config(**config_kwargs),
        )
        engines.append(engine)
        return engine

    yield _make

    for engine in engines:
        engine.shutdown()
