"""Bootstrap 테스트"""

import pytest

from scrollfind.core.bootstrap import Bootstrap, create_bootstrap
from scrollfind.core.config import Config
from scrollfind.core.enums import CaseMode, MatcherBackend
from scrollfind.corpus.sources import ListCorpusSource
from scrollfind.search.adapters.matcher.fzf_matcher import FzfMatcher
from scrollfind.search.adapters.matcher.rapidfuzz_matcher import RapidfuzzMatcher


@pytest.fixture
def test_config():
    """테스트용 설정"""
    return Config(matcher_backend=MatcherBackend.FZF, case_mode=CaseMode.IGNORE)


@pytest.fixture
def bootstrap(test_config):
    """Bootstrap 인스턴스"""
    return Bootstrap(test_config)


def test_bootstrap_initialization(bootstrap):
    """Bootstrap 초기화 테스트"""
    assert bootstrap is not None
    assert bootstrap.config is not None


def test_matcher_factory_lazy_loading(bootstrap):
    """팩토리는 캐시되고 매처는 매번 새로 생성"""
    factory1 = bootstrap.matcher_factory
    factory2 = bootstrap.matcher_factory
    assert factory1 is factory2

    matcher1 = factory1()
    matcher2 = factory1()
    assert isinstance(matcher1, FzfMatcher)
    assert matcher1 is not matcher2
    assert matcher1.case_mode == CaseMode.IGNORE


def test_rapidfuzz_backend():
    bootstrap = Bootstrap(Config(matcher_backend=MatcherBackend.RAPIDFUZZ, fuzzy_threshold=0.5))

    matcher = bootstrap.matcher_factory()

    assert isinstance(matcher, RapidfuzzMatcher)
    assert matcher.threshold == 0.5


def test_create_engine(bootstrap):
    engine = bootstrap.create_engine(ListCorpusSource(["alpha", "beta"]))
    try:
        assert len(engine.corpus) == 2
        assert engine.config is bootstrap.config
    finally:
        engine.shutdown()


def test_create_bootstrap_from_env(monkeypatch):
    monkeypatch.setenv("SCROLLFIND_MATCHER", "rapidfuzz")

    bootstrap = create_bootstrap()

    assert bootstrap.config.matcher_backend == MatcherBackend.RAPIDFUZZ
