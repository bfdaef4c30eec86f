"""Config 테스트"""

import pytest

from scrollfind.core.config import Config
from scrollfind.core.enums import MAX_RESULTS, CaseMode, MatcherBackend


def test_config_defaults():
    """Config 기본값 테스트"""
    config = Config()

    assert config.matcher_backend == MatcherBackend.FZF
    assert config.case_mode == CaseMode.SMART
    assert config.extended_syntax is True
    assert config.result_limit == MAX_RESULTS
    assert config.max_workers == 1
    assert config.scan_budget_ms is None
    assert config.otel_enabled is False


def test_config_from_env(monkeypatch):
    """환경변수에서 Config 로드 테스트"""
    monkeypatch.setenv("SCROLLFIND_MATCHER", "rapidfuzz")
    monkeypatch.setenv("SCROLLFIND_CASE", "ignore")
    monkeypatch.setenv("SCROLLFIND_EXTENDED", "false")
    monkeypatch.setenv("SCROLLFIND_RESULT_LIMIT", "20")
    monkeypatch.setenv("SCROLLFIND_MAX_WORKERS", "2")
    monkeypatch.setenv("SCROLLFIND_SCAN_BUDGET_MS", "250")
    monkeypatch.setenv("SCROLLFIND_LOG_LEVEL", "debug")

    config = Config.from_env()

    assert config.matcher_backend == MatcherBackend.RAPIDFUZZ
    assert config.case_mode == CaseMode.IGNORE
    assert config.extended_syntax is False
    assert config.result_limit == 20
    assert config.max_workers == 2
    assert config.scan_budget_ms == 250
    assert config.log_level == "DEBUG"


def test_config_from_env_defaults(monkeypatch):
    """환경변수가 없으면 기본값"""
    for name in ["SCROLLFIND_MATCHER", "SCROLLFIND_SCAN_BUDGET_MS", "SCROLLFIND_SHUTDOWN_TIMEOUT"]:
        monkeypatch.delenv(name, raising=False)

    config = Config.from_env()

    assert config.matcher_backend == MatcherBackend.FZF
    assert config.scan_budget_ms is None
    assert config.shutdown_timeout is None


def test_config_accepts_string_enums():
    config = Config(matcher_backend="rapidfuzz", case_mode="respect")

    assert config.matcher_backend is MatcherBackend.RAPIDFUZZ
    assert config.case_mode is CaseMode.RESPECT


def test_result_limit_clamped_to_cap():
    """100 초과 요청은 100으로 제한"""
    config = Config(result_limit=500)

    assert config.result_limit == MAX_RESULTS


@pytest.mark.parametrize(
    "kwargs",
    [
        {"result_limit": 0},
        {"max_workers": 0},
        {"fuzzy_threshold": 1.5},
        {"scan_budget_ms": 0},
    ],
)
def test_config_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        Config(**kwargs)
