"""의존성 주입 및 포트 초기화"""

import logging
from functools import partial

from ..corpus.snapshot import Corpus
from ..search.engine import SearchEngine
from ..search.ports.matcher_port import MatcherFactory
from .config import Config
from .enums import MatcherBackend
from .ports import CorpusSourcePort, InvalidationSinkPort
from .telemetry import init_telemetry

logger = logging.getLogger(__name__)


class Bootstrap:
    """포트 인스턴스 생성 및 의존성 주입"""

    def __init__(self, config: Config):
        self.config = config

        # 인스턴스 캐시 (lazy loading)
        self._matcher_factory: MatcherFactory | None = None

    @property
    def matcher_factory(self) -> MatcherFactory:
        """
        매처 팩토리

        MATCHER 설정에 따라 자동 선택:
        - fzf: FzfMatcher (기본)
        - rapidfuzz: RapidfuzzMatcher
        """
        if self._matcher_factory is None:
            if self.config.matcher_backend == MatcherBackend.RAPIDFUZZ:
                from ..search.adapters.matcher.rapidfuzz_matcher import RapidfuzzMatcher

                self._matcher_factory = partial(
                    RapidfuzzMatcher,
                    threshold=self.config.fuzzy_threshold,
                    case_mode=self.config.case_mode,
                )
            else:
                from ..search.adapters.matcher.fzf_matcher import FzfMatcher

                self._matcher_factory = partial(
                    FzfMatcher,
                    case_mode=self.config.case_mode,
                    extended=self.config.extended_syntax,
                )
            logger.debug(f"Matcher backend: {self.config.matcher_backend.value}")
        return self._matcher_factory

    def create_engine(
        self,
        source: CorpusSourcePort | Corpus,
        on_results_changed: InvalidationSinkPort | None = None,
    ) -> SearchEngine:
        """
        검색 엔진 생성

        Args:
            source: 스크롤백 소스 (생성 시 한 번 캡처)
            on_results_changed: 결과 게시 알림

        Returns:
            SearchEngine 인스턴스
        """
        return SearchEngine(
            source,
            matcher_factory=self.matcher_factory,
            on_results_changed=on_results_changed,
            config=self.config,
        )


def create_bootstrap(config: Config | None = None) -> Bootstrap:
    """
    Bootstrap 인스턴스 생성

    Args:
        config: 애플리케이션 설정 (None이면 환경변수에서 로드)

    Returns:
        Bootstrap 인스턴스

    Usage:
        >>> bootstrap = create_bootstrap()
        >>> engine = bootstrap.create_engine(TextFileCorpusSource("scrollback.log"))
        >>> engine.submit("error")
    """
    if config is None:
        config = Config.from_env()
    init_telemetry(config)
    return Bootstrap(config)
