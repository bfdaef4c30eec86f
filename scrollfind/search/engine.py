"""비동기 단일 비행(single-flight) 퍼지 검색 엔진"""

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait

from ..core.config import Config
from ..core.enums import TaskOutcome
from ..core.errors import EngineClosedError, SearchSpawnError
from ..core.models import Generation, ResultSet
from ..core.ports import CorpusSourcePort, InvalidationSinkPort
from ..core.telemetry import get_meter, get_tracer
from ..corpus.snapshot import Corpus
from .cancellation import CancellationCoordinator, CancellationToken
from .ports.matcher_port import MatcherFactory
from .result_store import ResultStore
from .task import SearchTask

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)
meter = get_meter(__name__)

search_duration = meter.create_histogram(
    "scrollfind.search.duration",
    unit="ms",
    description="Search task wall time",
)


class SearchEngine:
    """
    스크롤백 퍼지 검색 엔진

    흐름:
    1. submit(query) → generation 증가, 이전 generation 취소
    2. 워커 스레드에서 SearchTask 실행
    3. 최신 generation일 때만 ResultStore에 원자적으로 게시
    4. 게시 후 on_results_changed 호출 (락 밖에서)

    submit()은 UI 스레드에서 호출되며 절대 블로킹하지 않는다.
    """

    def __init__(
        self,
        source: CorpusSourcePort | Corpus,
        matcher_factory: MatcherFactory,
        on_results_changed: InvalidationSinkPort | None = None,
        config: Config | None = None,
    ):
        """
        Args:
            source: 호스트 pane (생성 시 한 번만 캡처) 또는 이미 캡처된 Corpus
            matcher_factory: 태스크마다 새 매처를 만드는 팩토리
            on_results_changed: 결과 게시 알림 (워커 스레드에서 호출됨)
            config: 설정
        """
        self.config = config or Config()
        self.corpus = source if isinstance(source, Corpus) else Corpus.capture(source)
        self.matcher_factory = matcher_factory
        self.on_results_changed = on_results_changed

        self._coordinator = CancellationCoordinator()
        self._store = ResultStore()
        self._executor = ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix="scrollfind-search",
        )
        self._inflight: set[Future] = set()
        self._inflight_lock = threading.Lock()
        self._closed = False

        logger.info(
            f"SearchEngine ready: {len(self.corpus)} lines, "
            f"workers={self.config.max_workers}, limit={self.config.result_limit}"
        )

    @property
    def generation(self) -> Generation:
        """마지막으로 제출된 generation"""
        return self._coordinator.generation

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, query: str) -> None:
        """
        검색 요청 (논블로킹)

        빈 쿼리는 워커 없이 즉시 결과를 비운다.

        Raises:
            EngineClosedError: shutdown() 이후 호출
            SearchSpawnError: 워커에 태스크를 넘기지 못함 (이전 결과 유지)
        """
        if self._closed:
            raise EngineClosedError("Search engine has been shut down")

        token = self._coordinator.advance()

        if not query:
            cleared = ResultSet(generation=token.generation, query=query)
            if self._store.publish(cleared, lambda: self._coordinator.is_current(token)):
                self._notify()
            logger.debug(f"Generation {token.generation}: empty query, results cleared")
            return

        task = SearchTask(
            query=query,
            corpus=self.corpus,
            token=token,
            matcher_factory=self.matcher_factory,
            limit=self.config.result_limit,
            scan_budget_ms=self.config.scan_budget_ms,
        )

        try:
            future = self._executor.submit(self._run_task, task)
        except RuntimeError as e:
            token.cancel()
            if self._closed:
                raise EngineClosedError("Search engine has been shut down") from e
            logger.error(f"Failed to start search task for generation {token.generation}: {e}")
            raise SearchSpawnError(f"Failed to start search task: {e}") from e

        with self._inflight_lock:
            self._inflight.add(future)
        future.add_done_callback(self._discard)

        logger.debug(f"Generation {token.generation}: submitted query {query!r}")

    def current_results(self) -> ResultSet:
        """현재 게시된 결과 스냅샷 (논블로킹)"""
        return self._store.snapshot()

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """
        진행 중인 태스크가 모두 끝날 때까지 대기

        Returns:
            모두 끝났으면 True, timeout이면 False
        """
        with self._inflight_lock:
            pending = set(self._inflight)
        if not pending:
            return True
        _, not_done = wait(pending, timeout=timeout)
        return not not_done

    def shutdown(self) -> bool:
        """
        진행 중인 태스크 취소 후 워커 정지 대기

        반환 이후에는 어떤 워커도 ResultSet을 변경하지 않는다.

        Returns:
            config.shutdown_timeout 안에 워커가 멈췄으면 True
        """
        if self._closed:
            return True
        self._closed = True

        self._coordinator.cancel_all()
        self._executor.shutdown(wait=False, cancel_futures=True)
        stopped = self.wait_until_idle(self.config.shutdown_timeout)
        self._store.close()

        if stopped:
            logger.info("SearchEngine shut down")
        else:
            logger.warning(
                f"Search workers still running after {self.config.shutdown_timeout}s, "
                "results store closed"
            )
        return stopped

    def _run_task(self, task: SearchTask) -> TaskOutcome:
        """워커 스레드에서 실행"""
        with tracer.start_as_current_span("search_task") as span:
            span.set_attribute("search.generation", task.generation)
            span.set_attribute("search.query_length", len(task.query))
            span.set_attribute("corpus.lines", len(self.corpus))

            started = time.perf_counter()
            outcome = self._execute(task, span)
            elapsed_ms = (time.perf_counter() - started) * 1000

            span.set_attribute("search.outcome", outcome.value)
            search_duration.record(elapsed_ms, {"outcome": outcome.value})
            logger.debug(
                f"Generation {task.generation} {outcome.value} in {elapsed_ms:.1f}ms"
            )
            return outcome

    def _execute(self, task: SearchTask, span) -> TaskOutcome:
        try:
            result_set = task.run()
        except Exception:
            logger.exception(f"Search task for generation {task.generation} failed")
            return TaskOutcome.FAILED

        if result_set is None:
            return TaskOutcome.ABANDONED

        span.set_attribute("search.matches", len(result_set))
        if not self._publish(result_set, task.token):
            return TaskOutcome.STALE

        self._notify()
        return TaskOutcome.PUBLISHED

    def _publish(self, result_set: ResultSet, token: CancellationToken) -> bool:
        return self._store.publish(result_set, lambda: self._coordinator.is_current(token))

    def _notify(self) -> None:
        if self.on_results_changed is None:
            return
        try:
            self.on_results_changed()
        except Exception:
            logger.exception("Results-changed callback failed")

    def _discard(self, future: Future) -> None:
        with self._inflight_lock:
            self._inflight.discard(future)

    def __enter__(self) -> "SearchEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
