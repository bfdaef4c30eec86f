"""검색 태스크: 스캔 → 점수 → 정렬 → 상위 K → 하이라이트"""

import logging
import time
from typing import Callable

from ..core.enums import MAX_RESULTS
from ..core.models import Line, MatchResult, ResultSet
from ..corpus.snapshot import Corpus
from .cancellation import CancellationToken
from .ports.matcher_port import MatcherFactory, MatcherPort

logger = logging.getLogger(__name__)

# 스캔 시간 예산 확인 주기 (라인 수)
BUDGET_CHECK_INTERVAL = 256


class SearchTask:
    """
    쿼리 하나를 코퍼스 전체에 실행

    취소 신호는 라인마다, 하이라이트 추출 항목마다 확인한다.
    취소되면 None을 반환하고 아무것도 게시하지 않는다.
    """

    def __init__(
        self,
        query: str,
        corpus: Corpus,
        token: CancellationToken,
        matcher_factory: MatcherFactory,
        limit: int = MAX_RESULTS,
        scan_budget_ms: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.query = query
        self.corpus = corpus
        self.token = token
        self.matcher_factory = matcher_factory
        self.limit = min(limit, MAX_RESULTS)
        self.scan_budget_ms = scan_budget_ms
        self.clock = clock

    @property
    def generation(self) -> int:
        return self.token.generation

    def run(self) -> ResultSet | None:
        """
        태스크 실행

        Returns:
            완성된 ResultSet, 취소된 경우 None
        """
        if not self.query:
            return ResultSet(generation=self.generation, query=self.query)

        # 매처 상태는 태스크 단위로만 유지
        matcher = self.matcher_factory()

        scanned = self._scan(matcher)
        if scanned is None:
            return None
        matches, truncated = scanned

        # 점수 내림차순, 동점이면 행 번호 오름차순
        matches.sort(key=lambda m: (-m[0], m[1].index))
        top = matches[: self.limit]

        results = []
        for score, line in top:
            if self.token.cancelled:
                logger.debug(f"Generation {self.generation} cancelled during highlighting")
                return None
            results.append(self._highlight(matcher, score, line))

        return ResultSet(
            generation=self.generation,
            query=self.query,
            results=tuple(results),
            truncated=truncated,
        )

    def _scan(self, matcher: MatcherPort) -> tuple[list[tuple[int, Line]], bool] | None:
        """코퍼스 선형 스캔 (행 번호 오름차순)"""
        matches: list[tuple[int, Line]] = []
        deadline = None
        if self.scan_budget_ms is not None:
            deadline = self.clock() + self.scan_budget_ms / 1000.0

        for count, line in enumerate(self.corpus):
            if self.token.cancelled:
                logger.debug(
                    f"Generation {self.generation} cancelled after {count} lines"
                )
                return None

            if deadline is not None and count % BUDGET_CHECK_INTERVAL == 0 and count:
                if self.clock() > deadline:
                    logger.warning(
                        f"Scan budget {self.scan_budget_ms}ms exceeded for generation "
                        f"{self.generation}: scanned {count}/{len(self.corpus)} lines"
                    )
                    return matches, True

            try:
                score = matcher.score(self.query, line.text)
            except Exception as e:
                logger.debug(f"Matcher failed on line {line.index}, treating as no match: {e}")
                continue

            if score is not None and score > 0:
                matches.append((score, line))

        return matches, False

    def _highlight(self, matcher: MatcherPort, score: int, line: Line) -> MatchResult:
        """생존한 항목에 대해서만 하이라이트 위치 계산"""
        try:
            raw = matcher.positions(self.query, line.text)
        except Exception as e:
            logger.warning(f"Failed to extract positions for line {line.index}: {e}")
            raw = []

        length = len(line.text)
        positions = tuple(sorted({p for p in (raw or ()) if 0 <= p < length}))

        return MatchResult(
            line_index=line.index,
            score=score,
            anchor_offset=positions[-1] if positions else 0,
            highlight_positions=positions,
            text=line.text,
        )
