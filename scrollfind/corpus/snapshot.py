"""코퍼스 스냅샷"""

import logging
from typing import Iterator

from ..core.errors import CorpusError
from ..core.models import Line
from ..core.ports import CorpusSourcePort

logger = logging.getLogger(__name__)


class Corpus:
    """
    불변 스크롤백 스냅샷

    엔진 생성 시 한 번만 캡처되며 이후 변경/리사이즈되지 않는다.
    읽기 전용이므로 워커 스레드 간 동기화 없이 공유한다.
    """

    __slots__ = ("_lines",)

    def __init__(self, lines: tuple[Line, ...] = ()):
        self._lines = tuple(lines)

    @classmethod
    def capture(cls, source: CorpusSourcePort) -> "Corpus":
        """
        소스에서 전체 스크롤백을 한 번 캡처

        Args:
            source: get_line_count()/get_lines()를 제공하는 호스트 pane

        Returns:
            Corpus (라인이 없으면 빈 코퍼스)

        Raises:
            CorpusError: 소스 읽기 실패 또는 행 번호가 증가하지 않는 경우
        """
        try:
            count = source.get_line_count()
            rows = list(source.get_lines(range(0, count))) if count > 0 else []
        except (OSError, UnicodeDecodeError) as e:
            raise CorpusError(f"Cannot read scrollback: {e}") from e

        lines = []
        previous = None
        for index, text in rows:
            if previous is not None and index <= previous:
                raise CorpusError(f"Line index {index} is not after {previous}")
            lines.append(Line(index=index, text=text))
            previous = index

        logger.info(f"Captured corpus: {len(lines)} lines")
        return cls(tuple(lines))

    @classmethod
    def from_texts(cls, texts, first_index: int = 0) -> "Corpus":
        """텍스트 리스트로 코퍼스 생성"""
        return cls(tuple(Line(first_index + i, t) for i, t in enumerate(texts)))

    @property
    def lines(self) -> tuple[Line, ...]:
        return self._lines

    @property
    def first_index(self) -> int:
        return self._lines[0].index if self._lines else 0

    def get(self, line_index: int) -> Line | None:
        """행 번호로 라인 조회 (행 번호는 연속이 아닐 수 있음)"""
        if not self._lines:
            return None
        # 연속 행 번호인 경우 바로 접근
        pos = line_index - self.first_index
        if 0 <= pos < len(self._lines) and self._lines[pos].index == line_index:
            return self._lines[pos]
        lo, hi = 0, len(self._lines)
        while lo < hi:
            mid = (lo + hi) // 2
            if self._lines[mid].index < line_index:
                lo = mid + 1
            else:
                hi = mid
        if lo < len(self._lines) and self._lines[lo].index == line_index:
            return self._lines[lo]
        return None

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    def __bool__(self) -> bool:
        return bool(self._lines)
