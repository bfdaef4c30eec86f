"""결과 목록 선택 커서 (호출자 측 계약)"""

import logging

from ..core.models import EMPTY_RESULT_SET, Generation, MatchResult, ResultSet
from ..core.ports import SeekableSurfacePort

logger = logging.getLogger(__name__)


class ResultSelection:
    """
    현재 ResultSet 위의 선택 인덱스

    - 선택은 항상 [0, len-1] 범위 (비어 있으면 0)
    - generation이 바뀌면 첫 번째 결과로 초기화
    """

    def __init__(self):
        self.selected = 0
        self._generation: Generation | None = None
        self._results: ResultSet = EMPTY_RESULT_SET

    @property
    def results(self) -> ResultSet:
        return self._results

    def sync(self, result_set: ResultSet) -> ResultSet:
        """렌더링 직전 최신 ResultSet 반영"""
        if result_set.generation != self._generation:
            self._generation = result_set.generation
            self.selected = 0
        self._results = result_set
        self._clamp()
        return result_set

    def reset(self) -> None:
        """입력이 바뀌었을 때"""
        self.selected = 0

    def move_up(self) -> None:
        self.selected = max(self.selected - 1, 0)

    def move_down(self) -> None:
        if self.selected + 1 < len(self._results):
            self.selected += 1

    def current(self) -> MatchResult | None:
        if self._results.is_empty:
            return None
        return self._results[self.selected]

    def accept(self, surface: SeekableSurfacePort) -> MatchResult | None:
        """
        선택한 결과 위치로 커서 이동

        Args:
            surface: seek_to/set_editing 을 지원하는 화면 (copy mode 등)

        Returns:
            선택된 MatchResult, 결과가 없으면 None
        """
        match = self.current()
        if match is None:
            return None

        surface.set_editing(False)
        surface.seek_to(match.line_index, match.anchor_offset)
        logger.debug(f"Accepted line {match.line_index} at offset {match.anchor_offset}")
        return match

    def _clamp(self) -> None:
        if self._results.is_empty:
            self.selected = 0
        else:
            self.selected = min(max(self.selected, 0), len(self._results) - 1)
