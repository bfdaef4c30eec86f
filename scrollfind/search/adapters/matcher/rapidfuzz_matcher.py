"""rapidfuzz 기반 매칭 구현"""

import logging

from rapidfuzz import fuzz
from rapidfuzz.distance import Indel

from ....core.enums import CaseMode
from ...ports.matcher_port import MatcherPort
from .folding import fold_case

logger = logging.getLogger(__name__)


class RapidfuzzMatcher(MatcherPort):
    """
    rapidfuzz partial_ratio 매처

    특징:
    - 패턴과 가장 잘 정렬되는 부분 문자열 기준 유사도 (0~100)
    - threshold 미만은 매칭 실패로 처리
    - 위치는 정렬 구간의 Indel opcode 중 equal 블록에서 추출

    점수는 정수 비교를 위해 ratio * 10 으로 스케일링
    """

    def __init__(self, threshold: float = 0.8, case_mode: CaseMode = CaseMode.SMART):
        """
        Args:
            threshold: 유사도 임계값 (0.0~1.0, 높을수록 엄격)
            case_mode: 대소문자 처리 정책
        """
        self.threshold = threshold
        self.case_mode = case_mode

    def _fold(self, pattern: str, text: str) -> tuple[str, str]:
        if self.case_mode.is_case_sensitive(pattern):
            return pattern, text
        return fold_case(pattern), fold_case(text)

    def _align(self, pattern: str, text: str):
        if not pattern or not text:
            return None
        pattern, text = self._fold(pattern, text)
        return fuzz.partial_ratio_alignment(pattern, text, score_cutoff=self.threshold * 100)

    def score(self, pattern: str, text: str) -> int | None:
        alignment = self._align(pattern, text)
        if alignment is None or alignment.score <= 0:
            return None
        return round(alignment.score * 10)

    def positions(self, pattern: str, text: str) -> list[int]:
        alignment = self._align(pattern, text)
        if alignment is None:
            return []

        folded_pattern, folded_text = self._fold(pattern, text)
        window = folded_text[alignment.dest_start : alignment.dest_end]
        source = folded_pattern[alignment.src_start : alignment.src_end]

        positions = []
        for op in Indel.opcodes(source, window):
            if op.tag == "equal":
                positions.extend(
                    range(alignment.dest_start + op.dest_start, alignment.dest_start + op.dest_end)
                )
        return positions
