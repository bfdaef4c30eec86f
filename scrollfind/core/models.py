from dataclasses import dataclass, field
from typing import Iterator

# 기본 타입 정의
Generation = int
LineIndex = int


@dataclass(frozen=True)
class Line:
    """스크롤백 한 줄 (캡처 이후 불변)"""

    index: LineIndex  # 코퍼스 내 안정적인 행 번호
    text: str


@dataclass(frozen=True)
class MatchResult:
    """한 줄에 대한 매칭 결과"""

    line_index: LineIndex
    score: int  # 높을수록 좋음
    anchor_offset: int = 0  # 커서를 놓을 위치 (하이라이트 마지막 위치)
    highlight_positions: tuple[int, ...] = ()  # 매칭된 문자 오프셋 (오름차순)
    text: str = ""


@dataclass(frozen=True)
class ResultSet:
    """
    공개된 검색 결과 스냅샷

    - score 내림차순, 동점이면 line_index 오름차순
    - 항상 하나의 generation에서만 생성됨 (부분 갱신 없음)
    """

    generation: Generation = 0
    query: str = ""
    results: tuple[MatchResult, ...] = field(default_factory=tuple)
    truncated: bool = False  # 스캔 시간 예산 초과로 일부만 스캔한 경우

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[MatchResult]:
        return iter(self.results)

    def __getitem__(self, item: int) -> MatchResult:
        return self.results[item]

    @property
    def is_empty(self) -> bool:
        return not self.results

    @property
    def line_indexes(self) -> list[LineIndex]:
        return [r.line_index for r in self.results]


EMPTY_RESULT_SET = ResultSet()
