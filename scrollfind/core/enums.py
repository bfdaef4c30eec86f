"""프로젝트 전역 Enum 및 상수 정의"""

from enum import Enum

# 결과 집합 최대 크기 (렌더링 비용 및 하이라이트 추출 비용 상한)
MAX_RESULTS = 100


class MatcherBackend(str, Enum):
    """매처 구현 선택"""

    FZF = "fzf"  # 내장 fzf 스타일 알고리즘 (기본)
    RAPIDFUZZ = "rapidfuzz"  # rapidfuzz partial_ratio 기반


class CaseMode(str, Enum):
    """대소문자 처리 정책"""

    SMART = "smart"  # 패턴에 대문자가 있으면 구분, 없으면 무시
    IGNORE = "ignore"
    RESPECT = "respect"

    def is_case_sensitive(self, pattern: str) -> bool:
        """주어진 패턴에 대해 대소문자를 구분할지 여부"""
        if self is CaseMode.RESPECT:
            return True
        if self is CaseMode.IGNORE:
            return False
        return any(ch.isupper() for ch in pattern)


class TaskOutcome(str, Enum):
    """검색 태스크 종료 상태 (로깅/트레이싱용)"""

    PUBLISHED = "published"
    ABANDONED = "abandoned"  # 취소 신호로 중단
    STALE = "stale"  # 게시 시점에 더 새로운 generation 존재
    FAILED = "failed"
