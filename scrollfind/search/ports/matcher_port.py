"""매처 포트 정의"""

from abc import ABC, abstractmethod
from typing import Callable


class MatcherPort(ABC):
    """
    매처 포트

    (패턴, 후보 문자열) 한 쌍에 대해 점수와 매칭 위치를 계산.
    엔진은 이 계약에만 의존하며 내부 알고리즘은 구현체의 정책.

    스코프:
    - 인스턴스 하나는 검색 태스크 하나에서만 사용 (MatcherFactory로 매번 생성)
    - 같은 태스크 안에서는 파싱된 패턴 등을 재사용해도 됨
    """

    @abstractmethod
    def score(self, pattern: str, text: str) -> int | None:
        """
        매칭 점수 계산

        Args:
            pattern: 검색 패턴
            text: 후보 문자열

        Returns:
            점수 (높을수록 좋음), 매칭되지 않으면 None
        """
        pass

    @abstractmethod
    def positions(self, pattern: str, text: str) -> list[int]:
        """
        매칭된 문자 위치 계산

        Args:
            pattern: 검색 패턴
            text: 이미 매칭이 확인된 후보 문자열

        Returns:
            오름차순 문자 오프셋 리스트 (계산할 수 없으면 빈 리스트)
        """
        pass


MatcherFactory = Callable[[], MatcherPort]
