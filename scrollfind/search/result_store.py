"""공개 검색 결과 저장소"""

import logging
import threading
from typing import Callable

from ..core.models import EMPTY_RESULT_SET, ResultSet

logger = logging.getLogger(__name__)


class ResultStore:
    """
    게시된 ResultSet 보관

    - 읽기: 불변 스냅샷 참조를 그대로 반환 (복사 불필요)
    - 쓰기: "최신 generation인가" 검사와 교체를 같은 락 안에서 수행
    - close() 이후에는 어떤 게시도 받지 않음
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._result_set: ResultSet = EMPTY_RESULT_SET
        self._closed = False

    def snapshot(self) -> ResultSet:
        """현재 게시된 결과 (최신 submit 대비 늦을 수 있음)"""
        with self._lock:
            return self._result_set

    def publish(self, result_set: ResultSet, is_current: Callable[[], bool]) -> bool:
        """
        최신 generation일 때만 결과 교체

        Args:
            result_set: 새로 만든 결과
            is_current: 락 안에서 호출되는 최신 여부 판정

        Returns:
            교체했으면 True, 버렸으면 False
        """
        with self._lock:
            if self._closed or not is_current():
                return False
            self._result_set = result_set
        logger.debug(
            f"Published generation {result_set.generation}: {len(result_set)} results"
        )
        return True

    def close(self) -> None:
        with self._lock:
            self._closed = True

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed
