"""검색 generation 관리 및 협조적 취소"""

import logging
import threading

from ..core.models import Generation

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    generation 하나에 대한 취소 신호

    엔진(쓰기)과 해당 generation의 태스크(읽기) 사이에서만 공유.
    threading.Event가 set/is_set 간 가시성을 보장한다.
    """

    __slots__ = ("generation", "_event")

    def __init__(self, generation: Generation):
        self.generation = generation
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancellationToken(generation={self.generation}, cancelled={self.cancelled})"


class CancellationCoordinator:
    """
    현재 살아있는 generation 추적

    역할:
    - 새 요청마다 generation 증가 + 이전 generation 취소
    - 게시 직전 "아직 최신인가?" 판정
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._generation: Generation = 0
        self._current: CancellationToken | None = None

    @property
    def generation(self) -> Generation:
        with self._lock:
            return self._generation

    def advance(self) -> CancellationToken:
        """
        새 generation 시작

        Returns:
            새 generation의 취소 토큰 (신호가 내려간 상태)
        """
        with self._lock:
            self._generation += 1
            previous = self._current
            if previous is not None:
                previous.cancel()
            token = CancellationToken(self._generation)
            self._current = token

        if previous is not None:
            logger.debug(f"Generation {previous.generation} superseded by {token.generation}")
        return token

    def is_current(self, token: CancellationToken) -> bool:
        """토큰이 최신 generation이고 취소되지 않았는지"""
        with self._lock:
            return token.generation == self._generation and not token.cancelled

    def cancel_all(self) -> None:
        """진행 중인 generation 취소 (shutdown용)"""
        with self._lock:
            if self._current is not None:
                self._current.cancel()
