from typing import Protocol, Sequence


# 코퍼스 소스 (호스트 pane)
class CorpusSourcePort(Protocol):
    def get_line_count(self) -> int:
        """
        스크롤백 전체 라인 수 반환
        """
        ...

    def get_lines(self, lines: range) -> Sequence[tuple[int, str]]:
        """
        주어진 범위의 (행 번호, 텍스트) 리스트 반환

        Args:
            lines: 조회할 행 범위 (0 기준)

        Returns:
            행 번호 오름차순의 (index, text) 시퀀스
        """
        ...


# 결과 갱신 알림 (호스트 UI)
class InvalidationSinkPort(Protocol):
    def __call__(self) -> None:
        """
        결과가 게시될 때마다 호출됨
        워커 스레드에서 호출되므로 스레드 안전해야 함
        """
        ...


# 위치 이동 + 편집 모드 전환이 가능한 화면 (copy mode 등)
class SeekableSurfacePort(Protocol):
    def seek_to(self, line_index: int, offset: int) -> None:
        """
        지정한 행/오프셋으로 커서 이동

        Args:
            line_index: 코퍼스 행 번호
            offset: 행 내 문자 오프셋
        """
        ...

    def set_editing(self, enabled: bool) -> None:
        """검색어 편집 모드 전환"""
        ...
