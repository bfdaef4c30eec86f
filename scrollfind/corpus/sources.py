"""코퍼스 소스 구현 (CorpusSourcePort)"""

import logging
from pathlib import Path
from typing import Iterable, TextIO

logger = logging.getLogger(__name__)


def _strip_newline(text: str) -> str:
    return text.rstrip("\r\n")


class ListCorpusSource:
    """
    메모리 상의 라인 리스트

    테스트 및 스크롤백을 직접 들고 있는 호스트에서 사용
    """

    def __init__(self, lines: Iterable[str], first_index: int = 0):
        self._lines = [_strip_newline(line) for line in lines]
        self.first_index = first_index

    def get_line_count(self) -> int:
        return len(self._lines)

    def get_lines(self, lines: range) -> list[tuple[int, str]]:
        return [(self.first_index + i, self._lines[i]) for i in lines if 0 <= i < len(self._lines)]


class TextFileCorpusSource(ListCorpusSource):
    """
    저장된 스크롤백/로그 파일

    파일은 첫 get_line_count()/get_lines() 호출 시 읽는다.
    읽기 실패(OSError, errors="strict"일 때 UnicodeDecodeError)는 Corpus.capture에서 CorpusError로 변환됨
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8", errors: str = "replace"):
        super().__init__([])
        self.path = Path(path)
        self.encoding = encoding
        self.errors = errors
        self._loaded = False

    def _load(self) -> None:
        if self._loaded:
            return
        with self.path.open("r", encoding=self.encoding, errors=self.errors) as f:
            self._lines = [_strip_newline(line) for line in f]
        self._loaded = True
        logger.debug(f"Loaded {len(self._lines)} lines from {self.path}")

    def get_line_count(self) -> int:
        self._load()
        return super().get_line_count()

    def get_lines(self, lines: range) -> list[tuple[int, str]]:
        self._load()
        return super().get_lines(lines)


class StreamCorpusSource(ListCorpusSource):
    """텍스트 스트림 (stdin 등)"""

    def __init__(self, stream: TextIO):
        super().__init__(stream.readlines())
