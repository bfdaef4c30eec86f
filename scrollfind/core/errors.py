"""예외 정의"""


class ScrollfindError(Exception):
    """scrollfind 기본 예외"""


class SearchSpawnError(ScrollfindError):
    """검색 태스크를 워커에 전달하지 못함 (이전 결과는 유지됨)"""


class EngineClosedError(SearchSpawnError):
    """shutdown() 이후 submit() 호출"""


class CorpusError(ScrollfindError):
    """코퍼스 소스에서 스크롤백을 읽지 못함"""
