"""대소문자 폴딩 (길이 보존)"""


def fold_char(ch: str) -> str:
    """
    한 글자 소문자 변환

    str.lower()는 길이가 바뀔 수 있음 ("İ" -> "i̇")
    결과의 첫 글자만 사용해 원문 인덱스와 1:1 대응을 유지
    """
    return ch.lower()[:1] or ch


def fold_case(text: str) -> str:
    """원문과 길이가 같은 소문자 문자열"""
    if text.isascii():
        return text.lower()
    return "".join(fold_char(ch) for ch in text)
