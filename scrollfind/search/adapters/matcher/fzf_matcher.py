"""fzf 스타일 퍼지 매칭 구현"""

import logging
from dataclasses import dataclass
from enum import IntEnum

from ....core.enums import CaseMode
from ...ports.matcher_port import MatcherPort
from .folding import fold_case, fold_char

logger = logging.getLogger(__name__)

# 점수 상수 (fzf algo v1과 동일한 비율)
SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1
BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_NON_WORD = SCORE_MATCH // 2
BONUS_CAMEL123 = BONUS_BOUNDARY + SCORE_GAP_EXTENSION
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2
BONUS_BOUNDARY_WHITE = BONUS_BOUNDARY + 2
BONUS_BOUNDARY_DELIMITER = BONUS_BOUNDARY + 1

DELIMITER_CHARS = "/,:;|"


class CharClass(IntEnum):
    WHITE = 0
    NON_WORD = 1
    DELIMITER = 2
    LOWER = 3
    UPPER = 4
    LETTER = 5
    NUMBER = 6


def char_class(ch: str) -> CharClass:
    if ch.isspace():
        return CharClass.WHITE
    if ch in DELIMITER_CHARS:
        return CharClass.DELIMITER
    if ch.islower():
        return CharClass.LOWER
    if ch.isupper():
        return CharClass.UPPER
    if ch.isdigit():
        return CharClass.NUMBER
    if ch.isalpha():
        return CharClass.LETTER
    return CharClass.NON_WORD


def bonus_for(prev: CharClass, cls: CharClass) -> int:
    """이전 문자 클래스 → 현재 문자 클래스 전이에 대한 보너스"""
    if cls > CharClass.NON_WORD:
        if prev == CharClass.WHITE:
            return BONUS_BOUNDARY_WHITE
        if prev == CharClass.DELIMITER:
            return BONUS_BOUNDARY_DELIMITER
        if prev == CharClass.NON_WORD:
            return BONUS_BOUNDARY
    if (prev == CharClass.LOWER and cls == CharClass.UPPER) or (
        prev != CharClass.NUMBER and cls == CharClass.NUMBER
    ):
        return BONUS_CAMEL123
    if cls in (CharClass.NON_WORD, CharClass.DELIMITER):
        return BONUS_NON_WORD
    if cls == CharClass.WHITE:
        return BONUS_BOUNDARY_WHITE
    return 0


class TermKind(IntEnum):
    FUZZY = 0
    EXACT = 1
    PREFIX = 2
    SUFFIX = 3
    EQUAL = 4


@dataclass(frozen=True)
class Term:
    """확장 문법의 검색어 하나"""

    text: str
    kind: TermKind = TermKind.FUZZY
    inverse: bool = False
    case_sensitive: bool = False


def parse_pattern(pattern: str, case_mode: CaseMode, extended: bool) -> list[list[Term]]:
    """
    패턴을 OR 그룹 리스트로 파싱

    - 공백으로 구분된 그룹은 AND
    - `a | b` 는 같은 그룹 (OR)
    - 'exact, ^prefix, suffix$, !inverse

    Returns:
        [[Term, ...], ...] (그룹 리스트)
    """
    if not extended:
        text = pattern
        sensitive = case_mode.is_case_sensitive(text)
        return [[Term(text if sensitive else fold_case(text), case_sensitive=sensitive)]]

    groups: list[list[Term]] = []
    join_next = False
    for token in pattern.split():
        if token == "|":
            join_next = bool(groups)
            continue

        term = _parse_term(token, case_mode)
        if term is None:
            continue

        if join_next:
            groups[-1].append(term)
        else:
            groups.append([term])
        join_next = False

    return groups


def _parse_term(token: str, case_mode: CaseMode) -> Term | None:
    text = token
    inverse = False
    kind = TermKind.FUZZY

    if text.startswith("!"):
        inverse = True
        kind = TermKind.EXACT
        text = text[1:]

    if text != "$" and text.endswith("$"):
        kind = TermKind.SUFFIX
        text = text[:-1]

    if text.startswith("'"):
        kind = TermKind.EXACT if kind == TermKind.FUZZY or inverse else kind
        text = text[1:]
    elif text.startswith("^"):
        kind = TermKind.EQUAL if kind == TermKind.SUFFIX else TermKind.PREFIX
        text = text[1:]

    if not text:
        return None

    sensitive = case_mode.is_case_sensitive(text)
    return Term(
        text=text if sensitive else fold_case(text),
        kind=kind,
        inverse=inverse,
        case_sensitive=sensitive,
    )


def calculate_score(
    text: str,
    pattern: str,
    case_sensitive: bool,
    sidx: int,
    eidx: int,
    with_pos: bool,
) -> tuple[int, list[int]]:
    """[sidx, eidx) 구간에서 패턴 점수와 위치 계산"""
    pidx = 0
    score = 0
    in_gap = False
    consecutive = 0
    first_bonus = 0
    positions: list[int] = []
    prev_class = char_class(text[sidx - 1]) if sidx > 0 else CharClass.WHITE

    for idx in range(sidx, eidx):
        ch = text[idx]
        cls = char_class(ch)
        if not case_sensitive:
            ch = fold_char(ch)

        if pidx < len(pattern) and ch == pattern[pidx]:
            if with_pos:
                positions.append(idx)
            score += SCORE_MATCH
            bonus = bonus_for(prev_class, cls)
            if consecutive == 0:
                first_bonus = bonus
            else:
                # 경계 보너스는 연속 구간 전체에 이어짐
                if bonus >= BONUS_BOUNDARY and bonus > first_bonus:
                    first_bonus = bonus
                bonus = max(bonus, first_bonus, BONUS_CONSECUTIVE)

            if pidx == 0:
                score += bonus * BONUS_FIRST_CHAR_MULTIPLIER
            else:
                score += bonus
            in_gap = False
            consecutive += 1
            pidx += 1
        else:
            score += SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
            in_gap = True
            consecutive = 0
            first_bonus = 0

        prev_class = cls

    return score, positions


def fuzzy_match(
    text: str, pattern: str, case_sensitive: bool, with_pos: bool
) -> tuple[int, list[int]] | None:
    """
    퍼지 매칭 (v1)

    1. 앞에서부터 탐욕적으로 서브시퀀스를 찾아 끝 위치 결정
    2. 끝에서 거꾸로 탐색해 시작 위치를 좁힘
    3. 좁혀진 구간에서 점수 계산
    """
    if not pattern:
        return 0, []

    folded = text if case_sensitive else fold_case(text)

    pidx = 0
    sidx = -1
    eidx = -1
    for idx, ch in enumerate(folded):
        if ch == pattern[pidx]:
            if sidx < 0:
                sidx = idx
            pidx += 1
            if pidx == len(pattern):
                eidx = idx + 1
                break

    if eidx < 0:
        return None

    pidx = len(pattern) - 1
    for idx in range(eidx - 1, sidx - 1, -1):
        if folded[idx] == pattern[pidx]:
            pidx -= 1
            if pidx < 0:
                sidx = idx
                break

    return calculate_score(text, pattern, case_sensitive, sidx, eidx, with_pos)


def exact_match(
    text: str, term: Term, with_pos: bool
) -> tuple[int, list[int]] | None:
    """exact / prefix / suffix / equal 매칭"""
    folded = text if term.case_sensitive else fold_case(text)
    pattern = term.text
    n = len(pattern)

    if term.kind == TermKind.PREFIX:
        starts = [0] if folded.startswith(pattern) else []
    elif term.kind == TermKind.SUFFIX:
        trimmed = folded.rstrip()
        starts = [len(trimmed) - n] if trimmed.endswith(pattern) else []
    elif term.kind == TermKind.EQUAL:
        starts = [0] if folded.strip() == pattern and folded.startswith(pattern) else []
    else:
        starts = []
        start = folded.find(pattern)
        while start >= 0:
            starts.append(start)
            start = folded.find(pattern, start + 1)

    best: tuple[int, list[int]] | None = None
    for start in starts:
        scored = calculate_score(text, pattern, term.case_sensitive, start, start + n, with_pos)
        if best is None or scored[0] > best[0]:
            best = scored
    return best


class FzfMatcher(MatcherPort):
    """
    fzf 스타일 퍼지 매처

    특징:
    - smart case (패턴에 대문자가 있을 때만 대소문자 구분)
    - 단어 경계/camelCase/연속 매칭 보너스, 갭 패널티
    - 확장 문법: 'exact ^prefix suffix$ !inverse a | b

    인스턴스 내부에 파싱된 패턴을 캐시하므로 태스크마다 새로 생성해야 함
    """

    def __init__(self, case_mode: CaseMode = CaseMode.SMART, extended: bool = True):
        self.case_mode = case_mode
        self.extended = extended
        self._parsed: dict[str, list[list[Term]]] = {}

    def _groups(self, pattern: str) -> list[list[Term]]:
        groups = self._parsed.get(pattern)
        if groups is None:
            groups = parse_pattern(pattern, self.case_mode, self.extended)
            self._parsed[pattern] = groups
        return groups

    def _match(self, pattern: str, text: str, with_pos: bool) -> tuple[int, list[int]] | None:
        groups = self._groups(pattern)
        if not groups:
            return None

        total = 0
        positions: set[int] = set()
        for group in groups:
            group_result = None
            for term in group:
                result = self._match_term(term, text, with_pos)
                if result is not None:
                    group_result = result
                    break
            if group_result is None:
                return None
            total += group_result[0]
            positions.update(group_result[1])

        return total, sorted(positions)

    @staticmethod
    def _match_term(term: Term, text: str, with_pos: bool) -> tuple[int, list[int]] | None:
        if term.inverse:
            hit = exact_match(text, term, with_pos=False)
            return None if hit is not None else (0, [])
        if term.kind == TermKind.FUZZY:
            return fuzzy_match(text, term.text, term.case_sensitive, with_pos)
        return exact_match(text, term, with_pos)

    def score(self, pattern: str, text: str) -> int | None:
        result = self._match(pattern, text, with_pos=False)
        return None if result is None else result[0]

    def positions(self, pattern: str, text: str) -> list[int]:
        result = self._match(pattern, text, with_pos=True)
        return [] if result is None else result[1]
