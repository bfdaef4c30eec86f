"""FzfMatcher 테스트"""

import pytest

from scrollfind.core.enums import CaseMode
from scrollfind.search.adapters.matcher.fzf_matcher import (
    CharClass,
    FzfMatcher,
    TermKind,
    char_class,
    fuzzy_match,
    parse_pattern,
)

from ..doubles import SAMPLE_LINES


@pytest.fixture
def matcher():
    return FzfMatcher()


def test_sample_corpus_matches(matcher):
    """'bar'는 0, 1, 3번 라인에만 매칭"""
    matched = [i for i, text in enumerate(SAMPLE_LINES) if matcher.score("bar", text)]

    assert matched == [0, 1, 3]


def test_no_match_returns_none(matcher):
    assert matcher.score("xyz", "hello world") is None
    assert matcher.positions("xyz", "hello world") == []


def test_positions_for_word(matcher):
    assert matcher.positions("bar", "foo bar") == [4, 5, 6]


def test_backward_scan_tightens_window():
    """앞쪽의 흩어진 매칭 대신 가장 짧은 구간 선택"""
    _, positions = fuzzy_match("a a abc", "abc", case_sensitive=False, with_pos=True)

    assert positions == [4, 5, 6]


def test_word_boundary_scores_higher(matcher):
    """연속/경계 매칭이 흩어진 매칭보다 점수가 높음"""
    assert matcher.score("abc", "abc xyz") > matcher.score("abc", "xaxbxc")


def test_camel_case_bonus(matcher):
    assert matcher.score("fb", "fooBar") > matcher.score("fb", "foobar")


def test_equal_boundary_scores(matcher):
    """같은 조건의 매칭은 같은 점수"""
    assert matcher.score("bar", "foo bar") == matcher.score("bar", "barfoo")


def test_smart_case(matcher):
    assert matcher.score("Bar", "foo bar") is None
    assert matcher.score("Bar", "foo Bar") is not None
    assert matcher.score("bar", "FOO BAR") is not None


def test_respect_case():
    matcher = FzfMatcher(case_mode=CaseMode.RESPECT)

    assert matcher.score("bar", "FOO BAR") is None


def test_deterministic(matcher):
    assert matcher.score("wrld", "hello world") == matcher.score("wrld", "hello world")


def test_exact_term(matcher):
    assert matcher.score("'foo", "fxoxo") is None
    assert matcher.score("'foo", "a foo b") is not None
    assert matcher.positions("'foo", "a foo b") == [2, 3, 4]


def test_prefix_and_suffix_terms(matcher):
    assert matcher.score("^bar", "barfoo") is not None
    assert matcher.score("^bar", "foo bar") is None
    assert matcher.score("bar$", "foo bar") is not None
    assert matcher.score("bar$", "barfoo") is None
    assert matcher.positions("bar$", "bar baz bar") == [8, 9, 10]


def test_equal_term(matcher):
    assert matcher.score("^barfoo$", "barfoo") is not None
    assert matcher.score("^bar$", "barfoo") is None


def test_inverse_term(matcher):
    """!term 은 해당 문자열이 있는 라인 제외"""
    assert matcher.score("o !hello", "foo bar") is not None
    assert matcher.score("o !hello", "hello world") is None


def test_and_terms(matcher):
    """확장 문법에서 공백은 AND"""
    assert matcher.score("foo bar", "barfoo") is not None
    assert matcher.score("foo qux", "barfoo") is None


def test_or_terms(matcher):
    assert matcher.score("zzz | bar", "foo bar") is not None
    assert matcher.score("zzz | qqq", "foo bar") is None


def test_positions_union_of_terms(matcher):
    assert matcher.positions("foo bar", "foo bar") == [0, 1, 2, 4, 5, 6]


def test_non_extended_treats_spaces_literally():
    matcher = FzfMatcher(extended=False)

    assert matcher.score("foo bar", "barfoo") is None
    assert matcher.score("foo bar", "foo bar") is not None
    assert matcher.score("'foo", "'foo") is not None


def test_empty_terms_produce_no_match(matcher):
    assert matcher.score("!", "anything") is None


def test_parse_pattern():
    groups = parse_pattern("^ab cd$ !ef 'gh | ij", CaseMode.SMART, extended=True)

    assert [[t.kind for t in g] for g in groups] == [
        [TermKind.PREFIX],
        [TermKind.SUFFIX],
        [TermKind.EXACT],
        [TermKind.EXACT, TermKind.FUZZY],
    ]
    assert groups[2][0].inverse is True


def test_char_class():
    assert char_class(" ") == CharClass.WHITE
    assert char_class("/") == CharClass.DELIMITER
    assert char_class("a") == CharClass.LOWER
    assert char_class("A") == CharClass.UPPER
    assert char_class("7") == CharClass.NUMBER
    assert char_class("-") == CharClass.NON_WORD


def test_lowercase_expanding_char_before_match(matcher):
    """소문자 변환 시 길이가 늘어나는 문자("İ")가 앞에 있어도 위치가 원문 기준"""
    text = "İstanbul bar"

    assert matcher.score("bar", "İbar") is not None
    assert matcher.score("bar", text) is not None
    assert matcher.positions("bar", text) == [9, 10, 11]
    assert matcher.positions("'bar", "İİ bar") == [3, 4, 5]


def test_fold_case_preserves_length():
    from scrollfind.search.adapters.matcher.folding import fold_case

    assert fold_case("İstanbul BAR") == "istanbul bar"
    assert len(fold_case("İİ foo")) == len("İİ foo")
