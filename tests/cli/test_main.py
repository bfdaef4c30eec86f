"""CLI 테스트"""

import pytest
from click.testing import CliRunner

from apps.cli.main import cli
from apps.cli.tui import CursorTarget, SearchPanelView, highlight_fragments, highlight_text
from scrollfind.core.models import MatchResult
from scrollfind.corpus.sources import ListCorpusSource

from ..doubles import SAMPLE_LINES


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def scrollback(tmp_path):
    path = tmp_path / "scrollback.log"
    path.write_text("foo bar\nbarfoo\nhello world\nbar baz bar\n", encoding="utf-8")
    return path


def test_search_command(runner, scrollback):
    result = runner.invoke(cli, ["search", str(scrollback), "bar"], obj={})

    assert result.exit_code == 0, result.output
    assert "barfoo" in result.output
    assert "bar baz bar" in result.output
    assert "hello world" not in result.output


def test_search_no_matches(runner, scrollback):
    result = runner.invoke(cli, ["search", str(scrollback), "zzz"], obj={})

    assert result.exit_code == 0
    assert "No matches" in result.output


def test_search_stdin(runner):
    result = runner.invoke(cli, ["search", "-", "world"], input="hello world\nbye\n", obj={})

    assert result.exit_code == 0
    assert "hello world" in result.output


def test_search_rapidfuzz(runner, scrollback):
    result = runner.invoke(
        cli, ["search", str(scrollback), "bar", "--matcher", "rapidfuzz"], obj={}
    )

    assert result.exit_code == 0
    assert "barfoo" in result.output


def test_search_missing_file(runner, tmp_path):
    result = runner.invoke(cli, ["search", str(tmp_path / "missing.log"), "bar"], obj={})

    assert result.exit_code != 0
    assert "Cannot read" in result.output


def test_search_limit_validation(runner, scrollback):
    result = runner.invoke(cli, ["search", str(scrollback), "bar", "--limit", "500"], obj={})

    assert result.exit_code != 0


def test_highlight_fragments():
    match = MatchResult(line_index=0, score=1, highlight_positions=(1,), text="abc")

    fragments = highlight_fragments(match)

    assert [text for _, text in fragments] == ["a", "b", "c"]
    assert fragments[0][0] == ""
    assert "bold" in fragments[1][0]


def test_highlight_text():
    match = MatchResult(line_index=0, score=1, highlight_positions=(0, 2), text="abc")

    text = highlight_text(match)

    assert text.plain == "abc"
    assert len(text.spans) == 2


def test_cursor_target():
    target = CursorTarget()

    target.set_editing(False)
    target.seek_to(12, 3)

    assert (target.line_index, target.offset, target.editing) == (12, 3, False)


def fragments_text(formatted) -> str:
    return "".join(text for _, text in formatted)


@pytest.fixture
def panel(make_engine):
    engine = make_engine(ListCorpusSource(SAMPLE_LINES))
    return SearchPanelView(engine)


def test_panel_preview_follows_new_results(panel):
    """새 결과 게시 후 결과 목록보다 미리보기를 먼저 그려도 새 선택 기준"""
    panel.update_query("bar")
    panel.engine.wait_until_idle()
    panel.render_results(10)
    panel.selection.move_down()

    panel.update_query("hello")
    panel.engine.wait_until_idle()
    preview = fragments_text(panel.render_preview())

    assert "3 > hello world" in preview
    assert panel.selection.selected == 0
    assert "hello world" in fragments_text(panel.render_results(10))


def test_panel_counter(panel):
    panel.update_query("bar")
    panel.engine.wait_until_idle()

    assert fragments_text(panel.render_counter()).strip() == "3/4"


def test_panel_no_matches(panel):
    panel.update_query("zzz")
    panel.engine.wait_until_idle()

    assert fragments_text(panel.render_preview()) == ""
    assert "no matches" in fragments_text(panel.render_results(10))


def test_panel_spawn_failure_status(panel):
    panel.engine.shutdown()
    panel.update_query("bar")

    assert "search unavailable" in fragments_text(panel.render_results(10))
