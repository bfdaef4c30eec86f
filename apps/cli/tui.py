"""TUI 컴포넌트"""

import logging

from prompt_toolkit import Application
from prompt_toolkit.application import get_app
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.controls import BufferControl, FormattedTextControl
from rich.console import Console
from rich.table import Table
from rich.text import Text

from scrollfind.core.errors import SearchSpawnError
from scrollfind.core.models import MatchResult, ResultSet
from scrollfind.search.engine import SearchEngine
from scrollfind.search.selection import ResultSelection

logger = logging.getLogger(__name__)

console = Console()

HIGHLIGHT_STYLE = "fg:#ff5f5f bold"
SELECTED_STYLE = "bg:#b0e0e6 fg:#000000"
PREVIEW_CONTEXT = 3  # 미리보기에 표시할 앞뒤 라인 수


class CursorTarget:
    """
    선택 결과를 받는 화면 (SeekableSurfacePort)

    터미널 밖에서는 copy mode가 없으므로 위치만 기록
    """

    def __init__(self):
        self.line_index: int | None = None
        self.offset: int | None = None
        self.editing = True

    def seek_to(self, line_index: int, offset: int) -> None:
        self.line_index = line_index
        self.offset = offset

    def set_editing(self, enabled: bool) -> None:
        self.editing = enabled


def highlight_fragments(match: MatchResult, base_style: str = "") -> list[tuple[str, str]]:
    """매칭 위치를 강조한 prompt_toolkit fragment 리스트"""
    positions = set(match.highlight_positions)
    fragments = []
    for i, ch in enumerate(match.text):
        style = f"{base_style} {HIGHLIGHT_STYLE}" if i in positions else base_style
        fragments.append((style.strip(), ch))
    return fragments


def highlight_text(match: MatchResult) -> Text:
    """매칭 위치를 강조한 rich Text"""
    text = Text(match.text)
    for p in match.highlight_positions:
        text.stylize("bold red", p, p + 1)
    return text


def show_results(result_set: ResultSet) -> None:
    """검색 결과 테이블 출력"""
    if result_set.is_empty:
        console.print(f"[yellow]No matches for[/yellow] {result_set.query!r}")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("Line", style="cyan", justify="right")
    table.add_column("Score", style="green", justify="right")
    table.add_column("Text")

    for rank, match in enumerate(result_set, 1):
        table.add_row(str(rank), str(match.line_index + 1), str(match.score), highlight_text(match))

    console.print(table)
    if result_set.truncated:
        console.print("[dim]scan budget exceeded, results are partial[/dim]")


class SearchPanelView:
    """
    검색 패널 렌더링 상태

    미리보기와 결과 목록 모두 렌더링 직전에 최신 ResultSet으로 선택을 동기화한다.
    """

    def __init__(self, engine: SearchEngine, selection: ResultSelection | None = None):
        self.engine = engine
        self.selection = selection or ResultSelection()
        self.query = ""
        self.status = ""

    def sync(self) -> ResultSet:
        return self.selection.sync(self.engine.current_results())

    def render_results(self, max_rows: int) -> FormattedText:
        result_set = self.sync()
        start = max(0, self.selection.selected - max_rows + 1)

        lines: list[tuple[str, str]] = []
        for i, match in enumerate(result_set.results[start : start + max_rows], start):
            style = SELECTED_STYLE if i == self.selection.selected else ""
            lines.extend(highlight_fragments(match, style))
            lines.append(("", "\n"))

        if self.status:
            lines.append(("fg:#ff5f5f", self.status))
        elif self.query and result_set.is_empty:
            lines.append(("dim", "no matches"))
        return FormattedText(lines)

    def render_preview(self) -> FormattedText:
        self.sync()
        match = self.selection.current()
        if match is None:
            return FormattedText([])

        lines: list[tuple[str, str]] = []
        for index in range(match.line_index - PREVIEW_CONTEXT, match.line_index + PREVIEW_CONTEXT + 1):
            line = self.engine.corpus.get(index)
            if line is None:
                continue
            marker = "> " if index == match.line_index else "  "
            lines.append(("dim", f"{index + 1:>6} {marker}"))
            lines.append(("bold" if index == match.line_index else "", f"{line.text}\n"))
        return FormattedText(lines)

    def render_counter(self) -> FormattedText:
        return FormattedText([("dim", f" {len(self.sync())}/{len(self.engine.corpus)}")])

    def update_query(self, query: str) -> None:
        """입력 변경: 선택 초기화 후 재검색"""
        self.query = query
        self.selection.reset()
        try:
            self.engine.submit(query)
            self.status = ""
        except SearchSpawnError as e:
            logger.error(f"Search failed to start: {e}")
            self.status = f"search unavailable: {e}"


def run_search_panel(engine: SearchEngine, target: CursorTarget | None = None) -> MatchResult | None:
    """
    스크롤백 검색 패널 실행

    - 입력할 때마다 재검색, 선택은 첫 번째 결과로 초기화
    - ↑/Ctrl-P, ↓/Ctrl-N: 이동
    - Enter: 선택 위치로 커서 이동 후 종료
    - Esc/Ctrl-G: 취소

    Returns:
        선택된 MatchResult (취소 시 None)
    """
    target = target or CursorTarget()
    view = SearchPanelView(engine)
    selection = view.selection

    input_buffer = Buffer(multiline=False)

    def render_results() -> FormattedText:
        # 화면 절반은 미리보기, 나머지를 결과 목록으로 사용
        rows = get_app().output.get_size().rows
        return view.render_results(max((rows - 3) // 2, 1))

    kb = KeyBindings()

    @kb.add("escape", eager=True)
    @kb.add("c-g")
    @kb.add("c-c")
    def cancel(event):
        event.app.exit(result=None)

    @kb.add("enter")
    def accept(event):
        view.sync()
        event.app.exit(result=selection.accept(target))

    @kb.add("up")
    @kb.add("c-p")
    def move_up(event):
        view.sync()
        selection.move_up()
        event.app.invalidate()

    @kb.add("down")
    @kb.add("c-n")
    def move_down(event):
        view.sync()
        selection.move_down()
        event.app.invalidate()

    container = HSplit(
        [
            Window(content=FormattedTextControl(text=view.render_preview), wrap_lines=False),
            Window(height=1, char="─", style="fg:#87ceeb"),
            Window(
                content=FormattedTextControl(text=render_results),
                wrap_lines=False,
            ),
            VSplit(
                [
                    Window(FormattedTextControl(text="> "), width=2, style="fg:#87ceeb bold"),
                    Window(content=BufferControl(buffer=input_buffer), height=1),
                    Window(FormattedTextControl(text=view.render_counter), width=16),
                ],
                height=1,
            ),
        ]
    )

    app = Application(
        layout=Layout(container, focused_element=input_buffer),
        key_bindings=kb,
        full_screen=True,
    )

    def on_text_changed(buffer):
        view.update_query(buffer.text)
        app.invalidate()

    input_buffer.on_text_changed += on_text_changed
    engine.on_results_changed = app.invalidate

    try:
        return app.run()
    finally:
        engine.shutdown()
