"""CLI 진입점"""

import logging
import sys

import click

from scrollfind.core.bootstrap import create_bootstrap
from scrollfind.core.config import Config
from scrollfind.core.enums import MAX_RESULTS, MatcherBackend
from scrollfind.core.errors import ScrollfindError
from scrollfind.corpus.sources import StreamCorpusSource, TextFileCorpusSource

logger = logging.getLogger(__name__)


def setup_logging(level: str, log_file: str | None = None) -> None:
    """로깅 설정 (TUI에서는 화면이 깨지지 않도록 파일로)"""
    handlers: list[logging.Handler] = (
        [logging.FileHandler(log_file)] if log_file else [logging.StreamHandler()]
    )
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def load_source(path: str):
    """파일 경로 또는 '-'(stdin)에서 코퍼스 소스 생성 (파일은 캡처 시 읽음)"""
    if path == "-":
        return StreamCorpusSource(sys.stdin)
    return TextFileCorpusSource(path)


def build_config(matcher: str | None, limit: int | None) -> Config:
    config = Config.from_env()
    if matcher:
        config.matcher_backend = MatcherBackend(matcher)
    if limit is not None:
        config.result_limit = min(limit, MAX_RESULTS)
    return config


@click.group()
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="로그 파일 경로")
@click.pass_context
def cli(ctx: click.Context, log_file: str | None) -> None:
    """스크롤백 퍼지 검색"""
    ctx.ensure_object(dict)
    ctx.obj["log_file"] = log_file


@cli.command()
@click.argument("path")
@click.argument("query")
@click.option("--limit", type=click.IntRange(1, MAX_RESULTS), default=None, help="최대 결과 수")
@click.option(
    "--matcher",
    type=click.Choice([b.value for b in MatcherBackend]),
    default=None,
    help="매처 백엔드",
)
@click.pass_context
def search(ctx: click.Context, path: str, query: str, limit: int | None, matcher: str | None) -> None:
    """PATH의 라인들에서 QUERY 검색 (PATH가 '-'이면 stdin)"""
    from apps.cli.tui import show_results

    config = build_config(matcher, limit)
    setup_logging(config.log_level, ctx.obj.get("log_file"))

    try:
        bootstrap = create_bootstrap(config)
        with bootstrap.create_engine(load_source(path)) as engine:
            engine.submit(query)
            engine.wait_until_idle()
            show_results(engine.current_results())
    except ScrollfindError as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--matcher",
    type=click.Choice([b.value for b in MatcherBackend]),
    default=None,
    help="매처 백엔드",
)
@click.pass_context
def tui(ctx: click.Context, path: str, matcher: str | None) -> None:
    """PATH를 스크롤백으로 대화형 검색 (Enter: line:column 출력)"""
    from apps.cli.tui import CursorTarget, run_search_panel

    config = build_config(matcher, None)
    setup_logging(config.log_level, ctx.obj.get("log_file") or "scrollfind.log")

    try:
        engine = create_bootstrap(config).create_engine(load_source(path))
    except ScrollfindError as e:
        raise click.ClickException(str(e)) from e

    target = CursorTarget()
    if run_search_panel(engine, target) is not None:
        click.echo(f"{target.line_index + 1}:{target.offset + 1}")


def main() -> None:
    """CLI 진입점"""
    cli(obj={})


if __name__ == "__main__":
    main()
