from __future__ import annotations

import sys
import tomllib
from pathlib import Path

import click
import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import AppConfig, load_config
from .converter import Converter
from .logging import ConversionLogEntry, ConversionLogger, StageTimings
from .options import HeadingStyle, LinkStyle, Options
from .settings import get_settings
from .sources import SourceError, describe_source, read_source, write_output

console = Console(stderr=True)

app = typer.Typer(
    help="Convert HTML to Markdown",
    add_completion=False,
)

USAGE = """\
Usage: supermarkdown [OPTIONS] [FILE]

Convert HTML to Markdown. Reads FILE, or stdin when FILE is omitted or '-'.

Options:
  --heading-style atx|setext        Heading style (default: atx)
  --link-style inline|referenced    Link style (default: inline)
  --code-fence CHAR                 Code fence: '`', '~', backtick or tilde
  --bullet CHAR                     Bullet marker: -, *, +, dash, asterisk or plus
  --base-url URL                    Resolve relative links and images against URL
  --exclude SELECTORS               Comma-separated CSS selectors to drop
  --include SELECTORS               Comma-separated CSS selectors to always keep
  --config PATH                     Path to config.toml
  --output PATH                     Write Markdown to PATH instead of stdout
  --log-file PATH                   Append a JSONL conversion record to PATH
  -h, --help                        Show this message and exit
  -v, --version                     Show the version and exit
"""

CODE_FENCES = {"`": "`", "backtick": "`", "~": "~", "tilde": "~"}
BULLETS = {"-": "-", "dash": "-", "*": "*", "asterisk": "*", "+": "+", "plus": "+"}


def _help_callback(value: bool) -> None:
    if value:
        console.print(USAGE, markup=False, highlight=False, end="")
        raise typer.Exit()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"supermarkdown {__version__}", markup=False, highlight=False)
        raise typer.Exit()


def _choice(value: str | None, choices: dict[str, str], flag: str) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in choices:
        allowed = ", ".join(sorted(choices))
        raise typer.BadParameter(f"{value!r} is not one of {allowed}", param_hint=flag)
    return choices[normalized]


def _split_selectors(values: list[str] | None) -> tuple[str, ...] | None:
    if not values:
        return None
    selectors = [part.strip() for value in values for part in value.split(",")]
    return tuple(selector for selector in selectors if selector)


def build_options(
    base: Options,
    *,
    heading_style: str | None = None,
    link_style: str | None = None,
    code_fence: str | None = None,
    bullet: str | None = None,
    base_url: str | None = None,
    exclude: list[str] | None = None,
    include: list[str] | None = None,
) -> Options:
    """Layer command-line flags over the configured conversion defaults."""

    heading = _choice(
        heading_style, {style.value: style.value for style in HeadingStyle}, "--heading-style"
    )
    links = _choice(
        link_style,
        {style.value: style.value for style in LinkStyle} | {"reference": "referenced"},
        "--link-style",
    )
    return Options.from_mapping(
        {
            "heading_style": heading,
            "link_style": links,
            "code_fence": _choice(code_fence, CODE_FENCES, "--code-fence"),
            "bullet_marker": _choice(bullet, BULLETS, "--bullet"),
            "base_url": base_url,
            "exclude_selectors": _split_selectors(exclude),
            "include_selectors": _split_selectors(include),
        },
        base=base,
    )


def _load_config(path: Path | None) -> AppConfig:
    try:
        return load_config(path or get_settings().config_path)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


@app.command(context_settings={"help_option_names": []})
def convert(
    file: Path | None = typer.Argument(None, help="HTML file to convert, '-' for stdin"),
    heading_style: str | None = typer.Option(None, "--heading-style"),
    link_style: str | None = typer.Option(None, "--link-style"),
    code_fence: str | None = typer.Option(None, "--code-fence"),
    bullet: str | None = typer.Option(None, "--bullet"),
    base_url: str | None = typer.Option(None, "--base-url"),
    exclude: list[str] | None = typer.Option(None, "--exclude"),
    include: list[str] | None = typer.Option(None, "--include"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
    output: Path | None = typer.Option(None, "--output", "-o"),
    log_file: Path | None = typer.Option(None, "--log-file"),
    show_help: bool = typer.Option(
        False, "--help", "-h", is_eager=True, callback=_help_callback
    ),
    show_version: bool = typer.Option(
        False, "--version", "-v", is_eager=True, callback=_version_callback
    ),
) -> None:
    cfg = _load_config(config)
    options = build_options(
        cfg.conversion,
        heading_style=heading_style,
        link_style=link_style,
        code_fence=code_fence,
        bullet=bullet,
        base_url=base_url,
        exclude=exclude,
        include=include,
    )
    log_path = log_file or cfg.runtime.log_path
    logger = ConversionLogger(log_path) if log_path else None
    source = describe_source(file)

    try:
        html = read_source(file, cfg.runtime.max_input_bytes)
        result = Converter().run(html, options)
        if output is not None:
            write_output(output, result.markdown)
    except SourceError as exc:
        if logger:
            logger.append(
                ConversionLogEntry(
                    source=source,
                    status="error",
                    error_code=exc.code,
                    options=options.as_dict(),
                    timings=StageTimings(),
                )
            )
        console.print(f"[red]Conversion failed[/red]: {exc.code} - {escape(str(exc))}")
        raise typer.Exit(1) from exc

    if logger:
        logger.append(
            ConversionLogEntry(
                source=source,
                status="success",
                options=options.as_dict(),
                timings=result.timings,
                input_chars=result.input_chars,
                output_chars=result.output_chars,
            )
        )
    if output is None:
        typer.echo(result.markdown, nl=bool(result.markdown))


def run(argv: list[str] | None = None) -> int:
    """Run the command line with *argv* and return the exit status."""

    args = sys.argv[1:] if argv is None else list(argv)
    try:
        status = app(args=args, prog_name="supermarkdown", standalone_mode=False)
    except click.exceptions.ClickException as exc:
        console.print(f"[red]Error[/red]: {escape(exc.format_message())}")
        return 1
    except click.exceptions.Abort:
        return 1
    return status if isinstance(status, int) else 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
