"""Command-line entry point for ScriptMark.

Provides ``scriptmark-export``, which reads an annotation JSON file and
writes ``<name>.html`` plus ``<name>.css`` next to it (or to --output-dir).
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, TextColumn

from scriptmark import get_version_string, setup_logging
from scriptmark.export.errors import ExportCancelledError, ExportError

console = Console(stderr=True)


def _build_export_parser() -> argparse.ArgumentParser:
    """Build argparse parser for scriptmark-export."""
    parser = argparse.ArgumentParser(
        prog="scriptmark-export",
        description="Export an annotated screenplay as HTML.",
    )
    parser.add_argument("source", type=Path, help="Annotation JSON file")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Destination directory (default: next to SOURCE)",
    )
    parser.add_argument(
        "--overwrite", action="store_true", help="Replace existing output files"
    )
    parser.add_argument(
        "--inline-style",
        action="store_true",
        help="Embed the stylesheet in the HTML instead of writing a .css file",
    )
    parser.add_argument("--start", type=int, default=None, help="First character")
    parser.add_argument("--end", type=int, default=None, help="End character")
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the HTML to stdout instead of writing files",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log progress to the console"
    )
    parser.add_argument("--version", action="version", version=get_version_string())
    return parser


def _run_export(
    args: argparse.Namespace,
    con: Console,
    cancel: threading.Event | None = None,
) -> int:
    """Execute one export described by *args*. Returns the exit code."""
    from scriptmark.config import get_settings
    from scriptmark.export import export_html, write_export
    from scriptmark.export.html_export import display_name
    from scriptmark.input_pipeline import load_annotated_document

    config = get_settings().export
    if args.inline_style:
        config = config.model_copy(update={"use_inline_style": True})

    try:
        doc = load_annotated_document(args.source)
        name = escape(display_name(doc, config))

        if args.stdout:
            sys.stdout.write(
                export_html(doc, args.start, args.end, config, cancel=cancel)
            )
            return 0

        output_dir = args.output_dir or args.source.parent
        with Progress(
            TextColumn("[bold]{task.description}"),
            BarColumn(),
            TextColumn("{task.percentage:>3.0f}%"),
            console=con,
            transient=True,
        ) as progress:
            task = progress.add_task(f"Exporting {name}", total=len(doc.text))
            result = write_export(
                doc,
                output_dir,
                config=config,
                overwrite=args.overwrite,
                start=args.start,
                end=args.end,
                cancel=cancel,
                on_progress=lambda pos, _end: progress.update(task, completed=pos),
            )
    except ExportCancelledError as exc:
        con.print(f"[yellow]Cancelled:[/] {escape(str(exc))}")
        return 130
    except KeyboardInterrupt:
        con.print("[yellow]Interrupted[/]")
        return 130
    except (ExportError, FileExistsError) as exc:
        con.print(f"[red]Error:[/] {escape(str(exc))}")
        return 1

    con.print(f"[green]Exported[/] {name} -> {escape(str(result.html_path))}")
    if result.css_path is not None:
        con.print(f"[dim]Stylesheet: {escape(str(result.css_path))}[/]")
    return 0


def _cancel_on_interrupt(cancel: threading.Event) -> None:
    """Route the first Ctrl-C to *cancel*; a second one interrupts as usual."""

    def _handler(_sig: int, _frame: object) -> None:
        cancel.set()
        signal.signal(signal.SIGINT, signal.default_int_handler)

    signal.signal(signal.SIGINT, _handler)


def export_main() -> None:
    """Export an annotated screenplay as HTML.

    Usage:
        scriptmark-export <source.json> [--output-dir DIR] [--overwrite]
                          [--inline-style] [--start N] [--end N] [--stdout]
                          [--verbose]
    """
    from scriptmark.config import get_settings

    parser = _build_export_parser()
    args = parser.parse_args(sys.argv[1:])

    setup_logging(
        get_settings().app.log_dir,
        console_level=logging.INFO if args.verbose else logging.WARNING,
    )

    cancel = threading.Event()
    _cancel_on_interrupt(cancel)

    sys.exit(_run_export(args, console, cancel))


if __name__ == "__main__":
    export_main()
