"""CLI entry point: python -m eventimporter --url URL --input FILE [options]"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from eventimporter import settings
from eventimporter.importer import PageImportError, transform_html
from eventimporter.items import ImportRules

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eventimporter",
        description=(
            "Rebuild crawled pages into importable document markup.\n"
            "Event pages get hero, disclaimer and metadata blocks; other pages "
            "pass through unchanged."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--url", default=None, metavar="URL",
                        help="Original URL of the page in --input")
    parser.add_argument("--input", default=None, metavar="FILE",
                        help="Saved HTML of the page ('-' reads stdin)")
    parser.add_argument("--manifest", default=None, metavar="FILE",
                        help='JSON Lines file of {"url": ..., "input": ...} records')
    parser.add_argument("--out", default=settings.OUTPUT_DIR, metavar="DIR",
                        help=f"Output directory (default: {settings.OUTPUT_DIR})")
    parser.add_argument("--params", default=None, metavar="JSON",
                        help="JSON object of import rule overrides")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help=f"Logging level (default: {settings.LOG_LEVEL})")
    parser.add_argument("--quiet", action="store_true", default=False,
                        help="Do not print the summary table")
    return parser


def _validate_args(args: argparse.Namespace) -> str | None:
    """Return an error message if the page source flags are inconsistent."""
    if args.manifest and (args.url or args.input):
        return "--manifest cannot be combined with --url/--input"
    if not args.manifest and not (args.url and args.input):
        return "either --manifest or both --url and --input are required"
    return None


def _parse_params(raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    params = json.loads(raw)
    if not isinstance(params, dict):
        raise ValueError("--params must be a JSON object")
    # Fail fast on bad overrides instead of once per page.
    ImportRules.from_params(params)
    return params


def _load_manifest(path: Path) -> list[dict[str, str]]:
    """Read manifest records; relative inputs resolve against the manifest."""
    records: list[dict[str, str]] = []
    for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), 1):
        if not line.strip():
            continue
        record = json.loads(line)
        if not isinstance(record, dict) or not record.get("url") or not record.get("input"):
            raise ValueError(f"{path}:{lineno}: records need 'url' and 'input'")
        source = Path(record["input"])
        if not source.is_absolute():
            source = path.parent / source
        records.append({"url": record["url"], "input": str(source)})
    return records


def _read_source(source: str) -> bytes:
    # Raw bytes: BeautifulSoup sniffs the page encoding itself.
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def _output_file(out_dir: Path, doc_path: str) -> Path:
    """Map a document path to ``<out>/<path>.plain.html``."""
    rel = doc_path.lstrip("/")
    if not rel or rel.endswith("/"):
        rel += "index"
    return out_dir / f"{rel}{settings.OUTPUT_SUFFIX}"


def _import_one(url: str, source: str, out_dir: Path, params: dict[str, Any]) -> dict[str, Any]:
    result = transform_html(_read_source(source), url, params)
    target = _output_file(out_dir, result.path)
    if not target.resolve().is_relative_to(out_dir):
        raise PageImportError(f"Document path {result.path!r} escapes the output directory", url=url)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(result.to_html(), encoding="utf-8")
    logger.info("Wrote %s", target)
    return {
        "url": url,
        "path": result.path,
        "file": str(target),
        "is_event": result.is_event,
        "info": result.info,
    }


def _print_summary(entries: list[dict[str, Any]]) -> None:
    from rich import box
    from rich.console import Console
    from rich.table import Table

    table = Table(box=box.SIMPLE_HEAVY, title="Import summary")
    table.add_column("Path", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Title / error", overflow="fold")

    for entry in entries:
        if "error" in entry:
            table.add_row(entry.get("path") or entry["url"], "[red]failed[/red]", entry["error"])
            continue
        kind = "[green]event[/green]" if entry["is_event"] else "default"
        table.add_row(entry["path"], kind, entry["info"].get("title", ""))

    Console().print(table)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format=settings.LOG_FORMAT)

    arg_err = _validate_args(args)
    if arg_err:
        print(f"ERROR: {arg_err}", file=sys.stderr)
        return 1

    try:
        params = _parse_params(args.params)
    except (ValueError, ValidationError) as exc:
        print(f"ERROR: invalid --params: {exc}", file=sys.stderr)
        return 1

    if args.manifest:
        try:
            pages = _load_manifest(Path(args.manifest))
        except (OSError, ValueError) as exc:
            print(f"ERROR: could not read manifest: {exc}", file=sys.stderr)
            return 1
    else:
        pages = [{"url": args.url, "input": args.input}]

    out_dir = Path(args.out).resolve()
    out_dir.mkdir(parents=True, exist_ok=True)

    entries: list[dict[str, Any]] = []
    failed = 0
    for page in pages:
        try:
            entries.append(_import_one(page["url"], page["input"], out_dir, params))
        except (OSError, PageImportError) as exc:
            logger.exception("Import failed for %s", page["url"])
            entries.append({"url": page["url"], "error": str(exc)})
            failed += 1

    (out_dir / "index.json").write_text(
        json.dumps(entries, indent=2, ensure_ascii=False), encoding="utf-8",
    )

    if not args.quiet:
        _print_summary(entries)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
