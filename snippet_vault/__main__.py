"""Entry point for the Snippet Vault CLI."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .core.persistence import FileSlots, SnippetPersistence
from .core.store import SnippetStore
from .features.export import export_json, write_snippet
from .log import configure_logging, logger
from .preferences import load_preferences


def _open_store(data_dir: Path | None) -> SnippetStore:
    if data_dir is None:
        data_dir = load_preferences().storage.resolve_data_dir()
    return SnippetStore(SnippetPersistence(FileSlots(data_dir)))


def _print_list(store: SnippetStore) -> None:
    snippets = store.get_all()
    if not snippets:
        print("No snippets.")
        return
    width = max(len(s.id) for s in snippets)
    for s in snippets:
        print(f"{s.id:<{width}}  {s.lang:<8}  {s.title}")


def _export(store: SnippetStore, snippet_id: str, out: Path) -> int:
    snippet = store.get_by_id(snippet_id)
    if snippet is None:
        print(f"No snippet with id '{snippet_id}'", file=sys.stderr)
        return 1
    try:
        path = write_snippet(snippet, out)
    except OSError as exc:
        print(f"Export failed: {exc}", file=sys.stderr)
        return 1
    print(path)
    return 0


def _backup(store: SnippetStore, path: Path) -> int:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(export_json(store.get_all()), encoding="utf-8")
    except (OSError, UnicodeError) as exc:
        print(f"Backup failed: {exc}", file=sys.stderr)
        return 1
    print(f"{len(store)} snippets written to {path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run Snippet Vault."""
    parser = argparse.ArgumentParser(
        prog="snippet-vault",
        description="A personal, searchable store of code snippets",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"snippet-vault {__version__}",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory holding the snippet file (default: from preferences)",
    )
    parser.add_argument(
        "--list",
        "-l",
        action="store_true",
        help="Print all snippets and exit",
    )
    parser.add_argument(
        "--export",
        metavar="ID",
        help="Write the snippet with this id to a file and exit",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=Path.cwd(),
        help="Directory for --export (default: current directory)",
    )
    parser.add_argument(
        "--export-all",
        metavar="FILE",
        type=Path,
        help="Write the whole collection as a JSON backup to FILE and exit",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write debug logs to this file (or set SNIPPET_VAULT_LOG)",
    )

    args = parser.parse_args(argv)

    if args.log_file is not None:
        configure_logging(args.log_file, "DEBUG")
    else:
        configure_logging()

    if args.list or args.export or args.export_all:
        store = _open_store(args.data_dir)
        if args.export_all:
            return _backup(store, args.export_all)
        if args.export:
            return _export(store, args.export, args.out)
        _print_list(store)
        return 0

    try:
        from .app import run_app

        run_app(data_dir=args.data_dir)
    except KeyboardInterrupt:
        pass
    except Exception:
        logger.debug("Fatal error in snippet-vault", exc_info=True)
        import traceback

        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
