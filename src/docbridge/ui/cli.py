from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from docbridge.app import import_documents
from docbridge.config import configure_logging, get_document_store_config
from docbridge.domain.chunk_step import DEFAULT_CHUNK_SIZE

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Write batch records into a document store")
    subparsers = parser.add_subparsers(dest="command", required=True)

    importer = subparsers.add_parser("import", help="Import JSON lines into a collection")
    importer.add_argument("path", type=Path, help="File with one JSON object per line")
    importer.add_argument(
        "--step",
        required=True,
        help="Step name used for the checkpoint (re-running resumes after it)",
    )
    importer.add_argument(
        "--collection",
        help="Target collection (default: $DOCBRIDGE_COLLECTION)",
    )
    importer.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help="Number of records committed per chunk (default: %(default)s)",
    )
    importer.add_argument("--verbose", action="store_true", help="Enable debug logging for docbridge")
    return parser.parse_args(list(argv))


def _read_json_lines(path: Path) -> Iterator[dict[str, Any]]:
    with path.open(encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as exc:
                raise ValueError(f"{path}:{line_number}: invalid JSON ({exc.msg})") from exc
            if not isinstance(record, dict):
                raise ValueError(f"{path}:{line_number}: expected a JSON object")  # noqa: TRY004
            yield record


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.chunk_size < 1:
            raise ValueError("Chunk size must be positive")  # noqa: TRY301
        if not parsed_args.path.is_file():
            raise ValueError(f"No such file: {parsed_args.path}")  # noqa: TRY301
    except ValueError:
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(package_level=logging.DEBUG if parsed_args.verbose else None)

    try:
        if parsed_args.command == "import":
            config = get_document_store_config(collection=parsed_args.collection)
            import_documents(
                _read_json_lines(parsed_args.path),
                step_name=parsed_args.step,
                config=config,
                chunk_size=parsed_args.chunk_size,
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during import")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
