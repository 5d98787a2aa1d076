"""Command-line entry point: ``mini-vi [FILE]``."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from mini_vi import __version__
from mini_vi.adapters.textual.app import MiniViApp
from mini_vi.runtime import telemetry
from mini_vi.runtime.loop import Editor
from mini_vi.runtime.settings import load_settings


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mini-vi", description="Minimal modal text editor."
    )
    parser.add_argument("file", nargs="?", help="File to open at startup")
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write telemetry to this file (overrides MINI_VI_LOG_FILE)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Minimum telemetry level (overrides MINI_VI_LOG_LEVEL)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    settings = load_settings().with_overrides(
        log_level=args.log_level, log_file=args.log_file
    )
    telemetry.configure(settings=settings)

    editor = Editor.open(args.file, settings=settings)
    app = MiniViApp(editor)
    app.run()
    return app.return_code or 0


if __name__ == "__main__":  # pragma: no cover - manual entry
    sys.exit(main())
