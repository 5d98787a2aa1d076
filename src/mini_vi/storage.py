"""Plain-text file loading and saving with recoverable results."""

from __future__ import annotations

import os
import stat
import tempfile
from dataclasses import dataclass
from typing import Optional, Tuple

from mini_vi.buffer.document import split_lines
from mini_vi.runtime import telemetry


@dataclass(frozen=True, slots=True)
class FileResult:
    """Outcome of a load or save; ``error`` is set when ``ok`` is false.

    ``missing`` marks a load that failed only because the file does not
    exist yet.
    """

    path: str
    ok: bool
    lines: Tuple[str, ...] = ("",)
    error: Optional[str] = None
    missing: bool = False

    @property
    def line_count(self) -> int:
        return len(self.lines)


def _reason(exc: Exception) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)


def load_lines(path: str) -> FileResult:
    """Read ``path`` as UTF-8 text split into lines.

    Only ``\\n`` and ``\\r\\n`` end a line; a lone ``\\r`` stays in the text.
    """

    try:
        with open(path, encoding="utf-8", newline="") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        telemetry.record_event(
            "file.load",
            level="warning",
            data={"path": path, "ok": False, "reason": _reason(exc)},
        )
        return FileResult(
            path=path,
            ok=False,
            error=_reason(exc),
            missing=isinstance(exc, FileNotFoundError),
        )

    lines = tuple(split_lines(text))
    telemetry.record_event(
        "file.load", data={"path": path, "ok": True, "lines": len(lines)}
    )
    return FileResult(path=path, ok=True, lines=lines)


def _new_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def save_text(path: str, text: str) -> FileResult:
    """Write ``text`` to ``path`` all-or-nothing.

    The text goes to a temporary file beside the target which then replaces
    it, so a failed write leaves the previous content untouched. Symlinks
    are followed and the target's permission bits are kept.
    """

    target = os.path.realpath(path)
    try:
        mode = stat.S_IMODE(os.stat(target).st_mode)
    except OSError:
        mode = _new_file_mode()

    temp_path: Optional[str] = None
    try:
        fd, temp_path = tempfile.mkstemp(
            dir=os.path.dirname(target),
            prefix=f".{os.path.basename(target)}.",
            suffix=".tmp",
        )
        with open(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(temp_path, mode)
        os.replace(temp_path, target)
        temp_path = None
    except (OSError, UnicodeEncodeError) as exc:
        telemetry.record_event(
            "file.save",
            level="error",
            data={"path": path, "ok": False, "reason": _reason(exc)},
        )
        return FileResult(path=path, ok=False, error=_reason(exc))
    finally:
        if temp_path is not None:
            try:
                os.unlink(temp_path)
            except FileNotFoundError:
                pass

    lines = tuple(text.split("\n"))
    telemetry.record_event(
        "file.save", data={"path": path, "ok": True, "lines": len(lines)}
    )
    return FileResult(path=path, ok=True, lines=lines)


__all__ = ["FileResult", "load_lines", "save_text"]
