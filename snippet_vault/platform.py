"""Cross-platform helpers: data paths and the system clipboard.

The platform is detected once at import time.
"""

from __future__ import annotations

import base64
import platform
import shutil
import subprocess
import sys
from pathlib import Path

from .log import logger

# ---------------------------------------------------------------------------
# Platform detection (runs once at import time)
# ---------------------------------------------------------------------------

_system = platform.system()  # "Linux", "Darwin", "Windows"

try:
    _uname_release = platform.uname().release.lower()
except OSError:
    _uname_release = ""

IS_WINDOWS = _system == "Windows"
IS_MACOS = _system == "Darwin"
IS_LINUX = _system == "Linux"
IS_WSL = IS_LINUX and "microsoft" in _uname_release

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def vault_home() -> Path:
    """``~/.snippet-vault``: preferences, logs and (by default) snippets."""
    return Path.home() / ".snippet-vault"


def vault_file(name: str) -> Path:
    """Return ``~/.snippet-vault/<name>``."""
    return vault_home() / name


# ---------------------------------------------------------------------------
# Clipboard
# ---------------------------------------------------------------------------


def copy_to_clipboard(text: str, *, osc52: bool = True) -> bool:
    """Copy *text* to the system clipboard using the best available method.

    Tries in order:
    1. OSC 52 terminal escape (works over SSH, in modern terminals)
    2. Platform-native clipboard tool
    """
    if osc52:
        try:
            encoded = base64.b64encode(text.encode()).decode()
            sys.stdout.write(f"\033]52;c;{encoded}\a")
            sys.stdout.flush()
            return True
        except (OSError, ValueError):
            logger.debug("OSC 52 clipboard write failed", exc_info=True)

    if IS_WSL:
        return _clip_exe(text, "utf-16-le")
    if IS_WINDOWS:
        return _clip_exe(text, "utf-8")
    if IS_MACOS:
        return _pipe_to(["pbcopy"], text)
    return any(
        _pipe_to(cmd, text)
        for cmd in (
            ["wl-copy"],
            ["xclip", "-selection", "clipboard"],
            ["xsel", "--clipboard", "--input"],
        )
    )


def _clip_exe(text: str, encoding: str) -> bool:
    """Windows / WSL: clip.exe (WSL wants UTF-16LE)."""
    if not shutil.which("clip.exe"):
        return False
    try:
        proc = subprocess.Popen(
            ["clip.exe"],
            stdin=subprocess.PIPE,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        proc.communicate(text.encode(encoding))
        return proc.returncode == 0
    except (subprocess.SubprocessError, OSError):
        logger.debug("clip.exe clipboard copy failed", exc_info=True)
        return False


def _pipe_to(cmd: list[str], text: str) -> bool:
    if not shutil.which(cmd[0]):
        return False
    try:
        subprocess.run(cmd, input=text.encode(), check=True, timeout=2)
        return True
    except (subprocess.SubprocessError, OSError):
        logger.debug("Clipboard via %s failed", cmd[0], exc_info=True)
        return False
