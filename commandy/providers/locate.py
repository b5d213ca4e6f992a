# commandy/providers/locate.py
from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import List, Optional

from ..errors import EngineNotAvailable

BINARY_NAME = "llama-cpp"
SYSTEM_PATHS = [
    "/usr/local/bin/llama-cpp",
    "/usr/bin/llama-cpp",
    "/opt/llama-cpp/bin/llama-cpp",
]


def _candidates(home: Path) -> List[Path]:
    local = home / ".commandy" / "bin"
    return [local / BINARY_NAME, local / f"{BINARY_NAME}.exe"]


def locate_binary(explicit: Optional[str] = None, home: Optional[Path] = None, which=shutil.which) -> str:
    """
    Resolve the llama.cpp binary:
      1) explicit path (CLI flag / config / COMMANDY_BINARY)
      2) ~/.commandy/bin/llama-cpp[.exe]
      3) llama-cpp on PATH
      4) common system locations
    Raises EngineNotAvailable when nothing is found.
    """
    explicit = (explicit or os.environ.get("COMMANDY_BINARY") or "").strip()
    if explicit:
        p = Path(os.path.expanduser(explicit))
        if p.is_file():
            return str(p)
        raise EngineNotAvailable(f"llama.cpp binary not found at {p}")

    for p in _candidates(home or Path.home()):
        if p.exists():
            return str(p)

    on_path = which(BINARY_NAME)
    if on_path:
        return on_path

    for s in SYSTEM_PATHS:
        if Path(s).exists():
            return s

    raise EngineNotAvailable(
        "llama.cpp binary not found. Install it to ~/.commandy/bin/llama-cpp or put llama-cpp on PATH."
    )
