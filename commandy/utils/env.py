# commandy/utils/env.py
import os
import pathlib
from typing import Dict, Optional, Tuple

QUOTES = ("'", '"')


def _parse_line(raw: str) -> Optional[Tuple[str, str]]:
    line = raw.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    if line.startswith("export "):
        line = line[len("export "):]
    key, value = (part.strip() for part in line.split("=", 1))
    if not key:
        return None
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTES:
        value = value[1:-1]
    return key, value


def load_env(path: str = "~/.commandy/.env") -> Dict[str, str]:
    """
    Read KEY=VALUE settings (COMMANDY_MODEL, COMMANDY_BINARY, ...) from a dotenv file.

    Values already exported in the shell take precedence; the file only fills gaps.
    Accepts `export KEY=value` lines and single- or double-quoted values, skips comments
    and anything without an "=". Returns every pair parsed from the file.
    """
    p = pathlib.Path(os.path.expanduser(path))
    if not p.exists():
        return {}

    pairs = (_parse_line(raw) for raw in p.read_text(encoding="utf-8", errors="ignore").splitlines())
    env: Dict[str, str] = dict(pair for pair in pairs if pair)
    for key, value in env.items():
        os.environ.setdefault(key, value)
    return env
