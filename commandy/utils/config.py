import os, yaml, pathlib
from typing import Any, Dict, Optional

from ..errors import CommandyError
from .schema import ModelParameters

COMMAND_STARTERS = [
    "ls", "cd", "grep", "find", "docker", "kubectl", "git", "curl", "wget",
    "ssh", "sudo", "cp", "mv", "rm", "cat", "tail", "head", "ps", "kill",
    "top", "df", "du", "tar", "zip", "unzip", "chmod", "chown", "systemctl",
    "service", "apt", "yum", "npm", "yarn", "pip", "cargo", "make", "cmake",
    "rsync", "scp", "awk", "sed", "sort", "uniq", "cut", "tr", "xargs",
]
SHELL_BUILTINS = ["cd", "echo", "pwd", "export", "alias"]
DENYLIST = ["rm -rf /", "rm -rf *", "dd if=", "mkfs", "fdisk", "> /dev/"]
PSEUDO_PATTERNS = [" query ", " api ", " endpoint ", " service "]

# looked up with shutil.which when building a host context snapshot
CONTEXT_TOOLS = COMMAND_STARTERS + [
    "python3", "node", "go", "java", "brew", "dnf", "pacman", "jq", "less",
    "vim", "nano", "htop", "lsof", "netstat", "ss", "ip", "ping", "dig",
    "journalctl", "crontab", "podman", "helm", "terraform", "aws", "gcloud",
]


def _env_float(name: str, default):
    v = os.environ.get(name, "").strip()
    if not v:
        return default
    try:
        return float(v)
    except ValueError:
        raise CommandyError(f"{name} must be a number, got {v!r}") from None


def _defaults() -> Dict[str, Any]:
    return {
        "model": {
            "name": os.environ.get("COMMANDY_MODEL", "ggml-org/gemma-3-1b-it-GGUF"),
            "max_tokens": int(_env_float("COMMANDY_MAX_TOKENS", 256)),
            "temperature": _env_float("COMMANDY_TEMPERATURE", 0.1),
        },
        "engine": {
            "binary": os.environ.get("COMMANDY_BINARY", ""),
            # seconds; None waits for the engine indefinitely
            "timeout": _env_float("COMMANDY_TIMEOUT", None),
        },
        "suggestions": {"max": 3},
        "context": {"tools": list(CONTEXT_TOOLS)},
        "vocabulary": {"starters": list(COMMAND_STARTERS), "builtins": list(SHELL_BUILTINS)},
        "validation": {"denylist": list(DENYLIST), "pseudo_patterns": list(PSEUDO_PATTERNS)},
    }


def config_path() -> pathlib.Path:
    return pathlib.Path(os.path.expanduser(os.environ.get("COMMANDY_CONFIG", "~/.commandy/config.yaml")))


def deepmerge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Fill keys missing from ``a`` with values from ``b``, recursing into dicts. ``a`` wins."""
    for k, v in b.items():
        if k not in a or (a[k] is None and v is not None):
            a[k] = v
        elif isinstance(v, dict) and isinstance(a[k], dict):
            a[k] = deepmerge(a[k], v)
    return a


def load_config() -> Dict[str, Any]:
    p = config_path()
    if p.exists():
        with p.open("r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
        return deepmerge(cfg, _defaults())
    else:
        cfg = _defaults()
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", encoding="utf-8") as f:
            yaml.safe_dump(cfg, f, sort_keys=False)
        return cfg


def model_parameters(cfg: Dict[str, Any]) -> ModelParameters:
    m = cfg["model"]
    return ModelParameters(model=m["name"], max_tokens=m["max_tokens"], temperature=m["temperature"])


def engine_timeout(cfg: Dict[str, Any]) -> Optional[float]:
    """engine.timeout as positive seconds, or None to wait indefinitely."""
    t = (cfg.get("engine") or {}).get("timeout")
    if t is None or t == "":
        return None
    try:
        t = float(t)
    except (TypeError, ValueError):
        raise CommandyError(f"engine.timeout must be a number of seconds, got {t!r}") from None
    if t <= 0:
        raise CommandyError(f"engine.timeout must be positive, got {t:g}")
    return t
