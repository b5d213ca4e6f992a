# commandy/doctor.py
from __future__ import annotations

import os
from typing import Optional

from rich import print

from .errors import CommandyError
from .providers.llamacpp import verify
from .providers.locate import locate_binary
from .utils.config import config_path, engine_timeout, load_config
from .utils.env import load_env
from .utils.shell import detect_shell, shell_config_file


def main(binary: Optional[str] = None) -> int:
    load_env()
    cfg = load_config()
    model = cfg["model"]
    engine = cfg["engine"]
    timeout = engine_timeout(cfg)

    print(f"config={config_path()}")
    print(f"model={model['name']}")
    print(f"max_tokens={model['max_tokens']}")
    print(f"temperature={model['temperature']}")
    print(f"timeout={timeout}")
    shell = detect_shell()
    print(f"shell={shell}")
    print(f"shell_config={shell_config_file(shell) or 'unknown'}")
    print(f"COMMANDY_BINARY set? {'yes' if os.getenv('COMMANDY_BINARY') else 'no'}")

    try:
        path = locate_binary(binary or engine.get("binary"))
        print(f"binary={path}")
        print(f"version={verify(path, timeout=timeout)}")
    except CommandyError as e:
        print(f"[red][!] {e}[/red]")
        return 1
    return 0
