# commandy/cli.py
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

import yaml
from pydantic import ValidationError
from rich import print
from rich.markup import escape

from .agent.pipeline import SuggestionPipeline
from .errors import CommandyError
from .providers.llamacpp import LlamaCppEngine
from .providers.locate import locate_binary
from .utils.config import engine_timeout, load_config, model_parameters
from .utils.env import load_env
from .utils.log import setup_logging
from .utils.shell import COMPLETIONS, completion_script, detect_shell, host_snapshot


def _suggest(args: argparse.Namespace) -> int:
    cfg = load_config()
    m = cfg["model"]
    if args.model:
        m["name"] = args.model
    if args.max_tokens is not None:
        m["max_tokens"] = args.max_tokens
    if args.temperature is not None:
        m["temperature"] = args.temperature
    params = model_parameters(cfg)
    limit = args.suggestions if args.suggestions is not None else cfg["suggestions"]["max"]

    prompt = " ".join(args.prompt).strip()
    if not prompt:
        print("[red][!] empty request[/red]", file=sys.stderr)
        return 2

    binary = locate_binary(args.binary or cfg["engine"].get("binary"))
    # fail fast before spending time on generation
    LlamaCppEngine(binary, timeout=engine_timeout(cfg)).verify()
    pipeline = SuggestionPipeline.from_config(cfg, binary)
    context = host_snapshot(cfg["context"]["tools"])
    suggestions = pipeline.suggest(prompt, context, params, limit)

    if not suggestions:
        print("[yellow]No suggestions produced.[/yellow]")
        return 1
    for i, s in enumerate(suggestions, 1):
        print(f"[green][{i}][/green] {escape(s.command)}  [dim](confidence={s.confidence:.1f})[/dim]")
    return 0


def _show_config() -> int:
    sys.stdout.write(yaml.safe_dump(load_config(), sort_keys=False))
    return 0


def _completion(shell: Optional[str]) -> int:
    shell = shell or detect_shell()
    script = completion_script(shell)
    if script is None:
        raise CommandyError(f"no completion script for shell '{shell}' (choose from {', '.join(COMPLETIONS)})")
    # plain write: rich would eat the [..] in zsh specs
    sys.stdout.write(script)
    return 0


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true")

    p = argparse.ArgumentParser(prog="commandy", description="natural language -> shell commands via local llama.cpp")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("suggest", parents=[common], help="suggest shell commands for a request")
    s.add_argument("prompt", nargs="+")
    s.add_argument("-n", "--suggestions", type=int, help="max suggestions to show")
    s.add_argument("--model", help="model identifier passed to llama.cpp -hf")
    s.add_argument("--max-tokens", type=int)
    s.add_argument("--temperature", type=float)
    s.add_argument("--binary", help="path to the llama.cpp binary")

    d = sub.add_parser("doctor", parents=[common], help="check binary, model and shell setup")
    d.add_argument("--binary", help="path to the llama.cpp binary")

    sub.add_parser("config", parents=[common], help="print effective configuration")

    c = sub.add_parser("completion", parents=[common], help="print a shell completion script")
    c.add_argument("shell", nargs="?", choices=list(COMPLETIONS), help="defaults to the current shell")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    load_env()
    setup_logging(args.verbose)

    try:
        if args.cmd == "suggest":
            return _suggest(args)
        if args.cmd == "doctor":
            from .doctor import main as doctor_main
            return doctor_main(args.binary)
        if args.cmd == "config":
            return _show_config()
        if args.cmd == "completion":
            return _completion(args.shell)
    except (CommandyError, ValidationError) as e:
        print(f"[red][!] {escape(str(e))}[/red]", file=sys.stderr)
        return 2

    return 1
