# commandy/utils/shell.py
from __future__ import annotations

import os
import platform
import shutil
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .schema import ContextSnapshot


def detect_shell() -> str:
    """Name of the user's shell: $SHELL basename, then zsh/bash version vars, else 'sh'."""
    shell = os.environ.get("SHELL", "")
    if shell:
        name = shell.rstrip("/").rsplit("/", 1)[-1]
        if name:
            return name
    if os.environ.get("ZSH_VERSION"):
        return "zsh"
    if os.environ.get("BASH_VERSION"):
        return "bash"
    return "sh"


def available_tools(candidates: Iterable[str], which=shutil.which) -> List[str]:
    seen = set()
    out: List[str] = []
    for name in candidates:
        if name in seen:
            continue
        seen.add(name)
        if which(name):
            out.append(name)
    return out


def host_snapshot(
    tools: Iterable[str],
    recent_commands: Sequence[str] = (),
    content: str = "",
    which=shutil.which,
) -> ContextSnapshot:
    """Snapshot of the current host, for callers that keep no history of their own."""
    env = {
        "os": platform.system().lower() or "unknown",
        "shell": detect_shell(),
    }
    found = available_tools(tools, which=which)
    if found:
        env["available_tools"] = ",".join(found)
    return ContextSnapshot(environment=env, recent_commands=list(recent_commands), content=content)


def shell_config_file(shell: Optional[str] = None, home: Optional[Path] = None) -> Optional[str]:
    """The rc file a user of `shell` would edit, or None for shells we don't know."""
    shell = shell or detect_shell()
    home = home or Path.home()
    if shell == "zsh":
        return str(home / ".zshrc")
    if shell == "bash":
        bashrc = home / ".bashrc"
        return str(bashrc if bashrc.exists() else home / ".bash_profile")
    if shell == "fish":
        return str(home / ".config" / "fish" / "config.fish")
    return None


BASH_COMPLETION = r'''# commandy bash completion
_commandy_complete() {
    local cur prev
    COMPREPLY=()
    cur="${COMP_WORDS[COMP_CWORD]}"
    prev="${COMP_WORDS[COMP_CWORD-1]}"

    if [ "$COMP_CWORD" -eq 1 ]; then
        COMPREPLY=( $(compgen -W "suggest doctor config completion -h --help" -- "$cur") )
        return 0
    fi

    if [ "$prev" = "--binary" ]; then
        COMPREPLY=( $(compgen -f -- "$cur") )
        return 0
    fi

    case "${COMP_WORDS[1]}" in
        suggest)
            COMPREPLY=( $(compgen -W "-n --suggestions --model --max-tokens --temperature --binary -v --verbose -h --help" -- "$cur") )
            ;;
        doctor)
            COMPREPLY=( $(compgen -W "--binary -v --verbose -h --help" -- "$cur") )
            ;;
        config)
            COMPREPLY=( $(compgen -W "-v --verbose -h --help" -- "$cur") )
            ;;
        completion)
            COMPREPLY=( $(compgen -W "bash zsh fish -v --verbose -h --help" -- "$cur") )
            ;;
    esac
    return 0
}

complete -F _commandy_complete commandy
'''

ZSH_COMPLETION = r'''#compdef commandy
# commandy zsh completion
_commandy() {
    local state
    _arguments -C \
        '(-h --help)'{-h,--help}'[show help]' \
        '1: :->command' \
        '*:: :->args'

    case $state in
        command)
            local -a commands
            commands=(
                'suggest:suggest shell commands for a request'
                'doctor:check binary, model and shell setup'
                'config:print effective configuration'
                'completion:print a shell completion script'
            )
            _describe 'command' commands
            ;;
        args)
            case $words[1] in
                suggest)
                    _arguments \
                        '(-n --suggestions)'{-n,--suggestions}'[max suggestions to show]:number:' \
                        '--model[model identifier passed to llama.cpp -hf]:model:' \
                        '--max-tokens[tokens to generate]:number:' \
                        '--temperature[sampling temperature]:number:' \
                        '--binary[path to the llama.cpp binary]:file:_files' \
                        '(-v --verbose)'{-v,--verbose}'[debug logging]' \
                        '*:request:'
                    ;;
                doctor)
                    _arguments \
                        '--binary[path to the llama.cpp binary]:file:_files' \
                        '(-v --verbose)'{-v,--verbose}'[debug logging]'
                    ;;
                config)
                    _arguments '(-v --verbose)'{-v,--verbose}'[debug logging]'
                    ;;
                completion)
                    _arguments \
                        '(-v --verbose)'{-v,--verbose}'[debug logging]' \
                        '1:shell:(bash zsh fish)'
                    ;;
            esac
            ;;
    esac
}

compdef _commandy commandy
'''

FISH_COMPLETION = r'''# commandy fish completion
complete -c commandy -f

set -l commandy_cmds suggest doctor config completion
complete -c commandy -n "not __fish_seen_subcommand_from $commandy_cmds" -a suggest -d "Suggest shell commands for a request"
complete -c commandy -n "not __fish_seen_subcommand_from $commandy_cmds" -a doctor -d "Check binary, model and shell setup"
complete -c commandy -n "not __fish_seen_subcommand_from $commandy_cmds" -a config -d "Print effective configuration"
complete -c commandy -n "not __fish_seen_subcommand_from $commandy_cmds" -a completion -d "Print a shell completion script"

complete -c commandy -n "__fish_seen_subcommand_from suggest" -s n -l suggestions -x -d "Max suggestions to show"
complete -c commandy -n "__fish_seen_subcommand_from suggest" -l model -x -d "Model identifier passed to llama.cpp -hf"
complete -c commandy -n "__fish_seen_subcommand_from suggest" -l max-tokens -x -d "Tokens to generate"
complete -c commandy -n "__fish_seen_subcommand_from suggest" -l temperature -x -d "Sampling temperature"
complete -c commandy -n "__fish_seen_subcommand_from suggest doctor" -l binary -r -F -d "Path to the llama.cpp binary"
complete -c commandy -n "__fish_seen_subcommand_from $commandy_cmds" -s v -l verbose -d "Debug logging"
complete -c commandy -s h -l help -d "Show help"
complete -c commandy -n "__fish_seen_subcommand_from completion" -a "bash zsh fish"
'''

COMPLETIONS: Dict[str, str] = {
    "bash": BASH_COMPLETION,
    "zsh": ZSH_COMPLETION,
    "fish": FISH_COMPLETION,
}


def completion_script(shell: str) -> Optional[str]:
    return COMPLETIONS.get(shell)
