# commandy/extract/validator.py
from __future__ import annotations

import logging
import shutil
from typing import Callable, Iterable, Optional

from ..utils.config import DENYLIST, PSEUDO_PATTERNS
from .vocabulary import CommandVocabulary

log = logging.getLogger(__name__)

MAX_COMMAND_LEN = 500

# name -> resolved path or None, shaped like shutil.which
Resolver = Callable[[str], Optional[str]]


class CommandValidator:
    """
    Admit or reject a literal command line. First matching rule wins:
      1. denylisted substring (logged as a safety event)
      2. empty or longer than MAX_COMMAND_LEN
      3. first token empty or a comment
      4. first token resolves on PATH, contains '/', or is a builtin -> accept
      5. pseudo-command phrase (" api ", " endpoint ", ...) -> reject
      6. anything else -> reject
    Blocks known-catastrophic patterns only; an admitted command is not proven harmless.
    """

    def __init__(
        self,
        vocabulary: Optional[CommandVocabulary] = None,
        resolver: Resolver = shutil.which,
        denylist: Optional[Iterable[str]] = None,
        pseudo_patterns: Optional[Iterable[str]] = None,
    ):
        self.vocabulary = vocabulary or CommandVocabulary()
        self.resolver = resolver
        self.denylist = tuple(DENYLIST if denylist is None else denylist)
        self.pseudo_patterns = tuple(PSEUDO_PATTERNS if pseudo_patterns is None else pseudo_patterns)

    @classmethod
    def from_config(cls, cfg: dict, vocabulary: CommandVocabulary, resolver: Resolver = shutil.which) -> "CommandValidator":
        val = cfg.get("validation") or {}
        return cls(
            vocabulary=vocabulary,
            resolver=resolver,
            denylist=val.get("denylist"),
            pseudo_patterns=val.get("pseudo_patterns"),
        )

    def validate(self, command: str) -> bool:
        for pattern in self.denylist:
            if pattern in command:
                log.warning("Rejected dangerous command: %s", command)
                return False

        if not command or len(command) > MAX_COMMAND_LEN:
            return False

        parts = command.split()
        first = parts[0] if parts else ""
        if not first or first.startswith("#"):
            return False

        if self.resolver(first):
            return True
        if "/" in first or self.vocabulary.is_shell_builtin(first):
            return True

        lowered = command.lower()
        if any(p in lowered for p in self.pseudo_patterns):
            log.debug("Rejected pseudo-command: %s", command)
            return False

        log.debug("Command %r not found in PATH", first)
        return False
