# commandy/extract/vocabulary.py
from __future__ import annotations

import string
from typing import Iterable, Optional

from ..utils.config import COMMAND_STARTERS, SHELL_BUILTINS


class CommandVocabulary:
    """
    Coarse "is this a command?" oracle backed by two fixed word sets.
    Unknown executables are simply not starters; the validator does the real PATH check.
    """

    def __init__(self, starters: Optional[Iterable[str]] = None, builtins: Optional[Iterable[str]] = None):
        self.starters = frozenset(COMMAND_STARTERS if starters is None else starters)
        self.builtins = frozenset(SHELL_BUILTINS if builtins is None else builtins)

    @classmethod
    def from_config(cls, cfg: dict) -> "CommandVocabulary":
        voc = cfg.get("vocabulary") or {}
        return cls(starters=voc.get("starters"), builtins=voc.get("builtins"))

    def is_command_starter(self, token: str) -> bool:
        return token.lstrip(string.punctuation) in self.starters

    def is_shell_builtin(self, token: str) -> bool:
        return token in self.builtins
