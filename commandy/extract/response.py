# commandy/extract/response.py
from __future__ import annotations

import logging
from typing import List, Optional

from ..utils.schema import Suggestion
from .validator import CommandValidator
from .vocabulary import CommandVocabulary

log = logging.getLogger(__name__)

PRIMARY_CONFIDENCE = 0.8
FALLBACK_CONFIDENCE = 0.6
MAX_LINE_LEN = 300
MAX_WORD_LEN = 100
SENTENCE_END = (".", "!", "?")


class ResponseParser:
    """
    Turn raw model output into suggestions.

    The line-based pass runs first. Only when it finds nothing at all does the
    word-scanning pass run, for models that bury commands in prose. Results of
    the two passes are never mixed.
    """

    def __init__(self, validator: CommandValidator, vocabulary: Optional[CommandVocabulary] = None):
        self.validator = validator
        self.vocabulary = vocabulary or validator.vocabulary

    def parse(self, response: str, max_suggestions: int) -> List[Suggestion]:
        log.debug("Parsing response: %s", response)
        if max_suggestions <= 0:
            return []
        suggestions = self.extract_lines(response, max_suggestions)
        if not suggestions:
            suggestions = self.extract_fallback(response, max_suggestions)
        return suggestions

    def looks_like_command(self, line: str) -> bool:
        parts = line.split()
        if self.vocabulary.is_command_starter(parts[0] if parts else ""):
            return True
        # loose on purpose: any "--", or a "-" in a multi-word line
        return "--" in line or ("-" in line and len(parts) > 1)

    def extract_lines(self, response: str, max_suggestions: int) -> List[Suggestion]:
        out: List[Suggestion] = []
        # only \n separates lines; strip() drops a trailing \r
        for raw in response.split("\n"):
            line = raw.strip()
            if not line or line.startswith("#") or len(line) > MAX_LINE_LEN:
                continue
            if self.looks_like_command(line) and self.validator.validate(line):
                out.append(Suggestion(command=line, confidence=PRIMARY_CONFIDENCE))
                if len(out) >= max_suggestions:
                    break
        return out

    def extract_fallback(self, response: str, max_suggestions: int) -> List[Suggestion]:
        out: List[Suggestion] = []

        def emit(candidate: str) -> bool:
            """Append if valid; True once the cap is reached."""
            if candidate and self.validator.validate(candidate):
                out.append(Suggestion(command=candidate, confidence=FALLBACK_CONFIDENCE))
            return len(out) >= max_suggestions

        current = ""
        for word in response.split():
            if len(word) > MAX_WORD_LEN:
                continue

            if self.vocabulary.is_command_starter(word):
                if current and emit(current.strip()):
                    return out
                current = word
            elif current:
                current += " " + word
                if word.endswith(SENTENCE_END):
                    # validated with the punctuation, emitted without it
                    if self.validator.validate(current):
                        trimmed = current.rstrip("".join(SENTENCE_END)).rstrip()
                        if trimmed:
                            out.append(Suggestion(command=trimmed, confidence=FALLBACK_CONFIDENCE))
                            if len(out) >= max_suggestions:
                                return out
                    current = ""

        if current:
            emit(current.strip())
        return out
