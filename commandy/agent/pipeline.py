# commandy/agent/pipeline.py
from __future__ import annotations

import logging
import shutil
from typing import Any, Dict, List

from ..extract.response import ResponseParser
from ..extract.validator import CommandValidator
from ..extract.vocabulary import CommandVocabulary
from ..providers.llamacpp import InferenceEngine, LlamaCppEngine
from ..utils.config import engine_timeout
from ..utils.prompt import build_prompt
from ..utils.schema import ContextSnapshot, ModelParameters, Suggestion

log = logging.getLogger(__name__)


class SuggestionPipeline:
    """prompt -> engine -> parser. Holds no per-request state; engine errors propagate."""

    def __init__(self, engine: InferenceEngine, parser: ResponseParser):
        self.engine = engine
        self.parser = parser

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], binary_path: str, resolver=shutil.which) -> "SuggestionPipeline":
        vocabulary = CommandVocabulary.from_config(cfg)
        validator = CommandValidator.from_config(cfg, vocabulary, resolver=resolver)
        engine = LlamaCppEngine(binary_path, timeout=engine_timeout(cfg))
        return cls(engine, ResponseParser(validator, vocabulary))

    def suggest(
        self,
        user_prompt: str,
        context: ContextSnapshot,
        params: ModelParameters,
        max_suggestions: int,
    ) -> List[Suggestion]:
        log.debug("Generating suggestions for prompt: %s", user_prompt)
        enhanced = build_prompt(user_prompt, context)
        raw = self.engine.run(enhanced, params)
        suggestions = self.parser.parse(raw, max_suggestions)[:max(max_suggestions, 0)]
        log.info("Generated %d suggestions", len(suggestions))
        return suggestions
