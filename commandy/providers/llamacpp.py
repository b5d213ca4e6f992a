# commandy/providers/llamacpp.py
from __future__ import annotations

import logging
import subprocess
from typing import List, Optional, Protocol

from ..errors import EngineExecutionFailed, EngineNotAvailable, EngineTimeout
from ..utils.schema import ModelParameters

log = logging.getLogger(__name__)


class InferenceEngine(Protocol):
    def run(self, prompt: str, params: ModelParameters) -> str: ...


def _decode(b: Optional[bytes]) -> str:
    # llama.cpp output is not guaranteed to be clean UTF-8
    return (b or b"").decode("utf-8", errors="replace")


class LlamaCppEngine:
    """
    Runs a local llama.cpp CLI binary once per request and returns what it printed.
    `timeout` is in seconds; None blocks until the process exits.
    """

    def __init__(self, binary_path: str, timeout: Optional[float] = None):
        self.binary_path = str(binary_path)
        self.timeout = timeout

    def build_args(self, prompt: str, params: ModelParameters) -> List[str]:
        return [
            self.binary_path,
            "-hf", params.model,
            "-c", "0",              # full context window
            "-fa",                  # flash attention
            "-p", prompt,
            "-n", str(params.max_tokens),
            "--temp", str(params.temperature),
            "--no-display-prompt",
        ]

    def _exec(self, args: List[str]) -> str:
        try:
            cp = subprocess.run(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise EngineTimeout(self.timeout, _decode(e.stderr)) from e
        except OSError as e:
            # missing, not executable, wrong format...
            raise EngineNotAvailable(f"cannot start {self.binary_path}: {e}") from e

        if cp.returncode != 0:
            raise EngineExecutionFailed(_decode(cp.stderr), returncode=cp.returncode)
        return _decode(cp.stdout)

    def run(self, prompt: str, params: ModelParameters) -> str:
        log.debug("Executing llama.cpp with prompt length: %d", len(prompt))
        out = self._exec(self.build_args(prompt, params)).strip()
        log.debug("Generated response length: %d", len(out))
        return out

    def verify(self) -> str:
        """Return the engine's version line, failing like `run` does."""
        log.debug("Verifying llama.cpp binary at %s", self.binary_path)
        lines = self._exec([self.binary_path, "--version"]).splitlines()
        version = lines[0].strip() if lines else ""
        version = version or "unknown version"
        log.info("llama.cpp binary verified: %s", version)
        return version


def verify(binary_path: str, timeout: Optional[float] = None) -> str:
    return LlamaCppEngine(binary_path, timeout=timeout).verify()
