# commandy/errors.py
from __future__ import annotations


class CommandyError(Exception):
    """Base class for errors surfaced to the caller of the suggestion pipeline."""


class EngineNotAvailable(CommandyError):
    """The inference binary could not be found or started."""


class EngineExecutionFailed(CommandyError):
    """The inference binary ran but exited non-zero."""

    def __init__(self, stderr: str, returncode: int | None = None):
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(f"llama.cpp execution failed: {stderr.strip()}")


class EngineTimeout(EngineExecutionFailed):
    def __init__(self, timeout: float, stderr: str = ""):
        self.timeout = timeout
        super().__init__(stderr or f"timed out after {timeout:g}s")
