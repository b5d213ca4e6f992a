from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional


class ContextSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    environment: Dict[str, str] = {}
    recent_commands: List[str] = []
    content: str = ""


class ModelParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: str = Field(min_length=1)
    max_tokens: int = Field(gt=0)
    temperature: float = Field(ge=0.0)


class Suggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    command: str = Field(min_length=1, max_length=500)
    explanation: Optional[str] = None
    confidence: float = Field(ge=0.0, le=1.0)
