"""Per-call generation options."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, Union

DEFAULT_TEMPERATURE = 0.7


@dataclass(frozen=True)
class GenerationOptions:
    """Caller-supplied overrides. ``None`` means "use the provider default"."""

    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None

    def __post_init__(self) -> None:
        if self.temperature is not None and not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"temperature must be between 0 and 1, got {self.temperature}")
        if self.max_tokens is not None and self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")

    @classmethod
    def coerce(cls, value: "OptionsLike") -> "GenerationOptions":
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            known = {field.name for field in fields(cls)}
            unknown = sorted(set(value) - known)
            if unknown:
                raise TypeError(f"Unknown generation option(s): {', '.join(unknown)}")
            return cls(**value)
        raise TypeError(f"Unsupported options type: {type(value).__name__}")


@dataclass
class PromptRequest:
    prompt: str
    model: str
    temperature: float
    max_tokens: int


OptionsLike = Union[GenerationOptions, Mapping[str, Any], None]
