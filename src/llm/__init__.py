"""LLM 호출 모듈. 모든 LLM 호출은 LlmRouter를 통해야 한다."""

from .config import LlmConfig
from .providers.base import (
    LlmProviderError,
    LlmResponse,
    LlmUnavailableError,
    MissingCredentialError,
)
from .router import LlmRouter

__all__ = [
    "LlmRouter",
    "LlmConfig",
    "LlmResponse",
    "LlmProviderError",
    "LlmUnavailableError",
    "MissingCredentialError",
]
