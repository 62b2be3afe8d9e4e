from .base import (
    BaseLlmProvider,
    LlmProviderError,
    LlmResponse,
    LlmUnavailableError,
    MissingCredentialError,
)
from .deepseek import DeepSeekProvider
from .ollama import OllamaProvider
