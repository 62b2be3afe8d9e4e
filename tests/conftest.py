"""공용 fixture — 외부 API 없이 LLM 경로를 테스트하기 위한 mock provider."""

from typing import Optional

import httpx
import pytest

from llm.config import LlmConfig
from llm.providers.base import BaseLlmProvider, LlmProviderError, LlmResponse
from llm.router import LlmRouter


class MockProvider(BaseLlmProvider):
    """테스트용 모의 provider.

    is_available/call의 동작을 외부에서 제어 가능.
    마지막 호출 인자는 last_call에 남는다.
    """

    def __init__(
        self,
        config,
        provider_id: str = "mock",
        display_name: str = "Mock",
        available: bool = True,
        response_text: str = "mock response",
        should_error: bool = False,
    ):
        super().__init__(config)
        self.provider_id = provider_id
        self.display_name = display_name
        self._available = available
        self._response_text = response_text
        self._should_error = should_error
        self.call_count = 0
        self.last_call: dict = {}

    async def is_available(self) -> bool:
        return self._available

    async def call(
        self,
        prompt: str,
        *,
        system: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = 8192,
        temperature: Optional[float] = None,
        **kwargs,
    ) -> LlmResponse:
        if self._should_error:
            raise LlmProviderError(f"{self.provider_id} 에러")
        self.call_count += 1
        self.last_call = {
            "prompt": prompt,
            "system": system,
            "model": model,
            "temperature": temperature,
        }
        return LlmResponse(
            text=self._response_text,
            provider=self.provider_id,
            model=model or "mock-model",
            tokens_in=10,
            tokens_out=20,
            elapsed_sec=0.1,
        )


@pytest.fixture
def no_api_key(monkeypatch):
    """실행 환경에 DEEPSEEK_API_KEY가 있어도 없는 것으로 만든다."""
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)


@pytest.fixture
def make_router(tmp_path):
    """MockProvider 목록으로 router를 구성하는 팩토리.

    사용법:
        router, config = make_router([("first", {"available": False}), ("second", {})])
    """

    def _make(specs):
        config = LlmConfig(env_file=tmp_path / ".env")
        router = LlmRouter(config)
        router.providers = [
            MockProvider(config, provider_id=pid, **opts) for pid, opts in specs
        ]
        return router, config

    return _make


@pytest.fixture
def mock_http(monkeypatch):
    """provider가 만드는 httpx.AsyncClient를 MockTransport로 바꾼다.

    사용법:
        mock_http(lambda request: httpx.Response(200, text="<html>gateway</html>"))
    """
    real_client = httpx.AsyncClient

    def _install(handler):
        def _client(*args, **kwargs):
            kwargs["transport"] = httpx.MockTransport(handler)
            return real_client(*args, **kwargs)

        monkeypatch.setattr(httpx, "AsyncClient", _client)

    return _install
