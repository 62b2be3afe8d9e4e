"""Ollama Provider (2순위).

Ollama 로컬 서버(localhost:11434)를 통한 LLM 호출.
API 키 없이 쓸 수 있는 폴백.

호출 흐름:
    Python → HTTP POST localhost:11434/api/generate
          → Ollama → 로컬(또는 클라우드 프록시) 모델
          → 결과 반환
"""

import time

import httpx

from .base import BaseLlmProvider, LlmProviderError, LlmResponse


class OllamaProvider(BaseLlmProvider):
    """Ollama 로컬 서버를 통한 LLM 호출."""

    provider_id = "ollama"
    display_name = "Ollama"

    @property
    def _url(self) -> str:
        return str(self.config.get("ollama_url", "http://localhost:11434")).rstrip("/")

    async def is_available(self) -> bool:
        """Ollama 서버가 실행 중인지 확인."""
        try:
            async with httpx.AsyncClient(timeout=3.0) as client:
                resp = await client.get(f"{self._url}/api/tags")
                return resp.status_code == 200
        except (httpx.ConnectError, httpx.TimeoutException, OSError):
            return False

    async def call(self, prompt, *, system=None, model=None,
                   max_tokens=8192, temperature=None, **kwargs) -> LlmResponse:
        """Ollama API로 텍스트 생성."""
        selected_model = model or self.config.get("ollama_model")

        # num_predict: Ollama의 최대 출력 토큰.
        # 없으면 모델 기본값(128~256)이 적용되어 긴 본문 변환이 중간에 잘린다.
        options = {"num_predict": max_tokens}
        if temperature is not None:
            options["temperature"] = temperature

        payload = {
            "model": selected_model,
            "prompt": prompt,
            "stream": False,
            "options": options,
        }
        if system:
            payload["system"] = system

        timeout = self.config.get_float("llm_timeout", 120.0)
        t0 = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                resp = await client.post(
                    f"{self._url}/api/generate", json=payload
                )
        except httpx.HTTPError as e:
            raise LlmProviderError(f"Ollama 연결 실패: {e}") from e
        elapsed = time.monotonic() - t0

        if resp.status_code != 200:
            raise LlmProviderError(
                f"Ollama 응답 {resp.status_code}: {resp.text[:200]}"
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise LlmProviderError(f"Ollama 응답 파싱 실패: {e}") from e
        if not isinstance(data, dict):
            raise LlmProviderError("Ollama 응답 형식이 올바르지 않습니다.")

        if data.get("error"):
            raise LlmProviderError(f"Ollama 에러: {data['error']}")

        return LlmResponse(
            text=data.get("response", ""),
            provider=self.provider_id,
            model=selected_model,
            tokens_in=data.get("prompt_eval_count"),
            tokens_out=data.get("eval_count"),
            elapsed_sec=round(elapsed, 2),
            raw=data,
        )
