"""DeepSeek Provider (1순위).

DeepSeek Chat Completions API 호출 (OpenAI 호환 형식).
繁→簡 변환처럼 짧고 결정적인 작업에 저렴하게 쓴다.

환경변수: DEEPSEEK_API_KEY
"""

import time

import httpx

from .base import BaseLlmProvider, LlmProviderError, LlmResponse, MissingCredentialError


class DeepSeekProvider(BaseLlmProvider):
    """DeepSeek API 호출."""

    provider_id = "deepseek"
    display_name = "DeepSeek"

    @property
    def _url(self) -> str:
        return str(self.config.get("deepseek_url")).rstrip("/")

    async def is_available(self) -> bool:
        """DEEPSEEK_API_KEY가 설정되어 있는지 확인."""
        return bool(self.config.get_api_key("deepseek"))

    async def call(self, prompt, *, system=None, model=None,
                   max_tokens=8192, temperature=None, **kwargs) -> LlmResponse:
        """Chat Completions API로 텍스트 생성."""
        api_key = self.config.get_api_key("deepseek")
        if not api_key:
            raise MissingCredentialError(
                self.provider_id, self.config.API_KEY_ENV["deepseek"]
            )

        selected_model = model or self.config.get("deepseek_model")

        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        payload = {
            "model": selected_model,
            "messages": messages,
            "max_tokens": max_tokens,
        }
        if temperature is not None:
            payload["temperature"] = temperature

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }

        timeout = self.config.get_float("llm_timeout", 120.0)
        t0 = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                resp = await client.post(
                    f"{self._url}/chat/completions", json=payload, headers=headers
                )
        except httpx.HTTPError as e:
            raise LlmProviderError(f"DeepSeek 연결 실패: {e}") from e
        elapsed = time.monotonic() - t0

        if resp.status_code != 200:
            raise LlmProviderError(
                f"DeepSeek 응답 {resp.status_code}: {resp.text[:200]}"
            )

        # 게이트웨이·프록시가 200과 함께 HTML을 돌려주는 경우가 있다
        try:
            data = resp.json()
        except ValueError as e:
            raise LlmProviderError(f"DeepSeek 응답 파싱 실패: {e}") from e
        if not isinstance(data, dict):
            raise LlmProviderError("DeepSeek 응답 형식이 올바르지 않습니다.")

        choices = data.get("choices") or []
        if not isinstance(choices, list) or not choices:
            raise LlmProviderError("DeepSeek 응답에 choices가 없습니다.")
        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        if not isinstance(message, dict):
            raise LlmProviderError("DeepSeek 응답에 message가 없습니다.")

        usage = data.get("usage") or {}
        return LlmResponse(
            text=message.get("content") or "",
            provider=self.provider_id,
            model=data.get("model") or selected_model,
            tokens_in=usage.get("prompt_tokens"),
            tokens_out=usage.get("completion_tokens"),
            elapsed_sec=round(elapsed, 2),
            raw={"id": data.get("id")},
        )
