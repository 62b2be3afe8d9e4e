"""LLM Router — 다단 폴백 + provider 선택.

모든 LLM 호출의 단일 진입점.
provider를 직접 호출하지 말고, 항상 이 Router를 통해 호출한다.

사용법:
    from llm.config import LlmConfig
    from llm.router import LlmRouter

    router = LlmRouter(LlmConfig())

    # 자동 폴백 (DeepSeek → Ollama)
    response = await router.call("變換해줘")

    # 특정 provider 지정
    response = await router.call("變換해줘", force_provider="ollama")
"""

import asyncio
import logging
import time
from typing import Optional

from .config import LlmConfig
from .providers.base import (
    BaseLlmProvider,
    LlmProviderError,
    LlmResponse,
    LlmUnavailableError,
    MissingCredentialError,
)
from .providers.deepseek import DeepSeekProvider
from .providers.ollama import OllamaProvider

_logger = logging.getLogger(__name__)


class LlmRouter:
    """LLM 호출 단일 진입점."""

    # is_available() 캐시 TTL (초).
    # Ollama(HTTP 3s) 같은 느린 체크를 매 호출마다 반복하지 않기 위해 캐시한다.
    _AVAIL_TTL_OK = 120    # 사용 가능 → 2분간 재확인 안 함
    _AVAIL_TTL_FAIL = 30   # 사용 불가 → 30초간 재확인 안 함

    def __init__(self, config: Optional[LlmConfig] = None):
        self.config = config or LlmConfig()

        # 우선순위 순서
        self.providers: list[BaseLlmProvider] = [
            DeepSeekProvider(self.config),    # 1순위: API 키 필요
            OllamaProvider(self.config),      # 2순위: 로컬, 무료
        ]

        # is_available() 캐시: {provider_id: (결과, 타임스탬프)}
        self._avail_cache: dict[str, tuple[bool, float]] = {}

    async def is_available_cached(self, provider: BaseLlmProvider) -> bool:
        """is_available() 결과를 캐싱하여 반환."""
        pid = provider.provider_id
        cached = self._avail_cache.get(pid)
        if cached:
            ok, ts = cached
            ttl = self._AVAIL_TTL_OK if ok else self._AVAIL_TTL_FAIL
            if time.monotonic() - ts < ttl:
                return ok

        try:
            ok = await provider.is_available()
        except Exception as e:
            _logger.warning("provider 가용성 확인 실패 (%s): %s", pid, e)
            ok = False
        self._avail_cache[pid] = (ok, time.monotonic())
        return ok

    def invalidate_cache(self, provider_id: Optional[str] = None):
        """가용성 캐시를 무효화한다. 호출이 실패했을 때 부른다.

        provider_id를 생략하면 전체를 비운다.
        """
        if provider_id:
            self._avail_cache.pop(provider_id, None)
        else:
            self._avail_cache.clear()

    def _get_provider(self, provider_id: str) -> Optional[BaseLlmProvider]:
        """provider_id로 provider 객체를 찾는다."""
        for p in self.providers:
            if p.provider_id == provider_id:
                return p
        return None

    async def call(
        self,
        prompt: str,
        *,
        system: Optional[str] = None,
        force_provider: Optional[str] = None,
        max_tokens: int = 8192,
        temperature: Optional[float] = None,
        **kwargs,
    ) -> LlmResponse:
        """LLM 호출. 자동 폴백 또는 명시적 provider 선택.

        에러:
            MissingCredentialError — 지정한 provider의 API 키가 없음
            LlmProviderError — 지정한 provider를 찾을 수 없거나 호출 실패
            LlmUnavailableError — 자동 폴백에서 모든 provider 실패
        """
        # ── 명시적 선택 모드 ──
        if force_provider:
            provider = self._get_provider(force_provider)
            if not provider:
                available = [p.provider_id for p in self.providers]
                raise LlmProviderError(
                    f"provider '{force_provider}'을(를) 찾을 수 없습니다. "
                    f"사용 가능: {available}"
                )
            if not await provider.is_available():
                env_name = self.config.API_KEY_ENV.get(force_provider)
                if env_name and not self.config.get_api_key(force_provider):
                    raise MissingCredentialError(force_provider, env_name)
                raise LlmProviderError(
                    f"provider '{force_provider}'이(가) 현재 사용할 수 없습니다."
                )

            return await provider.call(
                prompt, system=system, max_tokens=max_tokens,
                temperature=temperature, **kwargs,
            )

        # ── 자동 폴백 모드 ──
        # 가용성을 병렬로 사전 체크 (캐시 활용)
        avail_results = await asyncio.gather(
            *[self.is_available_cached(p) for p in self.providers],
            return_exceptions=True,
        )

        errors = []
        for provider, ok in zip(self.providers, avail_results):
            if ok is not True:
                continue
            try:
                return await provider.call(
                    prompt, system=system, max_tokens=max_tokens,
                    temperature=temperature, **kwargs,
                )
            except LlmProviderError as e:
                # 호출 실패 시 캐시 무효화 (다음에 재체크)
                self.invalidate_cache(provider.provider_id)
                _logger.warning("provider 호출 실패, 다음으로 폴백: %s", e)
                errors.append(f"{provider.provider_id}: {e}")

        raise LlmUnavailableError(
            "사용 가능한 LLM provider가 없습니다.\n"
            "확인 사항:\n"
            "  1. DeepSeek: .env에 DEEPSEEK_API_KEY\n"
            "  2. Ollama: ollama serve\n\n"
            "시도 결과:\n" + "\n".join(f"  - {e}" for e in errors)
        )

    async def get_status(self) -> dict:
        """각 provider의 가용 상태. GET /api/llm/status에서 사용."""
        status = {}
        for provider in self.providers:
            try:
                avail = await provider.is_available()
                status[provider.provider_id] = {
                    "available": avail,
                    "display_name": provider.display_name,
                }
            except Exception as e:
                status[provider.provider_id] = {
                    "available": False,
                    "error": str(e),
                }
        return status
