"""LLM 기반 원격 변환.

OpenCC 사전에 없는 이체자·고어 표현을 문맥으로 처리하고 싶을 때 쓴다.
LlmRouter를 거치므로 provider 선택·폴백은 라우터 규칙을 따른다.
"""

from __future__ import annotations

import logging
from typing import Optional

from llm.providers.base import (
    LlmProviderError,
    LlmUnavailableError,
    MissingCredentialError,
)
from llm.router import LlmRouter

from .base import ConversionFailedError, ScriptConverter

logger = logging.getLogger(__name__)


CONVERT_SYSTEM_PROMPT = (
    "你是一个专业的繁简转换工具。请将用户输入的繁体中文文本转换为简体中文。"
    "直接输出转换后的文本，不要包含任何解释、前缀或后缀。保持原有标点和换行格式不变。"
)


class LlmConverter(ScriptConverter):
    """LLM으로 繁→簡 변환.

    provider:
        None 또는 "auto" — 라우터 폴백 순서대로 시도
        "deepseek" 등 — 해당 provider만 사용 (API 키가 없으면 MissingCredentialError)
    """

    method = "llm"

    def __init__(self, router: LlmRouter, provider: Optional[str] = None):
        self.router = router
        if provider is None:
            provider = router.config.get("convert_provider")
        self.provider = None if provider in (None, "", "auto") else provider

    async def convert(self, text: str) -> str:
        """변환된 텍스트를 반환한다.

        에러:
            MissingCredentialError — 지정 provider의 API 키 없음 (그대로 전달)
            ConversionFailedError — 네트워크·provider 실패, 빈 응답
        """
        if not text.strip():
            return text

        try:
            response = await self.router.call(
                text,
                system=CONVERT_SYSTEM_PROMPT,
                force_provider=self.provider,
                temperature=0.1,
            )
        except MissingCredentialError:
            raise
        except (LlmProviderError, LlmUnavailableError) as e:
            raise ConversionFailedError(str(e)) from e

        if not response.text:
            raise ConversionFailedError(f"{response.provider}가 빈 응답을 반환했습니다.")

        logger.info(
            "LLM 변환 완료: %s/%s, %d자 → %d자 (%.1fs)",
            response.provider, response.model, len(text), len(response.text),
            response.elapsed_sec or 0.0,
        )
        return response.text
