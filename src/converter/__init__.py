"""繁→簡 자형 변환.

모듈 구성:
  base.py    — ScriptConverter 인터페이스, ConversionFailedError
  local.py   — OpenCC 규칙 기반 변환
  remote.py  — LLM 변환 (LlmRouter 경유)
"""

from __future__ import annotations

from typing import Optional

from .base import ConversionFailedError, ScriptConverter

CONVERT_METHODS = ("local", "llm")


def get_converter(method: str, router=None, provider: Optional[str] = None) -> ScriptConverter:
    """변환 방식 이름으로 변환기를 만든다.

    입력:
        method — "local" | "llm"
        router — LLM 변환에 쓸 LlmRouter (None이면 기본 설정으로 생성)
        provider — LLM 변환에서 강제할 provider
    에러: ValueError — 알 수 없는 방식
    """
    if method == "local":
        from .local import LocalConverter
        return LocalConverter()
    if method == "llm":
        from llm.router import LlmRouter
        from .remote import LlmConverter
        return LlmConverter(router or LlmRouter(), provider=provider)
    raise ValueError(
        f"알 수 없는 변환 방식입니다: {method}\n"
        f"지원: {', '.join(CONVERT_METHODS)}"
    )


__all__ = [
    "CONVERT_METHODS",
    "ConversionFailedError",
    "ScriptConverter",
    "get_converter",
]
