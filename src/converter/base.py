"""繁→簡 자형 변환기 공통 인터페이스.

대조 엔진은 변환기를 직접 부르지 않는다.
CLI·API가 대조 전에 변환하고, 엔진은 변환된 텍스트를 일반 입력으로 받는다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ConversionFailedError(Exception):
    """변환 실패. reason에 원인을 담는다."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"繁简转换失败: {reason}")


class ScriptConverter(ABC):
    """자형 변환기.

    로컬 변환은 즉시 끝나지만, 원격(LLM) 변환과 같은 방식으로 부를 수 있도록
    convert()는 코루틴이다.
    """

    method: str = ""

    @abstractmethod
    async def convert(self, text: str) -> str:
        """번체 텍스트를 간체로 바꾼다."""
        ...
