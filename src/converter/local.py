"""규칙 기반 로컬 변환 (OpenCC).

기본 설정 hk2s: 홍콩 번체 → 중국 대륙 간체.
대만·홍콩 번체 대부분을 무리 없이 처리한다.
"""

from __future__ import annotations

import logging

from opencc import OpenCC

from .base import ConversionFailedError, ScriptConverter

logger = logging.getLogger(__name__)


class LocalConverter(ScriptConverter):
    """OpenCC 사전 기반 변환. 네트워크를 쓰지 않는다."""

    method = "local"

    def __init__(self, config: str = "hk2s"):
        try:
            self._cc = OpenCC(config)
        except Exception as e:
            raise ConversionFailedError(f"OpenCC 설정을 불러올 수 없습니다: {config} ({e})") from e
        self.config = config

    def convert_sync(self, text: str) -> str:
        """동기 변환. CLI 등 이벤트 루프 밖에서 바로 쓸 때."""
        converted = self._cc.convert(text)
        logger.info("로컬 변환 완료 (%s): %d자", self.config, len(text))
        return converted

    async def convert(self, text: str) -> str:
        return self.convert_sync(text)
