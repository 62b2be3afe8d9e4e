"""라우터 공통 상태 및 헬퍼.

모든 라우터가 이 모듈에서 get_llm_router() 등을 import한다.
순환 import 방지를 위해 llm 모듈은 lazy-import한다.

대조 엔진 자체는 상태가 없다. 여기 있는 것은 서버 수명 동안 재사용할
LLM 라우터(가용성 캐시 포함)와 설정 파일 경로뿐이다.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# ── 전역 상태 ─────────────────────────────────

_env_file: Path | None = None
_llm_router = None


# ── 상태 접근 함수 ───────────────────────────

def get_env_file() -> Path | None:
    """서버가 사용하는 .env 경로를 반환한다."""
    return _env_file


def set_env_file(path: str | Path | None):
    """.env 경로를 설정한다. LLM 라우터 캐시도 리셋된다."""
    global _env_file, _llm_router
    _env_file = Path(path).resolve() if path else None
    _llm_router = None  # 설정 전환 시 LLM 라우터 리셋
    logger.info("설정 파일: %s", _env_file or "(프로젝트 기본 .env)")


# ── LLM 라우터 ────────────────────────────────

def get_llm_router():
    """LLM Router를 lazy-init한다.

    왜 lazy-init인가:
        .env 경로는 serve 명령에서 설정된다.
        LlmConfig가 그 .env를 읽으려면 경로가 정해진 뒤에 만들어야 한다.
    """
    global _llm_router
    if _llm_router is None:
        from llm.config import LlmConfig
        from llm.router import LlmRouter
        _llm_router = LlmRouter(LlmConfig(env_file=_env_file))
    return _llm_router


def set_llm_router(router):
    """LLM Router를 직접 주입한다. 테스트에서 mock provider를 쓸 때."""
    global _llm_router
    _llm_router = router
