"""웹 앱 서버.

FastAPI 기반. 교감 대조 엔진과 그 협력자(가져오기, 繁→簡 변환)를 API로 제공한다.
화면(분할 창, 하이라이트, 설정 저장)은 이 API를 소비하는 프론트엔드의 몫이다.

API 엔드포인트:
    GET  /api/health      → 상태 확인
    POST /api/collate     → 저본·대교본 대조
    POST /api/report      → 대조 보고서 (text/json/csv)
    POST /api/convert     → 繁→簡 변환
    POST /api/import      → 문서 파일 → 텍스트
    GET  /api/llm/status  → LLM provider 상태
"""

import sys
from pathlib import Path

# src/ 디렉토리를 Python 경로에 추가
_src_dir = str(Path(__file__).resolve().parent.parent)
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from fastapi import FastAPI

from app._state import set_env_file
from app.routers.collation import router as collation_router
from app.routers.conversion import router as conversion_router


app = FastAPI(
    title="교감 대조 엔진",
    description="저본과 대교본을 문장 단위로 정렬하고 脫·衍·訛를 분류한다",
    version="0.1.0",
)

app.include_router(collation_router)
app.include_router(conversion_router)


def configure(env_file: str | Path | None = None) -> FastAPI:
    """설정 파일 경로를 지정하고 앱을 반환한다.

    목적: 서버 시작 전에 .env 위치를 바꾼다 (API 키 등).
    입력: env_file — .env 파일 경로. None이면 프로젝트 루트 .env만 사용.
    출력: FastAPI 앱 인스턴스.
    """
    set_env_file(env_file)
    return app


@app.get("/api/health")
async def api_health():
    """서버 상태를 반환한다."""
    return {"status": "ok", "version": app.version}
