"""繁→簡 변환 · 파일 가져오기 · LLM 상태 라우터.

대조 엔진 바깥의 협력자(가져오기, 변환)를 API로 노출한다.
협력자의 실패는 대조 결과와 섞지 않고 상태 코드로 구분한다:
    415 — 지원하지 않는 파일 형식
    401 — API 키 없음
    502 — 원격 변환 실패
"""

import logging
from pathlib import Path

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from converter import ConversionFailedError, get_converter
from llm.providers.base import MissingCredentialError
from text_import.file_parser import UnsupportedFormatError, parse_bytes
from text_import.text_cleaner import clean_text

from app._state import get_llm_router

logger = logging.getLogger(__name__)

router = APIRouter(tags=["conversion"])


class ConvertRequest(BaseModel):
    """변환 요청 본문. method: "local" | "llm" """
    text: str
    method: str = "local"
    provider: str | None = None


def conversion_error_response(e: Exception) -> JSONResponse:
    """변환 협력자 예외를 JSON 에러 응답으로 바꾼다."""
    if isinstance(e, MissingCredentialError):
        return JSONResponse(
            {"error": str(e), "kind": "missing_credential"},
            status_code=401,
        )
    logger.warning("변환 실패: %s", e)
    return JSONResponse(
        {"error": str(e), "kind": "conversion_failed"},
        status_code=502,
    )


@router.post("/api/convert")
async def api_convert(body: ConvertRequest):
    """번체 텍스트를 간체로 변환한다."""
    try:
        converter = get_converter(
            body.method, router=get_llm_router(), provider=body.provider
        )
        text = await converter.convert(body.text)
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    except (MissingCredentialError, ConversionFailedError) as e:
        return conversion_error_response(e)
    return {"text": text, "method": body.method}


@router.post("/api/import")
async def api_import(file: UploadFile = File(...), clean: bool = True):
    """업로드한 문서에서 텍스트를 추출한다.

    입력: multipart/form-data (txt/docx/pdf/hwp/hwpx)
    출력: {filename, text, char_count}
    """
    filename = file.filename or ""
    content = await file.read()
    try:
        text = parse_bytes(filename, content)
    except UnsupportedFormatError as e:
        return JSONResponse(
            {"error": str(e), "kind": "unsupported_format"},
            status_code=415,
        )
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    if clean:
        text = clean_text(text)
    return {
        "filename": Path(filename).name,
        "text": text,
        "char_count": len(text),
    }


@router.get("/api/llm/status")
async def api_llm_status():
    """LLM provider 가용 상태."""
    return await get_llm_router().get_status()
