"""교감 대조 라우터.

저본·대교본 텍스트를 받아 대조 결과와 교감 항목 목록을 돌려준다.
정리(clean)·繁→簡 변환은 선택 사항이며, 대조 전에 양쪽 텍스트에 똑같이 적용한다.
"""

import asyncio
import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from app.routers.conversion import conversion_error_response
from converter import ConversionFailedError, get_converter
from core.collation import collate
from core.report import ReportFormatError, export_report, list_issues
from llm.providers.base import MissingCredentialError
from text_import.text_cleaner import clean_text

from app._state import get_llm_router

logger = logging.getLogger(__name__)

router = APIRouter(tags=["collation"])


class CollateRequest(BaseModel):
    """대조 요청 본문.

    convert: None이면 변환하지 않음. "local" | "llm"
    """
    base_text: str
    compare_text: str
    clean: bool = False
    convert: str | None = None


class ReportRequest(CollateRequest):
    """보고서 요청 본문. format: "text" | "json" | "csv" """
    format: str = "text"


async def _prepare(body: CollateRequest) -> tuple[str, str]:
    """대조 전 전처리. 정리 → 변환 순서."""
    base, compare = body.base_text, body.compare_text
    if body.clean:
        base, compare = clean_text(base), clean_text(compare)
    if body.convert:
        converter = get_converter(body.convert, router=get_llm_router())
        base = await converter.convert(base)
        compare = await converter.convert(compare)
    return base, compare


@router.post("/api/collate")
async def api_collate(body: CollateRequest):
    """두 텍스트를 대조한다.

    출력: {results, stats, issues, baseText, compareText}
          baseText/compareText는 전처리 후 실제로 대조한 텍스트.
    """
    try:
        base, compare = await _prepare(body)
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    except (MissingCredentialError, ConversionFailedError) as e:
        return conversion_error_response(e)

    # 긴 본문의 diff 계산이 이벤트 루프를 막지 않도록 스레드에서 실행
    result = await asyncio.to_thread(collate, base, compare)
    data = result.to_dict()
    data["issues"] = [i.to_dict() for i in list_issues(result)]
    data["baseText"] = base
    data["compareText"] = compare
    return data


@router.post("/api/report")
async def api_report(body: ReportRequest):
    """대조 후 보고서를 만든다. json은 JSON, 나머지는 일반 텍스트로 응답."""
    try:
        base, compare = await _prepare(body)
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    except (MissingCredentialError, ConversionFailedError) as e:
        return conversion_error_response(e)

    result = await asyncio.to_thread(collate, base, compare)
    try:
        content = export_report(result, body.format)
    except ReportFormatError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    if body.format == "json":
        return PlainTextResponse(content, media_type="application/json")
    if body.format == "csv":
        return PlainTextResponse(content, media_type="text/csv")
    return PlainTextResponse(content)
