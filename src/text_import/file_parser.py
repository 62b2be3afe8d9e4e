"""문서 파일 → 일반 텍스트 변환.

대조 엔진은 원본 형식을 모른다. 이 모듈이 파일을 읽어 일반 텍스트로 넘긴다.

지원 형식:
  .txt          — UTF-8 (BOM 허용), 실패하면 GB18030 (구형 중국어 파일)
  .docx         — python-docx, 단락을 줄바꿈으로 연결
  .pdf          — PyMuPDF 텍스트 레이어, 페이지를 빈 줄로 연결
  .hwp / .hwpx  — hwp-hwpx-parser

사용법:
    text = parse_file(Path("底本.docx"))
    text = clean_text(text)   # text_cleaner.py
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


SUPPORTED_EXTENSIONS = (".txt", ".docx", ".pdf", ".hwp", ".hwpx")


class UnsupportedFormatError(ValueError):
    """지원하지 않는 파일 형식."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(
            f"지원하지 않는 파일 형식입니다: {extension or '(확장자 없음)'}\n"
            f"지원 형식: {', '.join(SUPPORTED_EXTENSIONS)}"
        )


def parse_file(file_path: str | Path) -> str:
    """파일을 읽어 일반 텍스트를 반환한다.

    입력: 파일 경로
    출력: 추출된 텍스트 (정리 전)
    에러: FileNotFoundError — 파일이 없을 때
          UnsupportedFormatError — 지원하지 않는 확장자
          ValueError — 파일이 손상되어 열 수 없을 때
    """
    path = Path(file_path)
    ext = path.suffix.lower()

    # 확장자 검사를 먼저: 없는 파일이라도 형식이 틀렸으면 형식 오류가 더 유용하다
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(ext)
    if not path.exists():
        raise FileNotFoundError(f"파일을 찾을 수 없습니다: {path}")

    if ext == ".txt":
        text = _parse_txt(path)
    elif ext == ".docx":
        text = _parse_docx(path)
    elif ext == ".pdf":
        text = _parse_pdf(path)
    else:
        text = _parse_hwp(path)

    logger.info("텍스트 추출: %s (%d자)", path.name, len(text))
    return text


def parse_bytes(filename: str, data: bytes) -> str:
    """업로드된 파일 내용을 텍스트로 변환한다.

    PyMuPDF·hwp-hwpx-parser가 경로를 요구하므로 임시 파일을 거친다.
    """
    ext = Path(filename).suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(ext)

    fd, tmp_name = tempfile.mkstemp(suffix=ext)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        return parse_file(tmp_name)
    finally:
        os.unlink(tmp_name)


def _parse_txt(path: Path) -> str:
    raw = path.read_bytes()
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.warning("UTF-8 디코딩 실패, GB18030으로 재시도: %s", path.name)
    try:
        return raw.decode("gb18030")
    except UnicodeDecodeError as e:
        raise ValueError(
            f"텍스트 파일 인코딩을 알 수 없습니다: {path}\n"
            "→ UTF-8로 저장한 뒤 다시 시도하세요."
        ) from e


def _parse_docx(path: Path) -> str:
    """Word 문서의 단락 텍스트를 추출한다."""
    import docx  # python-docx

    try:
        document = docx.Document(str(path))
    except Exception as e:
        raise ValueError(
            f"Word 파일을 열 수 없습니다: {path}\n"
            f"→ 원인: {e}"
        ) from e
    return "\n".join(p.text for p in document.paragraphs)


def _parse_pdf(path: Path) -> str:
    """PDF 텍스트 레이어를 추출한다. 스캔 PDF면 빈 문자열에 가깝다."""
    import fitz  # PyMuPDF

    try:
        doc = fitz.open(str(path))
    except Exception as e:
        raise ValueError(
            f"PDF 파일을 열 수 없습니다: {path}\n"
            f"→ 원인: {e}"
        ) from e

    try:
        pages = [page.get_text("text") for page in doc]
    finally:
        doc.close()

    if not any(p.strip() for p in pages):
        logger.warning("PDF에 텍스트 레이어가 없습니다 (OCR 필요): %s", path.name)
    return "\n\n".join(pages)


def _parse_hwp(path: Path) -> str:
    """HWP(5.0)/HWPX 본문 텍스트를 추출한다."""
    from hwp_hwpx_parser import ExtractOptions, Reader

    reader = Reader(path)
    try:
        if not reader.is_valid:
            raise ValueError(
                f"유효하지 않은 HWP/HWPX 파일입니다: {path}\n"
                "→ 파일이 손상되었거나, 지원하지 않는 형식일 수 있습니다."
            )
        if reader.is_encrypted:
            raise ValueError(
                f"암호화된 HWP/HWPX 파일입니다: {path}\n"
                "→ 파일의 암호를 해제한 뒤 다시 시도하세요."
            )

        opts = ExtractOptions(
            paragraph_separator="\n",
            line_separator="\n",
            include_empty_paragraphs=False,
        )
        return reader.extract_text(opts)
    finally:
        reader.close()
