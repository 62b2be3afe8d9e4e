"""텍스트 가져오기 모듈.

대조 엔진 앞단에서 문서 파일을 일반 텍스트로 바꾸고 정리한다.

모듈 구성:
  file_parser.py   — txt/docx/pdf/hwp(x) → 텍스트
  text_cleaner.py  — 줄바꿈 정규화, 한자 사이 공백 제거, 잘못된 줄바꿈 복구
"""

from .file_parser import (
    SUPPORTED_EXTENSIONS,
    UnsupportedFormatError,
    parse_bytes,
    parse_file,
)
from .text_cleaner import clean_text

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "UnsupportedFormatError",
    "clean_text",
    "parse_bytes",
    "parse_file",
]
