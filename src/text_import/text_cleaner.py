"""가져온 텍스트 정리 — 줄바꿈 정규화, 한자 사이 공백 제거, 잘못된 줄바꿈 복구.

PDF·Word에서 뽑은 텍스트는 조판 때문에 문장 중간에서 줄이 바뀌거나
한자 사이에 공백이 끼어 있다. 대조 엔진은 줄바꿈을 문장 경계로 보므로
이런 줄바꿈을 그대로 두면 문장이 잘게 쪼개진다.

처리 순서:
  1. CRLF / CR → LF
  2. 한자와 한자 사이의 가로 공백 제거 ("天 地" → "天地")
  3. 빈 줄로 문단을 나눈 뒤, 문단 안에서 종결 부호로 끝나지 않은 줄바꿈 제거
  4. 문단을 빈 줄 하나로 다시 연결

사용법:
    from text_import.text_cleaner import clean_text

    clean_text("天地玄\\n黄。宇宙洪荒。")  # → "天地玄黄。宇宙洪荒。"
"""

from __future__ import annotations

import re

# CJK 통합 표의문자 + 확장 A + 호환 한자
_CJK = r"\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff"

# 한자 사이의 가로 공백 (전각 공백 포함). 줄바꿈은 건드리지 않는다.
_SPACE_BETWEEN_CJK = re.compile(rf"(?<=[{_CJK}])[ \t\u3000]+(?=[{_CJK}])")

# 문단 경계: 공백만 있는 줄을 사이에 둔 줄바꿈
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")

# 문장이 끝나지 않았는데 바뀐 줄. 뒤에 또 줄바꿈이 오면 건드리지 않는다.
_BROKEN_LINE = re.compile(r"([^。！？：；”’.!?:;\"'\n])\n(?=[^\n])")


def normalize_line_endings(text: str) -> str:
    """CRLF와 CR을 LF로 바꾼다."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def remove_cjk_spaces(text: str) -> str:
    """한자 사이에 끼어든 공백을 제거한다. PDF 추출 텍스트에 흔하다."""
    return _SPACE_BETWEEN_CJK.sub("", text)


def repair_line_breaks(text: str) -> str:
    """문단 안에서 종결 부호 없이 바뀐 줄을 이어 붙인다.

    시가(詩歌)나 목록처럼 의도된 줄바꿈도 이어질 수 있다.
    그런 글은 clean_text를 쓰지 말고 원문 그대로 대조한다.
    """
    paragraphs = _PARAGRAPH_BREAK.split(text)
    return "\n\n".join(_BROKEN_LINE.sub(r"\1", p) for p in paragraphs)


def clean_text(text: str) -> str:
    """가져온 텍스트를 대조에 알맞게 정리한다."""
    cleaned = normalize_line_endings(text)
    cleaned = remove_cjk_spaces(cleaned)
    return repair_line_breaks(cleaned)
