"""교감 대조 데이터 모델.

저본(底本)과 대교본(對校本)을 문장 단위로 대조한 결과를 담는 타입들.
collation.py(알고리즘)와 report.py(보고서), app/cli(표시 계층)가 공유한다.

구조:
    CollationResult
      ├─ results: [SentenceResult, ...]   문장별 결과 (match / missing / extra)
      │     └─ diffs: [DiffSegment, ...]  문장 내부 차이 구간
      └─ stats: CollationStats            집계 통계

to_dict()의 키는 표시 계층과의 계약이므로 camelCase를 쓴다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class DiffType(str, Enum):
    """차이 유형.

    | 유형 | 교감 용어 | 의미 |
    |------|-----------|------|
    | equal | — | 양쪽 동일 |
    | omission | 脫 | 저본에만 있음 (대교본에서 빠짐) |
    | insertion | 衍 | 대교본에만 있음 |
    | substitution | 訛 | 저본 글자가 다른 글자로 바뀜 |
    | reorder | 倒 | 어순 도치 (예약, 생성되지 않음) |
    | disorder | 亂 | 문의 착란 (예약, 생성되지 않음) |
    | missing_sentence | 脫句 | 문장 전체가 대교본에 없음 |
    | extra_sentence | 衍句 | 문장 전체가 대교본에만 있음 |
    """

    EQUAL = "equal"
    OMISSION = "omission"
    INSERTION = "insertion"
    SUBSTITUTION = "substitution"
    REORDER = "reorder"
    DISORDER = "disorder"
    MISSING_SENTENCE = "missing_sentence"
    EXTRA_SENTENCE = "extra_sentence"


class SentenceStatus(str, Enum):
    """문장 대조 상태."""

    MATCH = "match"
    MISSING = "missing"
    EXTRA = "extra"


@dataclass
class DiffSegment:
    """문장 내부의 차이 구간 하나.

    pos는 저본 문장 기준 글자 오프셋이다.
    insertion은 저본 쪽 위치가 없으므로 pos를 전진시키지 않는다.
    original_text는 substitution에서만 쓴다 (바뀌기 전 저본 글자).
    """

    type: DiffType
    text: str
    pos: int = 0
    original_text: Optional[str] = None

    def to_dict(self) -> dict:
        """API 응답용 딕셔너리."""
        result = {
            "type": self.type.value,
            "text": self.text,
            "pos": self.pos,
        }
        if self.original_text is not None:
            result["originalText"] = self.original_text
        return result

    @classmethod
    def from_dict(cls, data: dict) -> DiffSegment:
        return cls(
            type=DiffType(data["type"]),
            text=data.get("text", ""),
            pos=data.get("pos", 0),
            original_text=data.get("originalText"),
        )


@dataclass
class SentenceResult:
    """문장 하나의 대조 결과.

    - match: 저본 문장과 대교본 문장이 짝지어짐. diffs에 글자 단위 차이.
    - missing: 저본 문장의 짝이 없음. compare_index == -1.
    - extra: 대교본 문장의 짝이 없음. base_index == -1.
    """

    base_sentence: str
    compare_sentence: str
    base_index: int
    compare_index: int
    diffs: list[DiffSegment] = field(default_factory=list)
    similarity: float = 0.0
    status: SentenceStatus = SentenceStatus.MATCH

    def to_dict(self) -> dict:
        return {
            "baseSentence": self.base_sentence,
            "compareSentence": self.compare_sentence,
            "baseIndex": self.base_index,
            "compareIndex": self.compare_index,
            "diffs": [d.to_dict() for d in self.diffs],
            "similarity": self.similarity,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> SentenceResult:
        return cls(
            base_sentence=data.get("baseSentence", ""),
            compare_sentence=data.get("compareSentence", ""),
            base_index=data.get("baseIndex", -1),
            compare_index=data.get("compareIndex", -1),
            diffs=[DiffSegment.from_dict(d) for d in data.get("diffs", [])],
            similarity=data.get("similarity", 0.0),
            status=SentenceStatus(data.get("status", "match")),
        )


def _empty_type_counts() -> dict[DiffType, int]:
    return {t: 0 for t in DiffType}


@dataclass
class CollationStats:
    """대조 통계.

    total_sentences는 저본 문장 수다 (extra는 포함하지 않는다).
    type_counts는 모든 DiffType 키를 항상 가진다. 일치 구간은 세지 않으므로
    equal은 항상 0이다.
    """

    total_sentences: int = 0
    match_count: int = 0
    missing_count: int = 0
    extra_count: int = 0
    type_counts: dict[DiffType, int] = field(default_factory=_empty_type_counts)

    @property
    def issue_count(self) -> int:
        """차이 건수 합계. 사이드바 배지에 표시."""
        return sum(self.type_counts.values())

    def to_dict(self) -> dict:
        return {
            "totalSentences": self.total_sentences,
            "matchCount": self.match_count,
            "missingCount": self.missing_count,
            "extraCount": self.extra_count,
            "typeCounts": {t.value: c for t, c in self.type_counts.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> CollationStats:
        counts = _empty_type_counts()
        for key, value in data.get("typeCounts", {}).items():
            counts[DiffType(key)] = value
        return cls(
            total_sentences=data.get("totalSentences", 0),
            match_count=data.get("matchCount", 0),
            missing_count=data.get("missingCount", 0),
            extra_count=data.get("extraCount", 0),
            type_counts=counts,
        )


@dataclass
class CollationResult:
    """대조 전체 결과. collate()의 반환값."""

    results: list[SentenceResult] = field(default_factory=list)
    stats: CollationStats = field(default_factory=CollationStats)

    def to_dict(self) -> dict:
        return {
            "results": [r.to_dict() for r in self.results],
            "stats": self.stats.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> CollationResult:
        """내보낸 JSON 보고서를 다시 읽을 때 사용."""
        return cls(
            results=[SentenceResult.from_dict(r) for r in data.get("results", [])],
            stats=CollationStats.from_dict(data.get("stats", {})),
        )
