"""교감 대조 엔진 — 저본과 대교본을 문장 단위로 정렬하고 차이를 분류한다.

처리 흐름 (앞 단계의 출력만 다음 단계로 흐른다):
  1. segment_text: 문장 종결 부호로 문장 분할
  2. similarity: 의미 단위 정리(cleanup)를 거친 편집 거리로 유사도 계산
  3. SentenceAligner: 창(window) 탐색 + 전역 탐색으로 문장 짝짓기
  4. classify_diffs: 짝지어진 문장 안에서 脫/衍/訛 분류
  5. collate: 결과 정렬 + 통계 집계

핵심 원칙:
  - 순수 함수: 같은 입력이면 같은 결과. 모듈 전역 상태 없음.
  - 탐욕적 정렬: 최적 정렬(DP)이 아니라 "처음 받아들일 만한 후보"를 고른다.
    근사 병렬 사본 대조에는 충분하고, 크게 뒤섞인 텍스트에서는 한계가 있다.
  - 어떤 입력에도 예외를 던지지 않는다. 빈 문자열도 정상 결과를 만든다.

사용법:
    from core.collation import collate

    result = collate("天地玄黄。宇宙洪荒。", "天地玄黄。宇宙鸿荒。")
    for r in result.results:
        print(r.status.value, r.base_sentence, r.compare_sentence)
"""

from __future__ import annotations

import functools
import logging
import re

from diff_match_patch import diff_match_patch

from core.collation_types import (
    CollationResult,
    CollationStats,
    DiffSegment,
    DiffType,
    SentenceResult,
    SentenceStatus,
)

logger = logging.getLogger(__name__)


# 창 탐색 크기: 커서부터 몇 문장까지 가까운 후보로 볼 것인가
WINDOW_SIZE = 5
# 창 안에서 짝으로 받아들이는 최소 유사도 (초과해야 함)
LOCAL_THRESHOLD = 0.4
# 창 밖 전역 탐색에서 받아들이는 최소 유사도 (초과해야 함)
GLOBAL_THRESHOLD = 0.7

# 문장 종결 부호. 연속된 부호는 하나의 묶음으로 앞 문장에 붙는다.
_TERMINAL_RUN = re.compile(r"([。！？.!?\n]+)")


# ──────────────────────────────────────
# 문장 분할
# ──────────────────────────────────────


def segment_text(text: str) -> list[str]:
    """텍스트를 문장 단위로 나눈다.

    입력: 원문 텍스트
    출력: 문장 리스트. 각 문장은 종결 부호 묶음으로 끝난다 (마지막 문장은 예외일 수 있음).

    규칙:
      - 종결 부호 묶음은 앞 문장에 붙고, 새 문장을 시작하지 않는다.
      - 공백뿐인 조각은 버리되, 뒤따르는 종결 부호는 직전 문장에 붙인다.
      - 앞 문장이 없는 선두 부호는 버린다.
      - 문장 자체는 strip하지 않는다.

    예: "天地玄黄。。宇宙洪荒" → ["天地玄黄。。", "宇宙洪荒"]
    """
    sentences: list[str] = []
    # re.split에 캡처 그룹을 쓰면 짝수 위치는 본문, 홀수 위치는 종결 부호 묶음
    for i, piece in enumerate(_TERMINAL_RUN.split(text)):
        if i % 2 == 0:
            if piece.strip():
                sentences.append(piece)
        elif sentences:
            sentences[-1] += piece
    return sentences


# ──────────────────────────────────────
# 유사도
# ──────────────────────────────────────


def _new_differ() -> diff_match_patch:
    """대조용 diff 엔진을 만든다.

    Diff_Timeout=0: 시간 제한을 끈다. 제한이 있으면 기계 속도에 따라
    diff 결과가 달라질 수 있어 대조 결과가 재현되지 않는다.
    """
    differ = diff_match_patch()
    differ.Diff_Timeout = 0
    return differ


def _semantic_diff(differ: diff_match_patch, a: str, b: str) -> list[tuple[int, str]]:
    """글자 단위 diff 후 의미 단위로 정리한다.

    diff_cleanupSemantic은 짧은 일치 구간을 흡수하여
    흩어진 한 글자 편집들을 하나의 덩어리 편집으로 합친다.
    """
    diffs = differ.diff_main(a, b)
    differ.diff_cleanupSemantic(diffs)
    return diffs


def similarity(a: str, b: str, differ: diff_match_patch | None = None) -> float:
    """두 문장의 유사도를 0.0~1.0으로 계산한다.

    1 - (정리된 diff의 편집 거리 / 긴 쪽 길이).
    둘 다 빈 문자열이면 1.0.
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    if differ is None:
        differ = _new_differ()
    distance = differ.diff_levenshtein(_semantic_diff(differ, a, b))
    return 1.0 - distance / max_len


# ──────────────────────────────────────
# 글자 단위 차이 분류
# ──────────────────────────────────────


def classify_diffs(
    base: str,
    compare: str,
    differ: diff_match_patch | None = None,
) -> list[DiffSegment]:
    """짝지어진 두 문장의 차이를 DiffSegment 리스트로 분류한다.

    분류:
      삭제 직후 삽입 → substitution (訛)
      삭제만       → omission (脫)
      삽입만       → insertion (衍)
      일치         → equal

    pos는 저본 기준 오프셋이다. insertion은 pos를 전진시키지 않는다.
    """
    if differ is None:
        differ = _new_differ()
    ops = _semantic_diff(differ, base, compare)

    segments: list[DiffSegment] = []
    pos = 0
    i = 0
    while i < len(ops):
        op, text = ops[i]

        if (
            op == diff_match_patch.DIFF_DELETE
            and i + 1 < len(ops)
            and ops[i + 1][0] == diff_match_patch.DIFF_INSERT
        ):
            segments.append(DiffSegment(
                type=DiffType.SUBSTITUTION,
                text=ops[i + 1][1],
                pos=pos,
                original_text=text,
            ))
            pos += len(text)
            i += 2
            continue

        if op == diff_match_patch.DIFF_EQUAL:
            segments.append(DiffSegment(type=DiffType.EQUAL, text=text, pos=pos))
            pos += len(text)
        elif op == diff_match_patch.DIFF_DELETE:
            segments.append(DiffSegment(type=DiffType.OMISSION, text=text, pos=pos))
            pos += len(text)
        else:
            segments.append(DiffSegment(type=DiffType.INSERTION, text=text, pos=pos))
        i += 1

    return segments


# ──────────────────────────────────────
# 문장 정렬
# ──────────────────────────────────────


class SentenceAligner:
    """저본 문장마다 대교본 문장을 최대 하나씩 짝짓는다.

    대조 한 번마다 새로 만든다. 커서와 사용된 인덱스 집합은
    이 객체의 필드이므로 동시에 여러 대조를 돌려도 서로 간섭하지 않는다.

    저본 문장은 반드시 0부터 순서대로 처리한다.
    i+1번 문장의 창 탐색은 i번 문장이 짝을 찾은 자리 다음부터 시작하기 때문이다.
    """

    def __init__(self, base_sentences: list[str], compare_sentences: list[str]):
        self.base_sentences = base_sentences
        self.compare_sentences = compare_sentences
        self.compare_cursor = 0
        self.used: set[int] = set()
        self._differ = _new_differ()

    def _search_window(self, sentence: str) -> tuple[int, float]:
        """커서부터 WINDOW_SIZE개 안에서 가장 유사한 후보를 찾는다.

        동점이면 먼저 본 후보가 이긴다. 1.0이 나오면 즉시 멈춘다.
        출력: (인덱스, 유사도). 못 찾으면 (-1, LOCAL_THRESHOLD).
        """
        best_index = -1
        best_sim = LOCAL_THRESHOLD
        for offset in range(WINDOW_SIZE):
            idx = self.compare_cursor + offset
            if idx >= len(self.compare_sentences):
                break
            if idx in self.used:
                continue
            sim = similarity(sentence, self.compare_sentences[idx], self._differ)
            if sim > best_sim:
                best_sim = sim
                best_index = idx
            if sim == 1.0:
                break
        return best_index, best_sim

    def _search_global(self, sentence: str) -> tuple[int, float]:
        """남은 대교본 문장 전체에서 GLOBAL_THRESHOLD를 넘는 첫 후보를 찾는다.

        가장 좋은 후보가 아니라 처음 만난 후보를 받아들인다.
        """
        for idx, candidate in enumerate(self.compare_sentences):
            if idx in self.used:
                continue
            sim = similarity(sentence, candidate, self._differ)
            if sim > GLOBAL_THRESHOLD:
                return idx, sim
        return -1, 0.0

    def match_sentence(self, base_index: int) -> SentenceResult:
        """저본 문장 하나를 처리하여 match 또는 missing 결과를 만든다."""
        sentence = self.base_sentences[base_index]

        match_index, sim = self._search_window(sentence)
        if match_index == -1:
            match_index, sim = self._search_global(sentence)
            if match_index != -1:
                logger.debug(
                    "전역 탐색 매치: 저본 %d → 대교본 %d (%.3f)",
                    base_index, match_index, sim,
                )

        if match_index == -1:
            return SentenceResult(
                base_sentence=sentence,
                compare_sentence="",
                base_index=base_index,
                compare_index=-1,
                diffs=[DiffSegment(type=DiffType.MISSING_SENTENCE, text=sentence, pos=0)],
                similarity=0.0,
                status=SentenceStatus.MISSING,
            )

        self.used.add(match_index)
        self.compare_cursor = match_index + 1

        compare_sentence = self.compare_sentences[match_index]
        return SentenceResult(
            base_sentence=sentence,
            compare_sentence=compare_sentence,
            base_index=base_index,
            compare_index=match_index,
            diffs=classify_diffs(sentence, compare_sentence, self._differ),
            similarity=sim,
            status=SentenceStatus.MATCH,
        )

    def extra_results(self) -> list[SentenceResult]:
        """끝까지 짝을 얻지 못한 대교본 문장을 extra 결과로 만든다."""
        extras = []
        for idx, sentence in enumerate(self.compare_sentences):
            if idx in self.used:
                continue
            extras.append(SentenceResult(
                base_sentence="",
                compare_sentence=sentence,
                base_index=-1,
                compare_index=idx,
                diffs=[DiffSegment(type=DiffType.EXTRA_SENTENCE, text=sentence, pos=0)],
                similarity=0.0,
                status=SentenceStatus.EXTRA,
            ))
        return extras

    def align(self) -> list[SentenceResult]:
        """저본 순서대로 match/missing을 만들고, 마지막에 extra를 덧붙인다."""
        results = [self.match_sentence(i) for i in range(len(self.base_sentences))]
        results.extend(self.extra_results())
        return results


# ──────────────────────────────────────
# 결과 조립
# ──────────────────────────────────────


def _display_order(a: SentenceResult, b: SentenceResult) -> int:
    """화면 표시 순서 비교 함수.

    둘 다 저본 인덱스가 있으면 저본 순서.
    한쪽이라도 extra면 대교본 인덱스로 비교한다.
    extra 위치는 근사치다. 삽입이 몰린 구간에서는 실제 위치와 어긋날 수 있다.
    """
    if a.base_index != -1 and b.base_index != -1:
        return a.base_index - b.base_index
    return a.compare_index - b.compare_index


def build_stats(base_count: int, results: list[SentenceResult]) -> CollationStats:
    """결과 리스트에서 통계를 집계한다."""
    stats = CollationStats(total_sentences=base_count)
    for r in results:
        if r.status == SentenceStatus.MATCH:
            stats.match_count += 1
        elif r.status == SentenceStatus.MISSING:
            stats.missing_count += 1
        else:
            stats.extra_count += 1
        for d in r.diffs:
            # 일치 구간은 세지 않는다. equal 키는 항상 0
            if d.type != DiffType.EQUAL:
                stats.type_counts[d.type] += 1
    return stats


def collate(base_text: str, compare_text: str) -> CollationResult:
    """저본과 대교본을 대조한다.

    입력:
      base_text: 저본 텍스트 (기준)
      compare_text: 대교본 텍스트 (검사 대상)
    출력: CollationResult

    예외를 던지지 않는다. 저본 문장이 없으면 대교본 문장이 모두 extra,
    대교본 문장이 없으면 저본 문장이 모두 missing이 된다.
    """
    base_sentences = segment_text(base_text)
    compare_sentences = segment_text(compare_text)

    aligner = SentenceAligner(base_sentences, compare_sentences)
    results = aligner.align()
    # sorted()는 안정 정렬이다
    results = sorted(results, key=functools.cmp_to_key(_display_order))

    stats = build_stats(len(base_sentences), results)
    logger.info(
        "대조 완료: 저본 %d문장, 대교본 %d문장 → 일치 %d, 脫句 %d, 衍句 %d",
        len(base_sentences), len(compare_sentences),
        stats.match_count, stats.missing_count, stats.extra_count,
    )
    return CollationResult(results=results, stats=stats)
