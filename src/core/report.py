"""대조 보고서 — 결과를 교감 항목 목록으로 펼치고 JSON/CSV/텍스트로 내보낸다.

표시 계층(사이드바, 보고서 파일)이 쓰는 라벨과 설명을 한곳에 모은다.
각 항목은 (결과 인덱스, 구간 인덱스)로 주소가 매겨지므로
GUI에서 항목을 누르면 해당 문장의 해당 구간으로 이동할 수 있다.

사용법:
    from core.collation import collate
    from core.report import export_report, list_issues

    result = collate(base, compare)
    for issue in list_issues(result):
        print(issue.label, issue.text)
    csv_text = export_report(result, "csv")
"""

from __future__ import annotations

import csv
import io
import json
from dataclasses import dataclass

from core.collation_types import CollationResult, DiffType, SentenceStatus


class ReportFormatError(ValueError):
    """지원하지 않는 보고서 형식."""
    pass


# DiffType → (라벨, 설명)
ISSUE_LABELS: dict[DiffType, tuple[str, str]] = {
    DiffType.OMISSION: ("脱", "文字缺失"),
    DiffType.INSERTION: ("衍", "文字衍文"),
    DiffType.SUBSTITUTION: ("讹", "文字讹误"),
    DiffType.REORDER: ("倒", "语序颠倒"),
    DiffType.DISORDER: ("乱", "文意错乱"),
    DiffType.MISSING_SENTENCE: ("脱", "比对本缺失此句 (脱句)"),
    DiffType.EXTRA_SENTENCE: ("衍", "比对本多出此句 (衍句)"),
}

REPORT_FORMATS = ("json", "csv", "text")


@dataclass
class CollationIssue:
    """교감 항목 하나. equal이 아닌 구간마다 하나씩 생긴다."""

    id: str
    result_index: int
    segment_index: int
    type: DiffType
    label: str
    description: str
    text: str
    base_index: int
    compare_index: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "resultIndex": self.result_index,
            "segmentIndex": self.segment_index,
            "type": self.type.value,
            "label": self.label,
            "desc": self.description,
            "text": self.text,
            "baseIndex": self.base_index,
            "compareIndex": self.compare_index,
        }


def _issue_text(segment) -> str:
    """구간 종류에 맞는 표시 문구."""
    if segment.type == DiffType.OMISSION:
        return f"底本：{segment.text}"
    if segment.type == DiffType.INSERTION:
        return f"今本：{segment.text}"
    if segment.type == DiffType.SUBSTITUTION:
        return f"底本：{segment.original_text} → 今本：{segment.text}"
    return segment.text


def list_issues(result: CollationResult) -> list[CollationIssue]:
    """결과를 교감 항목 목록으로 펼친다.

    missing/extra 문장은 문장 단위 항목 하나,
    match 문장은 equal이 아닌 구간마다 항목 하나.
    """
    issues: list[CollationIssue] = []
    for r_idx, r in enumerate(result.results):
        if r.status == SentenceStatus.MISSING:
            label, desc = ISSUE_LABELS[DiffType.MISSING_SENTENCE]
            issues.append(CollationIssue(
                id=f"diff-{r_idx}-missing",
                result_index=r_idx,
                segment_index=0,
                type=DiffType.MISSING_SENTENCE,
                label=label,
                description=desc,
                text=r.base_sentence,
                base_index=r.base_index,
                compare_index=r.compare_index,
            ))
            continue

        if r.status == SentenceStatus.EXTRA:
            label, desc = ISSUE_LABELS[DiffType.EXTRA_SENTENCE]
            issues.append(CollationIssue(
                id=f"diff-{r_idx}-extra",
                result_index=r_idx,
                segment_index=0,
                type=DiffType.EXTRA_SENTENCE,
                label=label,
                description=desc,
                text=r.compare_sentence,
                base_index=r.base_index,
                compare_index=r.compare_index,
            ))
            continue

        for s_idx, seg in enumerate(r.diffs):
            if seg.type == DiffType.EQUAL:
                continue
            label, desc = ISSUE_LABELS[seg.type]
            issues.append(CollationIssue(
                id=f"diff-{r_idx}-{s_idx}",
                result_index=r_idx,
                segment_index=s_idx,
                type=seg.type,
                label=label,
                description=desc,
                text=_issue_text(seg),
                base_index=r.base_index,
                compare_index=r.compare_index,
            ))
    return issues


# ──────────────────────────────────────
# 내보내기
# ──────────────────────────────────────


def export_json(result: CollationResult) -> str:
    """결과 전체와 항목 목록을 JSON 문자열로 내보낸다.

    CollationResult.from_dict()로 다시 읽을 수 있다.
    """
    data = result.to_dict()
    data["issues"] = [i.to_dict() for i in list_issues(result)]
    return json.dumps(data, ensure_ascii=False, indent=2)


def export_csv(result: CollationResult) -> str:
    """항목 목록을 CSV 문자열로 내보낸다. 스프레드시트 검토용."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["id", "label", "type", "desc", "text", "baseIndex", "compareIndex"])
    for issue in list_issues(result):
        writer.writerow([
            issue.id,
            issue.label,
            issue.type.value,
            issue.description,
            issue.text,
            issue.base_index,
            issue.compare_index,
        ])
    return buf.getvalue()


def export_text(result: CollationResult) -> str:
    """사람이 읽는 요약 + 항목 목록."""
    stats = result.stats
    lines = [
        "校勘结果",
        f"底本句数: {stats.total_sentences}",
        f"对应: {stats.match_count}  脱句: {stats.missing_count}  衍句: {stats.extra_count}",
        # 대응하지 못한 底本 문장과 衍句를 합친 수
        f"差异: {stats.total_sentences - stats.match_count + stats.extra_count}",
    ]

    counts = []
    for t, (label, _) in ISSUE_LABELS.items():
        if t in (DiffType.MISSING_SENTENCE, DiffType.EXTRA_SENTENCE):
            continue
        counts.append(f"{label}({t.value}): {stats.type_counts.get(t, 0)}")
    lines.append("  ".join(counts))
    lines.append("")

    issues = list_issues(result)
    if not issues:
        lines.append("(无异文)")
    for issue in issues:
        r = result.results[issue.result_index]
        where = f"底本#{r.base_index}" if r.base_index != -1 else f"今本#{r.compare_index}"
        lines.append(f"[{issue.label}] {where} {issue.description}: {issue.text}")

    return "\n".join(lines) + "\n"


def export_report(result: CollationResult, fmt: str = "text") -> str:
    """형식 이름으로 보고서를 만든다.

    에러: ReportFormatError — json/csv/text 이외의 형식
    """
    if fmt == "json":
        return export_json(result)
    if fmt == "csv":
        return export_csv(result)
    if fmt == "text":
        return export_text(result)
    raise ReportFormatError(
        f"지원하지 않는 보고서 형식입니다: {fmt}\n"
        f"지원 형식: {', '.join(REPORT_FORMATS)}"
    )
