"""대조 보고서 테스트 — 교감 항목 목록과 JSON/CSV/텍스트 내보내기."""

import csv
import io
import json

import pytest

from core.collation import collate
from core.collation_types import CollationResult, DiffType
from core.report import (
    ISSUE_LABELS,
    REPORT_FORMATS,
    ReportFormatError,
    export_csv,
    export_json,
    export_report,
    export_text,
    list_issues,
)

BASE = "天地玄黄。日月盈昃。宇宙洪荒。"
COMPARE = "天地玄黄。宇宙鸿荒。寒来暑往。"


@pytest.fixture
def result():
    return collate(BASE, COMPARE)


class TestIssueLabels:
    def test_every_non_equal_type_has_label(self):
        assert set(ISSUE_LABELS) == set(DiffType) - {DiffType.EQUAL}

    def test_labels(self):
        assert ISSUE_LABELS[DiffType.OMISSION][0] == "脱"
        assert ISSUE_LABELS[DiffType.INSERTION][0] == "衍"
        assert ISSUE_LABELS[DiffType.SUBSTITUTION][0] == "讹"
        assert ISSUE_LABELS[DiffType.REORDER][0] == "倒"
        assert ISSUE_LABELS[DiffType.DISORDER][0] == "乱"


class TestListIssues:
    def test_issue_kinds(self, result):
        issues = list_issues(result)
        assert [i.type for i in issues] == [
            DiffType.MISSING_SENTENCE,
            DiffType.SUBSTITUTION,
            DiffType.EXTRA_SENTENCE,
        ]

    def test_ids_address_result_and_segment(self, result):
        issues = {i.type: i for i in list_issues(result)}

        missing = issues[DiffType.MISSING_SENTENCE]
        assert missing.id == f"diff-{missing.result_index}-missing"
        assert missing.text == "日月盈昃。"

        sub = issues[DiffType.SUBSTITUTION]
        assert sub.id == f"diff-{sub.result_index}-{sub.segment_index}"
        segment = result.results[sub.result_index].diffs[sub.segment_index]
        assert segment.type == DiffType.SUBSTITUTION
        assert sub.text == "底本：洪 → 今本：鸿"
        assert sub.label == "讹"

        extra = issues[DiffType.EXTRA_SENTENCE]
        assert extra.id == f"diff-{extra.result_index}-extra"
        assert extra.text == "寒来暑往。"
        assert extra.base_index == -1

    def test_omission_and_insertion_text(self):
        omission = list_issues(collate("天地玄黄。", "天地黄。"))
        assert [i.text for i in omission] == ["底本：玄"]
        insertion = list_issues(collate("天地黄。", "天地玄黄。"))
        assert [i.text for i in insertion] == ["今本：玄"]

    def test_identical_texts_have_no_issues(self):
        assert list_issues(collate("天地玄黄。", "天地玄黄。")) == []

    def test_issue_to_dict(self, result):
        data = list_issues(result)[0].to_dict()
        assert set(data) == {
            "id", "resultIndex", "segmentIndex", "type", "label",
            "desc", "text", "baseIndex", "compareIndex",
        }
        assert data["type"] == "missing_sentence"


class TestExportJson:
    def test_contains_results_stats_issues(self, result):
        data = json.loads(export_json(result))
        assert len(data["results"]) == len(result.results)
        assert data["stats"]["missingCount"] == 1
        assert len(data["issues"]) == 3

    def test_keeps_cjk_unescaped(self, result):
        assert "天地玄黄" in export_json(result)

    def test_readable_back(self, result):
        data = json.loads(export_json(result))
        restored = CollationResult.from_dict(data)
        assert restored.to_dict() == result.to_dict()


class TestExportCsv:
    def test_header_and_rows(self, result):
        rows = list(csv.reader(io.StringIO(export_csv(result))))
        assert rows[0] == ["id", "label", "type", "desc", "text", "baseIndex", "compareIndex"]
        assert len(rows) == 1 + 3
        assert rows[2][2] == "substitution"

    def test_empty(self):
        rows = list(csv.reader(io.StringIO(export_csv(collate("", "")))))
        assert len(rows) == 1


class TestExportText:
    def test_summary(self, result):
        text = export_text(result)
        assert text.startswith("校勘结果\n")
        assert "底本句数: 3" in text
        assert "脱句: 1" in text
        assert "衍句: 1" in text
        assert "讹(substitution): 1" in text

    def test_difference_total(self, result):
        # 底本 3句 중 2句 대응, 衍句 1
        assert "差异: 2\n" in export_text(result)

    def test_difference_total_zero_when_identical(self):
        assert "差异: 0\n" in export_text(collate("天地玄黄。", "天地玄黄。"))

    def test_issue_lines(self, result):
        text = export_text(result)
        assert "[讹]" in text
        assert "今本#2" in text

    def test_no_issues(self):
        assert "(无异文)" in export_text(collate("天地玄黄。", "天地玄黄。"))


class TestExportReport:
    @pytest.mark.parametrize("fmt", REPORT_FORMATS)
    def test_dispatch(self, result, fmt):
        assert export_report(result, fmt)

    def test_unknown_format(self, result):
        with pytest.raises(ReportFormatError, match="지원하지 않는 보고서 형식"):
            export_report(result, "xlsx")

    def test_format_error_is_value_error(self):
        assert issubclass(ReportFormatError, ValueError)
