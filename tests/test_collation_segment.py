"""문장 분할 테스트."""

import pytest

from core.collation import segment_text


class TestSegmentText:
    def test_two_sentences(self):
        assert segment_text("天地玄黄。宇宙洪荒。") == ["天地玄黄。", "宇宙洪荒。"]

    def test_terminal_run_attaches_to_previous(self):
        """연속된 종결 부호는 앞 문장에 통째로 붙는다."""
        assert segment_text("天地玄黄。。！宇宙洪荒") == ["天地玄黄。。！", "宇宙洪荒"]

    def test_last_sentence_without_terminal(self):
        assert segment_text("天地玄黄。宇宙洪荒") == ["天地玄黄。", "宇宙洪荒"]

    def test_no_terminal_at_all(self):
        assert segment_text("天地玄黄") == ["天地玄黄"]

    def test_empty(self):
        assert segment_text("") == []

    def test_whitespace_only(self):
        assert segment_text("\n\n  \n") == []

    def test_leading_terminal_dropped(self):
        """앞 문장이 없는 선두 부호는 버린다."""
        assert segment_text("。天地玄黄。") == ["天地玄黄。"]

    def test_blank_piece_merges_terminal_into_previous(self):
        """공백뿐인 조각은 버리고, 그 뒤 부호는 직전 문장에 붙인다."""
        assert segment_text("天地。  。宇宙") == ["天地。。", "宇宙"]

    def test_newline_is_terminal(self):
        assert segment_text("天地玄黄\n宇宙洪荒\n") == ["天地玄黄\n", "宇宙洪荒\n"]

    def test_ascii_terminals(self):
        """문장은 strip하지 않는다."""
        assert segment_text("Hello world. Bye!") == ["Hello world.", " Bye!"]

    @pytest.mark.parametrize("text", [
        "天地玄黄。宇宙洪荒。日月盈昃，辰宿列张。",
        "寒来暑往？秋收冬藏！\n闰余成岁",
        "Hello world. Bye!",
    ])
    def test_concatenation_reproduces_input(self, text):
        assert "".join(segment_text(text)) == text

    def test_every_unit_but_last_ends_with_terminal(self):
        units = segment_text("天地玄黄。宇宙洪荒！日月盈昃")
        for unit in units[:-1]:
            assert unit[-1] in "。！？.!?\n"
