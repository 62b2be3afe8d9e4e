"""문서 파일 → 텍스트 변환 테스트.

docx/pdf는 python-docx·PyMuPDF로 테스트 파일을 직접 만들어 읽는다.
"""

import pytest

from text_import.file_parser import (
    SUPPORTED_EXTENSIONS,
    UnsupportedFormatError,
    parse_bytes,
    parse_file,
)


class TestParseTxt:
    def test_utf8(self, tmp_path):
        path = tmp_path / "底本.txt"
        path.write_text("天地玄黄。宇宙洪荒。", encoding="utf-8")
        assert parse_file(path) == "天地玄黄。宇宙洪荒。"

    def test_utf8_bom_stripped(self, tmp_path):
        path = tmp_path / "bom.txt"
        path.write_bytes("天地玄黄。".encode("utf-8-sig"))
        assert parse_file(path) == "天地玄黄。"

    def test_gb18030_fallback(self, tmp_path):
        """UTF-8로 읽을 수 없으면 GB18030으로 다시 읽는다."""
        path = tmp_path / "gbk.txt"
        path.write_bytes("天地玄黄。宇宙洪荒。".encode("gb18030"))
        assert parse_file(path) == "天地玄黄。宇宙洪荒。"

    def test_uppercase_extension(self, tmp_path):
        path = tmp_path / "UPPER.TXT"
        path.write_text("天地", encoding="utf-8")
        assert parse_file(str(path)) == "天地"


class TestParseErrors:
    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "scan.jpg"
        path.write_bytes(b"\xff\xd8")
        with pytest.raises(UnsupportedFormatError) as exc_info:
            parse_file(path)
        assert exc_info.value.extension == ".jpg"

    def test_unsupported_checked_before_existence(self, tmp_path):
        with pytest.raises(UnsupportedFormatError):
            parse_file(tmp_path / "missing.xyz")

    def test_no_extension(self, tmp_path):
        with pytest.raises(UnsupportedFormatError, match="확장자 없음"):
            parse_file(tmp_path / "README")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_file(tmp_path / "missing.txt")

    def test_unsupported_is_value_error(self):
        assert issubclass(UnsupportedFormatError, ValueError)

    def test_supported_extensions(self):
        assert SUPPORTED_EXTENSIONS == (".txt", ".docx", ".pdf", ".hwp", ".hwpx")


class TestParseDocx:
    def test_paragraphs_joined_by_newline(self, tmp_path):
        import docx

        document = docx.Document()
        document.add_paragraph("天地玄黄。")
        document.add_paragraph("宇宙洪荒。")
        path = tmp_path / "底本.docx"
        document.save(str(path))

        lines = parse_file(path).split("\n")
        assert "天地玄黄。" in lines
        assert "宇宙洪荒。" in lines
        assert lines.index("宇宙洪荒。") == lines.index("天地玄黄。") + 1

    def test_corrupt_docx(self, tmp_path):
        path = tmp_path / "broken.docx"
        path.write_bytes(b"not a zip file")
        with pytest.raises(ValueError, match="Word 파일을 열 수 없습니다"):
            parse_file(path)


class TestParsePdf:
    def test_text_layer(self, tmp_path):
        import fitz

        doc = fitz.open()
        page = doc.new_page()
        page.insert_text((72, 72), "Hello collation.")
        path = tmp_path / "sample.pdf"
        doc.save(str(path))
        doc.close()

        assert "Hello collation." in parse_file(path)


class TestParseBytes:
    def test_txt(self):
        assert parse_bytes("upload.txt", "天地玄黄。".encode("utf-8")) == "天地玄黄。"

    def test_unsupported(self):
        with pytest.raises(UnsupportedFormatError):
            parse_bytes("upload.exe", b"MZ")

    def test_temp_file_removed(self, tmp_path, monkeypatch):
        import tempfile

        monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
        parse_bytes("upload.txt", b"abc")
        assert list(tmp_path.iterdir()) == []
