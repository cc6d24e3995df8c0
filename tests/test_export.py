"""Unit tests for pdf_arabic.export (UTF-8 CSV with byte order mark)."""

from pathlib import Path

from pdf_arabic.export import UTF8_BOM, csv_lines, csv_utf8_blob, write_csv


class TestCsvUtf8Blob:
    """Tests for csv_utf8_blob()."""

    def test_bom_then_newline_joined_lines(self):
        assert csv_utf8_blob(["a", "b"]) == b"\xef\xbb\xbfa\nb"

    def test_empty_input_is_only_bom(self):
        assert csv_utf8_blob([]) == UTF8_BOM

    def test_arabic_is_utf8_encoded(self):
        blob = csv_utf8_blob(["الاسم,الرصيد", "أحمد,100"])
        assert blob.startswith(UTF8_BOM)
        assert blob[len(UTF8_BOM):].decode("utf-8") == "الاسم,الرصيد\nأحمد,100"

    def test_accepts_generators(self):
        assert csv_utf8_blob(line for line in ["x"]) == UTF8_BOM + b"x"


class TestCsvLines:
    """Tests for csv_lines()."""

    def test_plain_fields(self):
        assert csv_lines([["العميل", 10, 2.5]]) == ["العميل,10,2.5"]

    def test_quoting_and_none(self):
        rows = [["a,b", None, 'say "hi"']]
        assert csv_lines(rows) == ['"a,b",,"say ""hi"""']

    def test_one_line_per_row(self):
        assert len(csv_lines([["h1", "h2"], ["1", "2"], ["3", "4"]])) == 3


class TestWriteCsv:
    """Tests for write_csv()."""

    def test_writes_blob_and_creates_parent(self, tmp_path: Path):
        target = tmp_path / "reports" / "customers.csv"
        result = write_csv(target, ["الاسم", "سارة"])
        assert result == target
        assert target.read_bytes() == csv_utf8_blob(["الاسم", "سارة"])
