from __future__ import annotations

import json
from pathlib import Path

import pytest
from PyPDF2 import PdfReader

import main as cli


class TestCli:
    def test_requires_a_mode(self):
        with pytest.raises(SystemExit):
            cli.main([])

    def test_wrap_prints_lines(self, capsys):
        cli.main(["--wrap", "line1\n\nline2", "--max-width", "500", "--font-size", "10"])
        out = capsys.readouterr().out
        assert out.splitlines() == ["line1", "", "line2"]

    def test_wrap_requires_max_width(self):
        with pytest.raises(SystemExit):
            cli.main(["--wrap", "abc"])

    def test_wrap_invalid_width_exits(self):
        with pytest.raises(SystemExit):
            cli.main(["--wrap", "abc", "--max-width", "0"])

    def test_pages_json_builds_pdf(self, tmp_path: Path):
        req = tmp_path / "req.json"
        req.write_text(
            json.dumps(
                {
                    "pages": [{"width": 300, "height": 400, "textItems": [{"text": "電源", "x": 10, "y": 300, "width": 80}]}],
                    "direction": "ja-zh",
                },
                ensure_ascii=False,
            ),
            encoding="utf-8",
        )
        trans = tmp_path / "trans.json"
        trans.write_text(json.dumps({"translations": [["电源"]]}, ensure_ascii=False), encoding="utf-8")
        out = tmp_path / "out.pdf"
        cli.main(["--pages-json", str(req), "--translations-json", str(trans), "--output", str(out)])
        assert len(PdfReader(str(out)).pages) == 1

    def test_pages_json_without_pages_exits(self, tmp_path: Path):
        req = tmp_path / "req.json"
        req.write_text("{}", encoding="utf-8")
        trans = tmp_path / "trans.json"
        trans.write_text("[]", encoding="utf-8")
        with pytest.raises(SystemExit):
            cli.main(["--pages-json", str(req), "--translations-json", str(trans)])

    def test_document_mode(self, tmp_path: Path):
        src = tmp_path / "notes.txt"
        src.write_text("第一段\n\n第二段", encoding="utf-8")
        out = tmp_path / "notes.pdf"
        cli.main(["--document", str(src), "--output", str(out)])
        assert out.exists()

    def test_wrap_with_estimated_width(self, capsys):
        cli.main(["--wrap", "これはとても長いテキストです", "--max-width", "50", "--font-size", "10", "--estimate-width"])
        out = capsys.readouterr().out
        assert out.splitlines() == ["これはとて", "も長いテキ", "ストです"]
