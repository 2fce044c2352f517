"""
Tests for the plain-text export.
"""

from calcpad import exporter
from calcpad.DocumentEngine import evaluate_document


def test_lines_are_padded_next_to_results():
    text = "1 + 1\n\nx"
    assert exporter.export_text(text, ["2", "", ""], width=10) == "1 + 1      2\n\nx"


def test_default_width_matches_editor_export():
    line = exporter.export_text("1 + 1", ["2"])
    assert line == "1 + 1".ljust(50) + " 2"


def test_missing_results_are_treated_as_empty():
    assert exporter.export_text("a\nb", ["1"], width=3) == "a   1\nb"


def test_write_export(tmp_path):
    text = "price = 4.5\nprice * 3 // three of them\n1/0"
    document = evaluate_document(text)
    path = exporter.write_export(tmp_path / exporter.DEFAULT_EXPORT_NAME, text, document.display, width=30)

    lines = path.read_text(encoding="utf-8").split("\n")
    assert lines[0] == "price = 4.5".ljust(30) + " 4.5"
    assert lines[1].endswith(" 13.5")
    assert lines[2].endswith(" Error: Division by zero")
