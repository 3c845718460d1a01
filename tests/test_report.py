"""Tests for talharpa_report."""

import pytest

from talharpa_dimensions import compute_dimensions
from talharpa_report import generate_dimension_table, hand_positions, print_dimension_report


class TestDimensionTable:
    @pytest.fixture
    def table(self):
        return generate_dimension_table(compute_dimensions(40, 3))

    def test_keys(self, table):
        assert [row["key"] for row in table] == list("ABCDEFGHIJKLMNOPQ")

    def test_values(self, table):
        by_key = {row["key"]: row for row in table}
        assert by_key["A"]["value_mm"] == 400
        assert by_key["B"]["display"] == "664.0"
        assert by_key["D"]["display"] == "108.0"
        assert by_key["N"]["display"] == "35"
        assert by_key["Q"]["display"] == "25"
        assert by_key["M"]["display"] == "106"

    def test_comments(self, table):
        assert table[0]["name"] == "Peg to Bridge"
        assert table[0]["comment"] == "Critical to string scale"


class TestHandPositions:
    def test_octave(self):
        rows = hand_positions(40)
        assert len(rows) == 13
        assert rows[0]["from_nut_cm"] == 0
        assert rows[0]["from_prev_cm"] == 0
        assert rows[12]["from_nut_cm"] == pytest.approx(20)

    def test_steps_shrink(self):
        steps = [r["from_prev_cm"] for r in hand_positions(56)[1:]]
        assert steps == sorted(steps, reverse=True)
        assert sum(steps) == pytest.approx(28)


class TestPrintReport:
    def test_report(self, capsys):
        print_dimension_report(compute_dimensions(56, 4))
        out = capsys.readouterr().out
        assert "CRITICAL DIMENSIONS - 56 CM SCALE, 4 STRINGS" in out
        assert "Neck Thickness" in out
        assert "HAND POSITIONS" in out
