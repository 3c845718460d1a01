"""Tests for the talharpa command line."""

import json
import os

import matplotlib
matplotlib.use("Agg")

import pytest

from talharpa import main


class TestMain:
    def test_writes_svgs(self, tmp_path, capsys):
        assert main(["--scale", "40", "--strings", "3", "--output-dir", str(tmp_path)]) == 0
        files = sorted(os.listdir(tmp_path))
        assert files == ["talharpa_frame.svg", "talharpa_front.svg", "talharpa_side.svg"]
        out = capsys.readouterr().out
        assert "All constraints PASSED" in out
        assert "Overall length: 664.0 mm" in out

    def test_report_only(self, tmp_path, capsys):
        main(["--scale", "56", "--strings", "4", "--report-only", "--output-dir", str(tmp_path)])
        assert os.listdir(tmp_path) == []
        assert "CRITICAL DIMENSIONS" in capsys.readouterr().out

    def test_skip_validation(self, tmp_path, capsys):
        main(["--report-only", "--skip-validation", "--output-dir", str(tmp_path)])
        assert "VALIDATION" not in capsys.readouterr().out

    def test_config_overrides(self, tmp_path):
        cfg = tmp_path / "cfg.json"
        cfg.write_text(json.dumps({"pixel_width": 500}))
        saved = tmp_path / "saved.json"
        main(["--config", str(cfg), "--extra-margin", "30", "--report-only",
              "--save-config", str(saved), "--output-dir", str(tmp_path)])
        data = json.loads(saved.read_text())
        assert data["pixel_width"] == 500
        assert data["extra_margin"] == 30

    def test_preview(self, tmp_path):
        png = tmp_path / "p.png"
        main(["--output-dir", str(tmp_path), "--preview", str(png)])
        assert png.exists()

    @pytest.mark.parametrize("args", [
        ["--scale", "80"],
        ["--strings", "0"],
        ["--margin", "-5"],
    ])
    def test_invalid_input_exits(self, args, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(args + ["--output-dir", str(tmp_path)])
        assert exc.value.code == 2
