import runpy
import sys
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parent.parent / "examples" / "basic_usage.py"


def test_driver_converges(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["basic_usage.py", "--target", "3.0", "--lr", "0.1",
                                      "--steps", "200", "--seed", "0"])
    runpy.run_path(str(SCRIPT), run_name="__main__")
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].startswith("loss: ")
    assert float(lines[-1]) == pytest.approx(3.0, abs=1e-6)


def test_driver_short_run(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["basic_usage.py", "--steps", "5", "--seed", "1", "--verbose"])
    runpy.run_path(str(SCRIPT), run_name="__main__")
    out = capsys.readouterr().out.strip().splitlines()
    assert len(out) == 2
    assert 0.0 <= float(out[-1]) <= 2.0
