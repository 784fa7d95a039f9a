"""Tests for the command line entry point."""

from __future__ import annotations

import pytest

from iconimport.cli import main


def test_generates_files(icon_project, tmp_path, capsys):
    out_root = tmp_path / "gen"
    code = main([str(icon_project), "--target", "main", "--output-root", str(out_root)])
    assert code == 0

    printed = capsys.readouterr().out.split()
    assert len(printed) == 5
    assert str(out_root / "main" / "drawable-v26" / "ic_launcher.xml") in printed


def test_explicit_output_directory(icon_project, tmp_path, capsys):
    res = tmp_path / "res"
    code = main([str(icon_project), "-t", "flat", "--out", f"flat={res}"])
    assert code == 0
    assert capsys.readouterr().out.split() == [str(res / "drawable" / "ic_logo.xml")]


def test_failure_exit_code(icon_project, tmp_path, capsys):
    code = main([str(icon_project), "--target", "tv", "--output-root", str(tmp_path / "gen")])
    assert code == 1
    assert "tv" in capsys.readouterr().err


def test_target_is_required(icon_project):
    with pytest.raises(SystemExit) as exc:
        main([str(icon_project)])
    assert exc.value.code == 2


def test_bad_destination(icon_project):
    with pytest.raises(SystemExit) as exc:
        main([str(icon_project), "-t", "flat", "--out", "flat"])
    assert exc.value.code == 2
