"""Tests for the command line interface."""

from __future__ import annotations

import json
import os

import pytest
from click.testing import CliRunner

from treesum.cli import main

pytestmark = pytest.mark.usefixtures("isolate_settings")


def _entry_fields(output: str, name: str) -> list[str]:
    for line in output.splitlines():
        fields = line.split()
        if fields and fields[-1] == name:
            return fields
    raise AssertionError(f"no entry line for {name!r} in:\n{output}")


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    root = tmp_path / "work"
    root.mkdir()
    (root / "empty.txt").touch()
    (root / "data.txt").write_bytes(b"0123456789")
    (root / "sub").mkdir()
    monkeypatch.chdir(root)
    return root


class TestMain:
    def test_defaults_to_current_directory(self, workdir):
        result = CliRunner().invoke(main, [])
        assert result.exit_code == 0, result.output
        assert "(root) .:" in result.output
        assert "sub/:" in result.output
        assert result.output.rstrip().endswith("total bytes: 10")

    def test_explicit_paths(self, workdir, tmp_path):
        other = tmp_path / "other"
        other.mkdir()
        (other / "x").write_bytes(b"abc")

        result = CliRunner().invoke(main, [str(workdir), str(other)])

        assert result.exit_code == 0, result.output
        assert f"(root) {workdir}:" in result.output
        assert f"(root) {other}:" in result.output
        assert "total bytes: 10" in result.output
        assert "total bytes: 3" in result.output

    def test_missing_root_exits_with_error(self, tmp_path):
        result = CliRunner().invoke(main, [str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "Error: Cannot read metadata of root" in result.output

    def test_hashlen_option(self, workdir):
        result = CliRunner().invoke(main, ["--hashlen", "4"])
        assert result.exit_code == 0, result.output
        assert _entry_fields(result.output, "empty.txt")[-2] == "----"
        assert len(_entry_fields(result.output, "data.txt")[-2]) == 4

    def test_hashlen_out_of_range(self, workdir):
        assert CliRunner().invoke(main, ["--hashlen", "0"]).exit_code == 2
        assert CliRunner().invoke(main, ["--hashlen", "33"]).exit_code == 2

    def test_maxsumsize_zero_disables_hashing(self, workdir):
        result = CliRunner().invoke(main, ["-m", "0"])
        assert result.exit_code == 0, result.output
        assert _entry_fields(result.output, "data.txt")[-2] == "--------"

    def test_settings_provide_defaults(self, workdir, isolate_settings):
        isolate_settings.parent.mkdir(parents=True)
        isolate_settings.write_text(json.dumps({"scan": {"hashlen": 6, "maxsumsize": 0}}))

        result = CliRunner().invoke(main, [])

        assert result.exit_code == 0, result.output
        assert _entry_fields(result.output, "data.txt")[-2] == "------"

    def test_option_overrides_settings(self, workdir, isolate_settings):
        isolate_settings.parent.mkdir(parents=True)
        isolate_settings.write_text(json.dumps({"scan": {"hashlen": 6}}))

        result = CliRunner().invoke(main, ["--hashlen", "10"])

        assert result.exit_code == 0, result.output
        assert len(_entry_fields(result.output, "data.txt")[-2]) == 10

    def test_undecodable_name_does_not_abort(self, workdir):
        (workdir / os.fsdecode(b"bad\xffname")).write_bytes(b"abc")
        (workdir / "zz").write_bytes(b"12")

        result = CliRunner().invoke(main, [])

        assert result.exit_code == 0, result.output
        assert "bad\ufffdname" in result.output
        assert _entry_fields(result.output, "zz")[1] == "2"
        assert result.output.rstrip().endswith("total bytes: 15")

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "treesum" in result.output
