"""Tests for the asset-embed command line.

Tests for asset_embed.cli.main():
    - Missing required flag or pattern prints usage and exits 0
    - Successful runs write the output file
    - Single-dash flag spelling
    - YAML config file with command-line overrides
    - Fatal errors exit 1 with a diagnostic on stderr

Run:
    pytest tests/test_cli.py -v
"""

from __future__ import annotations

import gzip
import os

import pytest

from asset_embed.cli import main


@pytest.fixture()
def tree(make_tree):
    return make_tree({"index.html": b"<html></html>\n", "static/app.css": b"body{}"})


class TestUsage:
    def test_missing_pkg_prints_usage(self, tree, tmp_path, capsys) -> None:
        out = tmp_path / "o.go"
        code = main(["--var", "Files", "--out", str(out), "--base", str(tree), "*.html"])
        assert code == 0
        assert not out.exists()
        assert "usage:" in capsys.readouterr().err

    def test_missing_patterns_prints_usage(self, tmp_path, capsys) -> None:
        out = tmp_path / "o.go"
        code = main(["--pkg", "p", "--var", "V", "--out", str(out)])
        assert code == 0
        assert not out.exists()
        assert "usage:" in capsys.readouterr().err


class TestRun:
    def test_writes_output(self, tree, tmp_path, parse_generated) -> None:
        out = tmp_path / "o.go"
        code = main([
            "--pkg", "web", "--var", "Assets", "--out", str(out),
            "--base", str(tree), "*.html", "static/*.css",
        ])
        assert code == 0
        text = out.read_text(encoding="utf-8")
        assert "package web\n" in text
        assert "var Assets = map[string][]byte{\n" in text
        assert parse_generated(text) == [
            ("index.html", b"<html></html>\n"),
            ("static/app.css", b"body{}"),
        ]

    def test_single_dash_flags(self, tree, tmp_path, parse_generated) -> None:
        out = tmp_path / "o.go"
        code = main([
            "-pkg", "web", "-var", "Assets", "-out", str(out),
            "-base", str(tree), "-gzip", "*.html",
        ])
        assert code == 0
        ((key, content),) = parse_generated(out.read_text(encoding="utf-8"))
        assert key == "index.html"
        assert gzip.decompress(content) == b"<html></html>\n"

    def test_default_base_is_cwd(self, tree, tmp_path, monkeypatch, parse_generated) -> None:
        monkeypatch.chdir(tree)
        out = tmp_path / "o.go"
        assert main(["--pkg", "p", "--var", "V", "--out", str(out), "static/*"]) == 0
        assert [k for k, _ in parse_generated(out.read_text(encoding="utf-8"))] == ["static/app.css"]

    def test_empty_pattern_gives_empty_map(self, tree, tmp_path, parse_generated) -> None:
        out = tmp_path / "o.go"
        code = main(["--pkg", "p", "--var", "V", "--out", str(out), "--base", str(tree), ""])
        assert code == 0
        assert parse_generated(out.read_text(encoding="utf-8")) == []

    def test_verbose_logs_progress(self, tree, tmp_path, capsys) -> None:
        out = tmp_path / "o.go"
        main([
            "--pkg", "p", "--var", "V", "--out", str(out),
            "--base", str(tree), "--verbose", "*.html",
        ])
        err = capsys.readouterr().err
        assert "Processing arg *.html" in err
        assert "pattern=*.html" in err

    def test_quiet_by_default(self, tree, tmp_path, capsys) -> None:
        out = tmp_path / "o.go"
        main(["--pkg", "p", "--var", "V", "--out", str(out), "--base", str(tree), "*.html"])
        err = capsys.readouterr().err
        assert "Processing" not in err
        assert "INFO" not in err

    def test_log_file_json(self, tree, tmp_path) -> None:
        out = tmp_path / "o.go"
        log = tmp_path / "logs" / "embed.log"
        main([
            "--pkg", "p", "--var", "V", "--out", str(out), "--base", str(tree),
            "--verbose", "--log-file", str(log), "--log-json", "*.html",
        ])
        lines = log.read_text(encoding="utf-8").splitlines()
        assert lines and all(line.startswith("{") for line in lines)
        assert '"app": "asset-embed"' in lines[0]


class TestConfigFile:
    def test_config_with_override(self, tree, tmp_path, parse_generated) -> None:
        out = tmp_path / "o.go"
        cfg = tmp_path / "embed.yaml"
        cfg.write_text(
            f"pkg: fromfile\n"
            f"var: Files\n"
            f"out: {out.as_posix()}\n"
            f"base: {tree.as_posix()}\n"
            f"patterns: ['*.html']\n"
        )
        assert main(["--config", str(cfg), "--pkg", "fromcli"]) == 0
        text = out.read_text(encoding="utf-8")
        assert "package fromcli\n" in text
        assert [k for k, _ in parse_generated(text)] == ["index.html"]

    def test_positional_patterns_replace_config(self, tree, tmp_path, parse_generated) -> None:
        out = tmp_path / "o.go"
        cfg = tmp_path / "embed.yaml"
        cfg.write_text(
            f"pkg: p\nvar: V\nout: {out.as_posix()}\nbase: {tree.as_posix()}\n"
            f"patterns: ['*.html']\n"
        )
        assert main(["--config", str(cfg), "static/*.css"]) == 0
        assert [k for k, _ in parse_generated(out.read_text(encoding="utf-8"))] == ["static/app.css"]

    def test_invalid_config_is_fatal(self, tmp_path, capsys) -> None:
        cfg = tmp_path / "embed.yaml"
        cfg.write_text("pkg: p\nvar: V\nout: o.go\npatterns: ['*']\ncolour: blue\n")
        assert main(["--config", str(cfg)]) == 1
        assert "Invalid generation request" in capsys.readouterr().err

    def test_missing_config_is_fatal(self, tmp_path, capsys) -> None:
        assert main(["--config", str(tmp_path / "nope.yaml")]) == 1
        assert "Config file not found" in capsys.readouterr().err


class TestFatal:
    def test_bad_glob_exits_nonzero(self, tree, tmp_path, capsys) -> None:
        out = tmp_path / "o.go"
        code = main(["--pkg", "p", "--var", "V", "--out", str(out), "--base", str(tree), "[bad"])
        assert code == 1
        err = capsys.readouterr().err
        assert "CRITICAL" in err
        assert "Unterminated character class" in err

    def test_uncreatable_output_exits_nonzero(self, tree, tmp_path, capsys) -> None:
        out = tmp_path / "missing-dir" / "o.go"
        code = main(["--pkg", "p", "--var", "V", "--out", str(out), "--base", str(tree), "*"])
        assert code == 1
        assert "Cannot create output file" in capsys.readouterr().err

    @pytest.mark.skipif(not os.path.exists("/dev/full"), reason="needs /dev/full")
    def test_full_device_exits_nonzero(self, tree, capsys) -> None:
        code = main(["--pkg", "p", "--var", "V", "--out", "/dev/full", "--base", str(tree), "*"])
        assert code == 1
        assert "output file /dev/full" in capsys.readouterr().err
