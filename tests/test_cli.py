"""
Tests for the belaccent command line.
"""

import json

import pytest

from belaccent.cli import build_parser, main


def run_build(grammardb_dir, db_path, *extra):
    return main([
        "-q", "build",
        "--source-dir", str(grammardb_dir),
        "--db-path", str(db_path),
        "--map-size", str(10 * 1024 * 1024),
        *extra,
    ])


class TestBuild:

    def test_build_then_skip(self, grammardb_dir, tmp_path, capsys):
        db_path = tmp_path / "cli.lmdb"

        assert run_build(grammardb_dir, db_path) == 0
        assert "Total lemmas" in capsys.readouterr().out

        assert run_build(grammardb_dir, db_path) == 0
        assert "Total lemmas" not in capsys.readouterr().out

    def test_force(self, grammardb_dir, tmp_path, capsys):
        db_path = tmp_path / "cli.lmdb"
        run_build(grammardb_dir, db_path)
        capsys.readouterr()

        assert run_build(grammardb_dir, db_path, "--force") == 0
        assert "Total lemmas" in capsys.readouterr().out

    @pytest.mark.parametrize("flag,value", [("--workers", "0"), ("--map-size", "10")])
    def test_invalid_option_fails_cleanly(self, grammardb_dir, tmp_path, caplog, flag, value):
        code = run_build(grammardb_dir, tmp_path / "cli.lmdb", flag, value)

        assert code == 1
        assert f"Invalid {flag}" in caplog.text
        assert not (tmp_path / "cli.lmdb").exists()


class TestAnnotate:

    def test_plain_output(self, grammardb_dir, tmp_path, capsys):
        db_path = tmp_path / "cli.lmdb"
        run_build(grammardb_dir, db_path)
        capsys.readouterr()

        code = main(["-q", "annotate", "--db-path", str(db_path), "Стары замак стаяў на гары."])

        out = capsys.readouterr().out
        assert code == 0
        assert "зама\u0301к" in out
        assert "homograph" in out

    def test_json_output(self, grammardb_dir, tmp_path, capsys):
        db_path = tmp_path / "cli.lmdb"
        run_build(grammardb_dir, db_path)
        capsys.readouterr()

        main(["-q", "annotate", "--json", "--db-path", str(db_path), "Я іду дамоў.", "гара"])

        lines = capsys.readouterr().out.strip().splitlines()
        first, second = (json.loads(line) for line in lines)
        assert first["text"] == "Я іду дамоў."
        assert first["accentedWords"][0]["word"] == "дамоў"
        assert second["accentedWords"] == []


class TestStats:

    def test_stats(self, grammardb_dir, tmp_path, capsys):
        db_path = tmp_path / "cli.lmdb"
        run_build(grammardb_dir, db_path)
        capsys.readouterr()

        assert main(["-q", "stats", "--db-path", str(db_path), "--technical", "5"]) == 0

        out = capsys.readouterr().out
        assert "Technical words" in out
        assert "дрыг" in out

    def test_missing_database(self, tmp_path):
        assert main(["-q", "stats", "--db-path", str(tmp_path / "absent.lmdb")]) == 1


def test_parser_requires_command():
    parser = build_parser()
    args = parser.parse_args(["build", "--workers", "2"])
    assert args.workers == 2
    assert args.func.__name__ == "cmd_build"
