"""Integration tests for the wndict CLI."""

import json
import logging
import sqlite3

import pytest

from wndict.cli.wndict import main, parse_char_counts
from wndict.export_json import JSON_FILENAME
from wndict.export_sql import DUMP_FILENAME
from wndict.export_sqlite import DATABASE_FILENAME


@pytest.fixture
def output_dir(tmp_path):
    path = tmp_path / "out"
    path.mkdir()
    return path


def run_cli(wordnet_dir, output_dir, *extra):
    argv = ["-d", str(wordnet_dir.directory), "-o", str(output_dir), "--no-progress", *extra]
    return main(argv)


# =============================================================================
# Output Modes
# =============================================================================

class TestOutputModes:

    def test_database_is_default(self, wordnet_dir, output_dir):
        assert run_cli(wordnet_dir, output_dir) == 0

        with sqlite3.connect(output_dir / DATABASE_FILENAME) as conn:
            count = conn.execute("SELECT COUNT(*) FROM word").fetchone()[0]
        assert count == 8

    def test_dump_sql(self, wordnet_dir, output_dir):
        assert run_cli(wordnet_dir, output_dir, "-S") == 0

        assert (output_dir / DUMP_FILENAME).exists()
        assert not (output_dir / DATABASE_FILENAME).exists()

    def test_to_json(self, wordnet_dir, output_dir):
        assert run_cli(wordnet_dir, output_dir, "--to-json") == 0

        with open(output_dir / JSON_FILENAME, encoding='utf-8') as f:
            words = [doc["word"] for doc in json.load(f)]
        assert words[0] == "bank"

    def test_sql_and_json_are_exclusive(self, wordnet_dir, output_dir):
        with pytest.raises(SystemExit) as excinfo:
            run_cli(wordnet_dir, output_dir, "-S", "-J")
        assert excinfo.value.code == 2

    def test_output_directory_from_environment(self, wordnet_dir, output_dir, monkeypatch):
        monkeypatch.setenv("WNDICT_OUTPUT_DIR", str(output_dir))

        assert main(["-d", str(wordnet_dir.directory), "--no-progress", "-J"]) == 0
        assert (output_dir / JSON_FILENAME).exists()

    def test_verbose_logs_debug(self, wordnet_dir, output_dir, caplog):
        package_logger = logging.getLogger("wndict")
        try:
            with caplog.at_level(logging.DEBUG):
                assert run_cli(wordnet_dir, output_dir, "-J", "-v") == 0
            assert package_logger.level == logging.DEBUG
        finally:
            package_logger.setLevel(logging.NOTSET)

        assert "JSON created successfully!" in caplog.text

    def test_progress_and_stats(self, wordnet_dir, output_dir, capsys):
        assert main(["-d", str(wordnet_dir.directory), "-o", str(output_dir), "-J", "--stats"]) == 0

        out = capsys.readouterr().out
        assert "Total words: 8" in out
        assert "noun: 5" in out


# =============================================================================
# Filters
# =============================================================================

class TestFilterOptions:

    def read_words(self, output_dir):
        with open(output_dir / JSON_FILENAME, encoding='utf-8') as f:
            return [doc["word"] for doc in json.load(f)]

    def test_char_counts(self, wordnet_dir, output_dir):
        assert run_cli(wordnet_dir, output_dir, "-J", "-c", "3,4") == 0
        assert self.read_words(output_dir) == ["bank", "cat", "dog", "run"]

    def test_min_max(self, wordnet_dir, output_dir):
        assert run_cli(wordnet_dir, output_dir, "-J", "-m", "5", "-M", "6") == 0
        assert self.read_words(output_dir) == ["canine", "ghost", "lonely"]

    def test_keep_numbers(self, wordnet_dir, output_dir):
        assert run_cli(wordnet_dir, output_dir, "-J", "-k") == 0
        assert "3d" in self.read_words(output_dir)

    def test_only_whole_words(self, wordnet_dir, output_dir):
        assert run_cli(wordnet_dir, output_dir, "-J", "-W") == 0
        assert "jack-o'-lantern" not in self.read_words(output_dir)

    def test_char_counts_conflict(self, wordnet_dir, output_dir):
        with pytest.raises(SystemExit) as excinfo:
            run_cli(wordnet_dir, output_dir, "-c", "5", "-m", "2")
        assert excinfo.value.code == 2

    def test_parse_char_counts(self):
        assert parse_char_counts("3, 5,,7") == [3, 5, 7]


# =============================================================================
# Configuration File
# =============================================================================

class TestConfigFile:

    def test_config_supplies_settings(self, wordnet_dir, output_dir, tmp_path):
        config_file = tmp_path / "wndict.yaml"
        config_file.write_text(
            f"directory: {wordnet_dir.directory}\n"
            f"output_directory: {output_dir}\n"
            "mode: json\n"
            "char_counts: [3]\n",
            encoding='utf-8'
        )

        assert main(["--config", str(config_file), "--no-progress"]) == 0

        with open(output_dir / JSON_FILENAME, encoding='utf-8') as f:
            assert [doc["word"] for doc in json.load(f)] == ["cat", "dog", "run"]

    def test_cli_overrides_config(self, wordnet_dir, output_dir, tmp_path):
        config_file = tmp_path / "wndict.yaml"
        config_file.write_text("mode: json\nchar_counts: [3]\n", encoding='utf-8')

        assert run_cli(wordnet_dir, output_dir, "--config", str(config_file), "-S", "-M", "4") == 0

        assert (output_dir / DUMP_FILENAME).exists()
        sql = (output_dir / DUMP_FILENAME).read_text(encoding='utf-8')
        assert "'bank'" in sql

    def test_invalid_config(self, wordnet_dir, output_dir, tmp_path):
        config_file = tmp_path / "wndict.yaml"
        config_file.write_text("colour: red\n", encoding='utf-8')

        assert run_cli(wordnet_dir, output_dir, "--config", str(config_file)) == 1

    def test_config_path_is_directory(self, wordnet_dir, output_dir, tmp_path):
        assert run_cli(wordnet_dir, output_dir, "--config", str(tmp_path)) == 1

    def test_directory_required(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["--no-progress"])
        assert excinfo.value.code == 2


# =============================================================================
# Fatal Errors
# =============================================================================

class TestFatalErrors:

    def test_missing_source_directory(self, tmp_path, output_dir):
        assert main(["-d", str(tmp_path / "missing"), "-o", str(output_dir), "--no-progress"]) == 1

    def test_missing_output_directory(self, wordnet_dir, tmp_path):
        assert run_cli(wordnet_dir, tmp_path / "missing") == 1

    def test_no_words_found(self, wordnet_dir, output_dir):
        assert run_cli(wordnet_dir, output_dir, "-c", "44") == 1
        assert list(output_dir.iterdir()) == []

    def test_unreadable_index_file(self, wordnet_dir, output_dir):
        (wordnet_dir.directory / "index.verb").write_bytes(b"caf\xe9 00000000\n")

        assert run_cli(wordnet_dir, output_dir) == 1
        assert list(output_dir.iterdir()) == []

    @pytest.mark.parametrize("flag,filename", [
        ([], DATABASE_FILENAME),
        (["-S"], DUMP_FILENAME),
        (["-J"], JSON_FILENAME),
    ])
    def test_output_not_writable(self, wordnet_dir, output_dir, flag, filename):
        (output_dir / filename).mkdir()

        assert run_cli(wordnet_dir, output_dir, *flag) == 1
        assert [path.name for path in output_dir.iterdir()] == [filename]
