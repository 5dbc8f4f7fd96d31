"""Tests for phrasechain.cli module."""

import json

import pytest

from phrasechain import cli


@pytest.fixture
def write_bundle(tmp_path):
    """Write a bundle file and return its path."""

    def _write(name, content):
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write


@pytest.mark.unit
class TestValidateCommand:
    """Tests for the phrasechain-validate entry point."""

    def test_valid_bundle_exits_zero(self, write_bundle, capsys):
        """A clean bundle exits 0 and reports ok."""
        path = write_bundle("en.json", {"itemCount": {"one": "1", "other": "n"}})
        assert cli.main([str(path), "--plural-keys", "itemCount"]) == cli.EXIT_OK
        assert f"{path}: ok" in capsys.readouterr().out

    def test_issues_exit_one(self, write_bundle, capsys):
        """Issues are printed as 'file: path: message' and exit 1."""
        path = write_bundle("en.json", {"itemCount": {"one": 1, "other": "n"}})
        assert cli.main([str(path), "--plural-keys", "itemCount"]) == cli.EXIT_ISSUES
        out = capsys.readouterr().out
        assert f"{path}: itemCount.one: Pluralization value" in out

    def test_plural_suffix(self, write_bundle, capsys):
        """--plural-suffix identifies plural keys by suffix."""
        path = write_bundle("en.json", {"cart": {"lineCount": {"one": "1"}}})
        assert cli.main([str(path), "--plural-suffix", "Count"]) == cli.EXIT_ISSUES
        assert "cart.lineCount" in capsys.readouterr().out

    def test_date_formats(self, write_bundle):
        """--date-formats replaces the allowed date formats."""
        path = write_bundle("en.json", {"a": "{date:fullDate}"})
        assert cli.main([str(path)]) == cli.EXIT_ISSUES
        assert cli.main([str(path), "--date-formats", "fullDate"]) == cli.EXIT_OK

    def test_check_placeholders(self, write_bundle):
        """--check-placeholders enables placeholder name checks."""
        path = write_bundle("en.json", {"a": "{año}"})
        assert cli.main([str(path)]) == cli.EXIT_OK
        assert cli.main([str(path), "--check-placeholders"]) == cli.EXIT_ISSUES

    def test_required_and_optional(self, write_bundle):
        """--required and --optional configure plural categories."""
        path = write_bundle("ru.json", {"n": {"one": "a", "few": "b", "many": "c", "other": "d"}})
        args = [str(path), "--plural-keys", "n"]
        assert cli.main(args) == cli.EXIT_OK
        assert cli.main([*args, "--optional"]) == cli.EXIT_ISSUES
        assert cli.main([*args, "--required", "one", "few", "many", "other"]) == cli.EXIT_OK

    def test_yaml_input(self, write_bundle):
        """YAML files are parsed by extension."""
        path = write_bundle("en.yml", "greeting: 'Hi {date:timestamp}'\n")
        assert cli.main([str(path)]) == cli.EXIT_ISSUES

    def test_root_issue_reported(self, write_bundle, capsys):
        """A non-object root is reported at <root>."""
        path = write_bundle("en.json", ["a"])
        assert cli.main([str(path)]) == cli.EXIT_ISSUES
        assert f"{path}: <root>: Bundle root must be an object" in capsys.readouterr().out

    def test_unreadable_file_exits_two(self, write_bundle, tmp_path, capsys):
        """Missing or malformed files exit 2."""
        assert cli.main([str(tmp_path / "missing.json")]) == cli.EXIT_UNREADABLE
        broken = write_bundle("broken.json", "{nope")
        assert cli.main([str(broken)]) == cli.EXIT_UNREADABLE
        assert "cannot read bundle" in capsys.readouterr().err

    def test_multiple_files(self, write_bundle, capsys):
        """Every file is validated; any issue makes the run fail."""
        good = write_bundle("en.json", {"a": "fine"})
        bad = write_bundle("es.json", {"a": "{date:ts}"})
        assert cli.main([str(good), str(bad)]) == cli.EXIT_ISSUES
        out = capsys.readouterr().out
        assert f"{good}: ok" in out
        assert f"{bad}: a: Invalid date format" in out

    def test_unreadable_file_does_not_stop_the_run(self, write_bundle, tmp_path, capsys):
        """Files after an unreadable one are still validated; exit 2 wins."""
        missing = tmp_path / "missing.json"
        good = write_bundle("en.json", {"a": "fine"})
        bad = write_bundle("es.json", {"a": "{date:ts}"})
        assert cli.main([str(missing), str(good), str(bad)]) == cli.EXIT_UNREADABLE
        captured = capsys.readouterr()
        assert f"{missing}: cannot read bundle" in captured.err
        assert f"{good}: ok" in captured.out
        assert f"{bad}: a: Invalid date format" in captured.out

    def test_configures_logging(self, write_bundle, monkeypatch):
        """--log-level and --json-logs are passed to configure_logging."""
        calls = []
        monkeypatch.setattr(
            cli, "configure_logging", lambda **kwargs: calls.append(kwargs)
        )
        path = write_bundle("en.json", {"a": "fine"})
        cli.main([str(path)])
        cli.main([str(path), "--log-level", "debug", "--json-logs"])
        assert calls == [
            {"log_level": "WARNING", "json_output": False},
            {"log_level": "debug", "json_output": True},
        ]
