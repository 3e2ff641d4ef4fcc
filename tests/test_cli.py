"""
Tests for the command-line interface.

Run with: pytest tests/test_cli.py -v
"""

from typer.testing import CliRunner

from tehthu import __version__
from tehthu.cli import app

runner = CliRunner()


class TestTranslateCommand:
    """Tests for `tehthu translate`."""

    def test_translate(self, settings_file, spanish_dict):
        result = runner.invoke(app, ["translate", "Hello world", "--dict", str(spanish_dict)])
        assert result.exit_code == 0
        assert "Hola mundo" in result.output

    def test_reverse(self, settings_file, spanish_dict):
        result = runner.invoke(app, ["translate", "Hola mundo", "-d", str(spanish_dict), "--reverse"])
        assert result.exit_code == 0
        assert "Hello world" in result.output

    def test_show_log(self, settings_file, spanish_dict):
        result = runner.invoke(
            app, ["translate", "hello zebra", "--dict", str(spanish_dict), "--show-log"]
        )
        assert result.exit_code == 0
        assert "Parsing complete." in result.output
        assert "zebra" in result.output

    def test_does_not_remember(self, settings_file, spanish_dict):
        runner.invoke(app, ["translate", "hello", "--dict", str(spanish_dict)])
        assert not settings_file.exists()

    def test_missing_dictionary(self, settings_file, tmp_path):
        result = runner.invoke(app, ["translate", "hello", "--dict", str(tmp_path / "nope.teh")])
        assert result.exit_code == 1

    def test_no_dictionary_remembered(self, settings_file):
        result = runner.invoke(app, ["translate", "hello"])
        assert result.exit_code == 1
        assert "none remembered" in result.output


class TestOpenCommand:
    """Tests for `tehthu open` and the remembered dictionary."""

    def test_open_remembers(self, settings_file, spanish_dict):
        result = runner.invoke(app, ["open", str(spanish_dict)])
        assert result.exit_code == 0
        assert "English-to-Spanish dictionary remembered (7 words)" in result.output
        assert settings_file.exists()

        result = runner.invoke(app, ["translate", "hello"])
        assert result.exit_code == 0
        assert "hola" in result.output

    def test_env_dictionary(self, settings_file, spanish_dict, monkeypatch):
        monkeypatch.setenv("TEHTHU_DICTIONARY", str(spanish_dict))
        result = runner.invoke(app, ["translate", "world"])
        assert result.exit_code == 0
        assert "mundo" in result.output


class TestShellCommand:
    def test_session(self, settings_file, spanish_dict):
        commands = "Hello world\n:swap\nHola\n:names\n:quit\n"
        result = runner.invoke(
            app, ["shell", "--dict", str(spanish_dict), "--hide-log"], input=commands
        )
        assert result.exit_code == 0
        assert "Hola mundo" in result.output
        assert "Hello" in result.output
        assert "Left: English" in result.output
        assert settings_file.exists()

    def test_eof_exits(self, settings_file, spanish_dict):
        result = runner.invoke(app, ["shell", "--dict", str(spanish_dict)], input="hello\n")
        assert result.exit_code == 0
        assert "hola" in result.output


class TestInspectCommand:
    def test_inspect(self, settings_file, spanish_dict):
        result = runner.invoke(app, ["inspect", "--dict", str(spanish_dict)])
        assert result.exit_code == 0
        assert "English" in result.output
        assert "-ning" in result.output
        assert "banco, orilla" in result.output


class TestInfoCommands:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_info(self, settings_file):
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "Typer" in result.output
        assert "0 errors" in result.output
