"""Shared fixtures: dictionary files written into a temporary directory."""

import pytest

from tehthu.translate import Translator


SPANISH_DICT = """\
[English] [Spanish]
{ning}|{iendo}
hello|hola
world|mundo
run|correr
bank|banco
bank|orilla
iphone|iPhone
i|yo
good morning|buenos días
"""


@pytest.fixture
def write_dict(tmp_path):
    """Factory writing a dictionary file and returning its path."""
    def _write(content: str, name: str = "dict.teh", encoding: str = "utf-8"):
        path = tmp_path / name
        path.write_text(content, encoding=encoding)
        return path
    return _write


@pytest.fixture
def spanish_dict(write_dict):
    return write_dict(SPANISH_DICT, "english-spanish.teh")


@pytest.fixture
def translator(spanish_dict):
    """A parsed English/Spanish translator."""
    t = Translator(spanish_dict)
    assert t.reparse()
    return t


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    """Point the settings record at a temporary file."""
    path = tmp_path / "home" / "last_dictionary"
    monkeypatch.setattr("tehthu.settings.SETTINGS_FILE", path)
    monkeypatch.delenv("TEHTHU_DICTIONARY", raising=False)
    return path
