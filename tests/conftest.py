import logging
import os
import stat
import sys

import pytest

from commandy.extract.response import ResponseParser
from commandy.extract.validator import CommandValidator
from commandy.extract.vocabulary import CommandVocabulary

KNOWN = {"ls", "grep", "docker", "git", "find", "cat", "tar", "frob", "rm", "dd"}


def fake_which(name):
    return f"/usr/bin/{name}" if name in KNOWN else None


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.commandy and any COMMANDY_* settings."""
    for k in list(os.environ):
        if k.startswith("COMMANDY_"):
            monkeypatch.delenv(k, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("COMMANDY_CONFIG", str(home / ".commandy" / "config.yaml"))
    yield home
    log = logging.getLogger("commandy")
    log.handlers[:] = []
    log.setLevel(logging.NOTSET)


@pytest.fixture
def vocabulary():
    return CommandVocabulary()


@pytest.fixture
def validator(vocabulary):
    return CommandValidator(vocabulary, resolver=fake_which)


@pytest.fixture
def parser(validator):
    return ResponseParser(validator)


@pytest.fixture
def make_script(tmp_path):
    """Write an executable /bin/sh script standing in for the llama.cpp binary."""
    if sys.platform == "win32":
        pytest.skip("needs /bin/sh")

    def _make(body: str, name: str = "llama-cpp"):
        p = tmp_path / name
        p.write_text("#!/bin/sh\n" + body + "\n", encoding="utf-8")
        p.chmod(p.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return p

    return _make
