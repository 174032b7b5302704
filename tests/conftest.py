"""Shared fixtures for commitguard tests."""

import random
import shutil
import subprocess
from types import SimpleNamespace

import pytest

from commitguard.checksum.entropy import HEX_CHARS
from commitguard.git.addition import Addition
from commitguard.ignore.config import IgnoreConfig, parse_config


@pytest.fixture
def aws_key():
    # Assembled at runtime so this file never trips a scanner itself.
    return "AKIA" + "IOSFODNN7EXAMPLQ"


@pytest.fixture
def random_b64():
    """A 46 character base64 token with entropy well above 4.5 bits/char."""
    return "wJalrXUtnFEMI/K7MDENG/" + "bPxRfiCYzEXAMPLEKEY+q9Z3"


@pytest.fixture
def random_hex():
    def _hex(length=64, seed=1234):
        rng = random.Random(seed)
        return "".join(rng.choice(HEX_CHARS[:16]) for _ in range(length))
    return _hex


@pytest.fixture
def make_addition():
    def _make(path, content=b"", **kwargs):
        if isinstance(content, str):
            content = content.encode()
        return Addition.from_bytes(path, content, **kwargs)
    return _make


@pytest.fixture
def empty_config():
    return IgnoreConfig()


@pytest.fixture
def rc_config():
    def _rc(text):
        return parse_config(text.encode())
    return _rc


@pytest.fixture
def rc_reader():
    """Build a repository reader serving the given files."""
    def _reader(files):
        def read(path):
            data = files.get(path, b"")
            return data.encode() if isinstance(data, str) else data
        return read
    return _reader


@pytest.fixture
def git_repo(tmp_path):
    """An initialised git repository with a committer identity."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")

    def git(*args):
        return subprocess.run(["git", *args], cwd=tmp_path, capture_output=True, check=True)

    git("init", "-q")
    git("config", "user.email", "test@example.com")
    git("config", "user.name", "Test User")
    git("config", "commit.gpgsign", "false")
    return SimpleNamespace(path=tmp_path, git=git)
