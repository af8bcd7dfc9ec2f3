"""Shared test fixtures and configuration."""

import os
import shutil
import subprocess
from pathlib import Path
from types import SimpleNamespace

import pytest

from gitat.git.exceptions import ObjectNotFoundError, RevisionNotFoundError
from gitat.git.objects import Commit, Signature


class FakeRepository:
    """In-memory repository recording which commits were loaded."""

    def __init__(self, commits, refs=None):
        self.commits = {c.oid: c for c in commits}
        self.refs = dict(refs or {})
        self.loaded = []
        self.fail_on = set()

    def resolve_revision(self, spec):
        if spec in self.refs:
            return self.refs[spec]
        if spec in self.commits:
            return spec
        raise RevisionNotFoundError(f"revspec '{spec}' not found")

    def find_commit(self, oid):
        self.loaded.append(oid)
        if oid in self.fail_on:
            raise ObjectNotFoundError(f"object {oid} missing")
        try:
            return self.commits[oid]
        except KeyError:
            raise ObjectNotFoundError(f"object {oid} missing")


@pytest.fixture
def make_commit():
    """Factory for Commit objects with a given time, message and parents."""

    def _make(oid, time, message, parents=()):
        if isinstance(message, str):
            message = message.encode("utf-8")
        sig = Signature(name="Test", email="test@example.com", time=time, offset="+0000")
        return Commit(
            oid=oid,
            tree="4b825dc642cb6eb9a060e54bf8d69288fbee4904",
            parents=tuple(parents),
            author=sig,
            committer=sig,
            message=message,
        )

    return _make


@pytest.fixture
def linear_repo(make_commit):
    """Fake C1 <- C2 <- C3 history on master."""
    c1 = make_commit("c1", 1000, "Add bar content\n")
    c2 = make_commit("c2", 2000, "Update: maximum fooness\n", parents=["c1"])
    c3 = make_commit(
        "c3",
        3000,
        "Update: maximum barness\n\nThis is the maximum\nbar content.\n",
        parents=["c2"],
    )
    return FakeRepository([c1, c2, c3], refs={"HEAD": "c3", "master": "c3", "master~1": "c2"})


@pytest.fixture
def diamond_repo(make_commit):
    """Fake history with a merge: base <- (left, right) <- merge."""
    base = make_commit("base", 100, "Initial commit\n")
    left = make_commit("left", 300, "Left side\n", parents=["base"])
    right = make_commit("right", 200, "Right side\n", parents=["base"])
    merge = make_commit("merge", 400, "Merge right into left\n", parents=["left", "right"])
    return FakeRepository([base, left, right, merge], refs={"HEAD": "merge"})


# Real repositories

_GIT = shutil.which("git")

# Git rejects "0 +0000" as a date, so default to a real epoch
_DEFAULT_DATE = 1500000000


def _git_env(home: Path, date: int = _DEFAULT_DATE) -> dict:
    env = dict(os.environ)
    env.update(
        {
            "HOME": str(home),
            "GIT_CONFIG_NOSYSTEM": "1",
            "GIT_AUTHOR_NAME": "Test Author",
            "GIT_AUTHOR_EMAIL": "author@example.com",
            "GIT_COMMITTER_NAME": "Test Committer",
            "GIT_COMMITTER_EMAIL": "committer@example.com",
            "GIT_AUTHOR_DATE": f"{date} +0000",
            "GIT_COMMITTER_DATE": f"{date} +0000",
        }
    )
    return env


def _git(path: Path, home: Path, *args: str, date: int = _DEFAULT_DATE) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=path,
        env=_git_env(home, date),
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def history_repo(tmp_path):
    """Real repository with the three-commit history on master.

    C1 "Add bar content", C2 "Update: maximum fooness", and C3
    "Update: maximum barness" (with a body mentioning bar content), each one
    second apart. The branch "branch" and tag "v-foo" (annotated, at C2)
    are also created.
    """
    if _GIT is None:
        pytest.skip("git is not installed")

    home = tmp_path / "home"
    home.mkdir()
    path = tmp_path / "repo"
    path.mkdir()

    _git(path, home, "init", "-q")
    _git(path, home, "symbolic-ref", "HEAD", "refs/heads/master")

    messages = [
        "Add bar content",
        "Update: maximum fooness",
        "Update: maximum barness\n\nThis is the maximum\nbar content.",
    ]
    oids = []
    for i, message in enumerate(messages):
        date = 1500000000 + i
        (path / "file.txt").write_text(f"revision {i}\n")
        _git(path, home, "add", "file.txt", date=date)
        _git(path, home, "-c", "commit.gpgsign=false", "commit", "-q", "-m", message, date=date)
        oids.append(_git(path, home, "rev-parse", "HEAD"))

    _git(path, home, "branch", "branch")
    _git(path, home, "tag", "-a", "v-foo", "-m", "Tag fooness", oids[1], date=1500000010)

    return SimpleNamespace(path=path, home=home, c1=oids[0], c2=oids[1], c3=oids[2])


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point GITAT_CONFIG at a file that does not exist."""
    config_file = tmp_path / "gitat-config.yaml"
    monkeypatch.setenv("GITAT_CONFIG", str(config_file))
    return config_file


@pytest.fixture
def fake_repository():
    """The FakeRepository class, for tests that build their own history."""
    return FakeRepository
