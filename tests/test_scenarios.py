"""End-to-end searches over a real repository."""

import pytest

from gitat.errors import ErrorKind, SearchError
from gitat.git.repository import Repository
from gitat.search import DEFAULT_REVISION, SearchEngine, SearchRequest


@pytest.fixture
def run(history_repo):
    repo = Repository.discover(history_repo.path)

    def _run(pattern, revision=DEFAULT_REVISION, summary=False):
        return SearchEngine(repo).search(
            SearchRequest(pattern=pattern, revision=revision, summary_only=summary)
        )

    yield _run
    repo.close()


def test_simple_results(run, history_repo):
    assert run("maximum fooness") == history_repo.c2
    assert run("maximum barness") == history_repo.c3
    assert run(r"max.+\s+bar.*content") == history_repo.c3


def test_rev_results(run, history_repo):
    assert run("maximum fooness", revision="master~1") == history_repo.c2
    assert run("maximum", revision="branch") == history_repo.c3

    with pytest.raises(SearchError) as exc_info:
        run("maximum barness", revision="master~1")
    assert exc_info.value.kind is ErrorKind.NO_SUCH_REVISION


def test_youngest_results(run, history_repo):
    assert run("Update", summary=True) == history_repo.c3
    assert run("content") == history_repo.c3
    assert run("bar") == history_repo.c3
    assert run("Add", summary=True) == history_repo.c1


def test_tag_start(run, history_repo):
    assert run("Update", revision="v-foo") == history_repo.c2


def test_missing_revision_same_as_no_match(run):
    with pytest.raises(SearchError) as missing:
        run("Update", revision="no-such-ref")
    with pytest.raises(SearchError) as exhausted:
        run("no commit says this")

    assert missing.value == exhausted.value
    assert str(missing.value) == str(exhausted.value)
