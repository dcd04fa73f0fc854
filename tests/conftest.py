"""Pytest configuration and fixtures."""

from datetime import datetime

import pytest
from git import Actor, Repo

from histpack.models import Change, ChangeKind, Commit


def make_commit(
    short_hash: str = "1234567",
    date: datetime = datetime(2023, 1, 1),
    message: str = "Add new feature",
    description: str | None = None,
    is_merge: bool = False,
    changes: tuple[Change, ...] = (),
) -> Commit:
    """Build a commit with sensible defaults for rendering tests."""
    return Commit(
        hash=short_hash.ljust(40, "0"),
        short_hash=short_hash,
        date=date,
        author="John Doe",
        message=message,
        description=description,
        is_merge=is_merge,
        changes=tuple(changes),
    )


@pytest.fixture
def commit_factory():
    return make_commit


@pytest.fixture
def added():
    def _added(path: str, content: str | None = None, language: str = "") -> Change:
        return Change(ChangeKind.ADDED, path, content=content, language=language)

    return _added


@pytest.fixture
def git_repo(tmp_path):
    """A small repository: root commit, an addition, an update and a deletion."""
    path = tmp_path / "repo"
    repo = Repo.init(path)
    alice = Actor("Alice Smith", "alice@example.com")
    bob = Actor("Bob Jones", "bob@example.com")

    def commit(message: str, author: Actor, date: str) -> None:
        repo.index.commit(
            message,
            author=author,
            committer=author,
            author_date=date,
            commit_date=date,
        )

    (path / "README.md").write_text("# Demo\n")
    (path / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR")
    repo.index.add(["README.md", "logo.png"])
    commit("Initial commit", alice, "2023-01-01T10:00:00")

    (path / "app.py").write_text("print('hi')\n")
    repo.index.add(["app.py"])
    commit("Add app\n\nWith a longer body.", bob, "2023-01-02T10:00:00")

    (path / "README.md").write_text("# Demo\n\nMore docs\n")
    repo.index.add(["README.md"])
    commit("Update readme", alice, "2023-01-03T10:00:00")

    repo.index.remove(["app.py"], working_tree=True)
    commit("Remove app", alice, "2023-01-04T10:00:00")

    repo.close()
    return path


@pytest.fixture
def branchy_repo(tmp_path):
    """A base commit, a feature branch, a rename on the main line and a --no-ff merge."""
    path = tmp_path / "branchy"
    repo = Repo.init(path)
    with repo.config_writer() as config:
        config.set_value("user", "name", "Alice Smith")
        config.set_value("user", "email", "alice@example.com")

    def dated(date: str) -> dict[str, str]:
        return {"GIT_AUTHOR_DATE": date, "GIT_COMMITTER_DATE": date}

    (path / "old.py").write_text("".join(f"value_{i} = {i}\n" for i in range(40)))
    repo.git.add("old.py")
    repo.git.commit("-m", "Base", env=dated("2023-02-01T10:00:00"))
    main = repo.active_branch

    repo.create_head("feature").checkout()
    (path / "f.py").write_text("feature = True\n")
    repo.git.add("f.py")
    repo.git.commit("-m", "Feature work", env=dated("2023-02-02T10:00:00"))

    main.checkout()
    repo.git.mv("old.py", "new.py")
    with open(path / "new.py", "a") as handle:
        handle.write("value_40 = 40\n")
    repo.git.add("new.py")
    repo.git.commit("-m", "Rename module", env=dated("2023-02-03T10:00:00"))

    repo.git.merge("--no-ff", "-m", "Merge feature", "feature", env=dated("2023-02-04T10:00:00"))

    repo.close()
    return path
