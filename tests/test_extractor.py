"""Tests for the end-to-end history extractor."""

from datetime import datetime

import pytest

from histpack.extractor import HistoryExtractor
from histpack.filters import PatternPathFilter
from histpack.models import ChangeKind, FormattingOptions
from histpack.sources import GitCommitSource


class FakeSource:
    """In-memory commit source that records how it was used."""

    source_type = "fake"

    def __init__(self, commits):
        self.commits = commits
        self.closed = False
        self.fetched_with = None
        self.count_calls = []

    def total_commit_count(self):
        self.count_calls.append("total")
        return len(self.commits) + 5

    def matching_commit_count(self, author_pattern):
        self.count_calls.append(author_pattern)
        return len(self.commits)

    def fetch(self, author_pattern, path_filter):
        self.fetched_with = (author_pattern, path_filter)
        return iter(self.commits)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_commits(commit_factory):
    return [
        commit_factory(short_hash=f"f{i:06d}", date=datetime(2023, 2, i + 1), message=f"Change {i}")
        for i in range(3)
    ]


class TestHistoryExtractor:
    def test_context_manager_closes_source(self, fake_commits):
        source = FakeSource(fake_commits)

        with HistoryExtractor(source):
            pass

        assert source.closed

    def test_counts_delegate_to_source(self, fake_commits):
        extractor = HistoryExtractor(FakeSource(fake_commits))

        assert extractor.total_commit_count() == 8
        assert extractor.matching_commit_count("anyone") == 3

    def test_counts_are_computed_once(self, tmp_path, fake_commits):
        source = FakeSource(fake_commits)

        with HistoryExtractor(source) as extractor:
            extractor.total_commit_count()
            extractor.matching_commit_count("someone")
            result = extractor.extract("someone", tmp_path)
            extractor.matching_commit_count("other")

        assert source.count_calls == ["total", "someone", "other"]
        assert result.total_commits == 8
        assert result.matching_commits == 3

    def test_extract_writes_files_and_reports_result(self, tmp_path, fake_commits):
        source = FakeSource(fake_commits)
        path_filter = PatternPathFilter(include=["**"])

        with HistoryExtractor(source, path_filter=path_filter) as extractor:
            result = extractor.extract("someone", tmp_path / "out")

        assert source.fetched_with == ("someone", path_filter)
        assert result.total_commits == 8
        assert result.matching_commits == 3
        assert result.generated_files == 1
        (path,) = result.generated_file_paths
        assert path.endswith("git-history-2023-02-01-to-2023-02-03-part1.md")
        assert result.end_time >= result.start_time

    def test_progress_sequence(self, tmp_path, fake_commits):
        reports = []

        with HistoryExtractor(FakeSource(fake_commits)) as extractor:
            result = extractor.extract("someone", tmp_path, reports.append)

        assert reports[0].processed_commits == 0
        assert reports[0].generated_files == 0
        assert not reports[0].is_complete
        assert [r.processed_commits for r in reports[1:-1]] == [1, 2, 3]
        assert all(not r.is_complete for r in reports[:-1])

        final = reports[-1]
        assert final.is_complete
        assert final.processed_commits == 3
        assert final.generated_files == result.generated_files
        assert final.matching_commits == 3
        assert final.total_commits == 8

    def test_no_matching_commits(self, tmp_path):
        reports = []

        with HistoryExtractor(FakeSource([])) as extractor:
            result = extractor.extract("nobody", tmp_path / "out", reports.append)

        assert not result.has_commits
        assert result.generated_file_paths == ()
        assert (tmp_path / "out").is_dir()
        assert list((tmp_path / "out").iterdir()) == []
        assert reports[-1].is_complete
        assert reports[-1].percent_complete == 100

    def test_options_reach_the_paginator(self, tmp_path, fake_commits):
        options = FormattingOptions(max_characters_per_file=150, content_threshold_fraction=1.0)

        with HistoryExtractor(FakeSource(fake_commits), options=options) as extractor:
            result = extractor.extract("someone", tmp_path)

        assert result.generated_files == 3


class TestExtractFromGit:
    def test_extracts_author_history(self, tmp_path, git_repo):
        out = tmp_path / "history"

        with HistoryExtractor(GitCommitSource(git_repo)) as extractor:
            result = extractor.extract("alice", out)

        assert result.total_commits == 4
        assert result.matching_commits == 3
        (path,) = result.generated_file_paths
        content = open(path, encoding="utf-8").read()

        assert "git-history-2023-01-01-to-2023-01-04-part1.md" in path
        assert "Total commits in this file: 3" in content
        assert "Initial commit" in content
        assert "Update readme" in content
        assert "Remove app" in content
        assert "Add app" not in content
        # logo.png is excluded by the default filter
        assert "logo.png" not in content
        assert "+More docs" in content

    def test_changes_are_rendered_by_kind(self, tmp_path, git_repo):
        with HistoryExtractor(
            GitCommitSource(git_repo), path_filter=PatternPathFilter(include=["**"])
        ) as extractor:
            result = extractor.extract("bob", tmp_path)

        content = open(result.generated_file_paths[0], encoding="utf-8").read()

        assert "### Added:" in content
        assert "#### app.py\n\n```python\nprint('hi')\n" in content
        assert "With a longer body." in content
        assert ChangeKind.DELETED.value not in content
