"""Tests for the command-line interface."""

import logging

import pytest

from histpack.cli import build_parser, main


class TestParser:
    def test_extract_defaults(self):
        args = build_parser().parse_args(["extract", "repo", "out", "alice"])

        assert args.command == "extract"
        assert args.max_chars == 700_000
        assert args.content_threshold == 0.9
        assert args.context_lines == 3
        assert args.show_merge_content is False
        assert args.verbose is False

    def test_count_pattern_is_optional(self):
        args = build_parser().parse_args(["count", "repo"])

        assert args.author_pattern is None

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestExtract:
    def test_writes_history_files(self, tmp_path, git_repo, caplog):
        out = tmp_path / "out"

        with caplog.at_level(logging.INFO):
            main(["extract", str(git_repo), str(out), "alice"])

        files = sorted(p.name for p in out.glob("*.md"))
        assert files == ["git-history-2023-01-01-to-2023-01-04-part1.md"]
        assert "Matching commits: 3" in caplog.text
        assert "Total commits processed: 3" in caplog.text

    def test_no_matching_author(self, tmp_path, git_repo, caplog):
        out = tmp_path / "out"

        with caplog.at_level(logging.INFO):
            main(["extract", str(git_repo), str(out), "carol"])

        assert "No commits found matching the author pattern." in caplog.text
        assert not out.exists()

    def test_small_files_roll_over(self, tmp_path, git_repo):
        out = tmp_path / "out"

        main(
            [
                "extract",
                str(git_repo),
                str(out),
                "*@example.com",
                "--max-chars",
                "200",
                "--content-threshold",
                "1.0",
            ]
        )

        assert len(list(out.glob("*-part*.md"))) == 4

    def test_invalid_threshold_exits(self, tmp_path, git_repo):
        with pytest.raises(SystemExit) as exc_info:
            main(
                [
                    "extract",
                    str(git_repo),
                    str(tmp_path / "out"),
                    "alice",
                    "--content-threshold",
                    "2",
                ]
            )

        assert exc_info.value.code == 1

    def test_unsupported_location_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["extract", str(tmp_path), str(tmp_path / "out"), "alice"])

        assert exc_info.value.code == 1


class TestCount:
    def test_prints_totals(self, git_repo, capsys):
        main(["count", str(git_repo), "bob"])

        assert capsys.readouterr().out == "Total commits: 4\nMatching commits: 1\n"

    def test_total_only(self, git_repo, capsys):
        main(["count", str(git_repo)])

        assert capsys.readouterr().out == "Total commits: 4\n"

    def test_missing_repository_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["count", str(tmp_path / "missing")])

        assert exc_info.value.code == 1
