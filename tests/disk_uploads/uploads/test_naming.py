"""Unit tests for filename sanitization and storage path generation."""

import re
from datetime import datetime, timedelta, timezone

import pytest

from disk_uploads.uploads.naming import (
    MonotonicTicker,
    generate_path,
    generate_path_for_instant,
    join_storage_path,
    sanitize_filename,
    trim_path,
)


class TestSanitizeFilename:
    """Tests for the default filename sanitizer."""

    def test_replaces_whitespace(self):
        assert sanitize_filename("foo_1   2-3.txt") == "foo_1______2-3.txt"

    def test_replaces_symbols(self):
        assert (
            sanitize_filename("test*&^%$)¶§∞¶•∆µ.abc••")
            == "test__________________________.abc____"
        )

    def test_strips_surrounding_whitespace(self):
        assert sanitize_filename("  report.pdf \n") == "report.pdf"

    def test_is_idempotent(self):
        once = sanitize_filename("my résumé (final).pdf")

        assert sanitize_filename(once) == once


class TestTrimPath:
    """Tests for trimming whitespace and slashes from path edges."""

    @pytest.mark.parametrize(
        "path",
        [
            "/test/123/abc/",
            "   /test/123/abc/ ",
            "/// /  /test/123/abc/ / /// ///",
            "test/123/abc//",
            "//test/123/abc ",
        ],
    )
    def test_trims_edges(self, path):
        assert trim_path(path) == "test/123/abc"

    def test_only_separators(self):
        assert trim_path(" / ") == ""


class TestGeneratePath:
    """Tests for the default path layout."""

    def test_layout_for_instant(self):
        instant = datetime(2019, 4, 4, 23, 52, 26, 473000, tzinfo=timezone.utc)

        path = generate_path_for_instant(instant, "test.png", 473000000)

        assert path == "2019/04/04/235226-473000000-test.png"

    def test_converts_to_utc(self):
        instant = datetime(2019, 4, 5, 1, 52, 26, tzinfo=timezone(timedelta(hours=2)))

        path = generate_path_for_instant(instant, "test.png", 7)

        assert path == "2019/04/04/235226-000000007-test.png"

    def test_ticks_wrap_to_nine_digits(self):
        instant = datetime(2019, 4, 4, tzinfo=timezone.utc)

        path = generate_path_for_instant(instant, "a", 12_000_000_005)

        assert path == "2019/04/04/000000-000000005-a"

    def test_current_time_layout(self):
        path = generate_path("test.png")

        assert re.fullmatch(r"\d{4}/\d{2}/\d{2}/\d{6}-\d{9}-test\.png", path)

    def test_paths_are_unique(self):
        paths = {generate_path("same.txt") for _ in range(1000)}

        assert len(paths) == 1000


class TestMonotonicTicker:
    def test_strictly_increasing(self):
        ticker = MonotonicTicker()

        ticks = [ticker.next() for _ in range(1000)]

        assert all(b > a for a, b in zip(ticks, ticks[1:]))


class TestJoinStoragePath:
    """Tests for joining the root prefix and a generated path."""

    @pytest.mark.parametrize(
        "prefix",
        ["uploads", "/uploads", "uploads/", "/uploads/", " //uploads// "],
    )
    def test_prefix_variants(self, prefix):
        path = join_storage_path(prefix, "2019/04/04/235226-000000001-a.txt")

        assert path == "/uploads/2019/04/04/235226-000000001-a.txt"
        assert re.match(r"^/uploads/[^/]", path)

    @pytest.mark.parametrize("prefix", [None, "", "/"])
    def test_empty_prefix(self, prefix):
        assert join_storage_path(prefix, "/a/b.txt") == "/a/b.txt"

    def test_collapses_repeated_separators(self):
        assert join_storage_path("tenant", "a//b///c.txt") == "/tenant/a/b/c.txt"
