"""Tests for splitting multi-file diff blobs."""

from __future__ import annotations

from difi.diff_split import GIT_DIALECT, HG_DIALECT, extract_file_diff, parse_files_from_diff

GIT_BLOB = """diff --git a/a.txt b/a.txt
index 1111111..2222222 100644
--- a/a.txt
+++ b/a.txt
@@ -1 +1 @@
-x
+y
diff --git a/dir/b.txt b/dir/b.txt
new file mode 100644
--- /dev/null
+++ b/dir/b.txt
@@ -0,0 +1 @@
+hello"""

HG_BLOB = """diff -r 123456 file1.go
--- a/file1.go	Tue Jan 01 00:00:00 2024 +0000
+++ b/file1.go	Tue Jan 01 00:00:01 2024 +0000
@@ -1,3 +1,3 @@
 package main
-import "fmt"
+import "log"
 func main() {}
diff -r 123456 -r 789abc file2.py
--- a/file2.py	Tue Jan 01 00:00:00 2024 +0000
+++ b/file2.py	Tue Jan 01 00:00:01 2024 +0000
@@ -1,2 +1,2 @@
-print("hello")
+print("world")
"""


class TestGitDialect:
    def test_parse_files(self) -> None:
        assert parse_files_from_diff(GIT_BLOB, GIT_DIALECT) == ["a.txt", "dir/b.txt"]

    def test_parse_files_rename_uses_new_path(self) -> None:
        blob = "diff --git a/old.txt b/new.txt\nsimilarity index 100%\nrename from old.txt"
        assert parse_files_from_diff(blob, GIT_DIALECT) == ["new.txt"]

    def test_parse_files_colorized(self) -> None:
        blob = "\033[1mdiff --git a/a.txt b/a.txt\033[m\n\033[1mdiff --git a/c.txt b/c.txt\033[m"
        assert parse_files_from_diff(blob, GIT_DIALECT) == ["a.txt", "c.txt"]

    def test_extract(self) -> None:
        expected = "\n".join(GIT_BLOB.split("\n")[:7])
        assert extract_file_diff(GIT_BLOB, "a.txt", GIT_DIALECT) == expected

    def test_extract_last_file(self) -> None:
        result = extract_file_diff(GIT_BLOB, "dir/b.txt", GIT_DIALECT)
        assert result.startswith("diff --git a/dir/b.txt b/dir/b.txt")
        assert result.endswith("+hello")

    def test_extract_keeps_colors(self) -> None:
        blob = "\033[1mdiff --git a/a.txt b/a.txt\033[m\n\033[32m+y\033[m"
        assert extract_file_diff(blob, "a.txt", GIT_DIALECT) == blob

    def test_extract_missing(self) -> None:
        assert extract_file_diff(GIT_BLOB, "missing.txt", GIT_DIALECT) == ""

    def test_suffix_match_does_not_leak(self) -> None:
        assert extract_file_diff(GIT_BLOB, "b.txt", GIT_DIALECT) == ""


class TestHgDialect:
    def test_parse_files(self) -> None:
        assert parse_files_from_diff(HG_BLOB, HG_DIALECT) == ["file1.go", "file2.py"]

    def test_extract(self) -> None:
        expected = "\n".join(HG_BLOB.split("\n")[:7])
        assert extract_file_diff(HG_BLOB, "file1.go", HG_DIALECT) == expected

    def test_extract_two_revision_delimiter(self) -> None:
        result = extract_file_diff(HG_BLOB, "file2.py", HG_DIALECT)
        assert result.startswith("diff -r 123456 -r 789abc file2.py")
        assert '+print("world")' in result

    def test_extract_missing(self) -> None:
        assert extract_file_diff(HG_BLOB, "nonexistent.go", HG_DIALECT) == ""


class TestRepeatedPaths:
    BLOB = "\n".join(
        [
            "diff -r 1 a.go",
            "@@ -1 +1 @@",
            "+first",
            "diff -r 1 b.go",
            "+other",
            "diff -r 1 a.go",
            "@@ -5 +5 @@",
            "+second",
        ]
    )

    def test_each_path_listed_once(self) -> None:
        assert parse_files_from_diff(self.BLOB, HG_DIALECT) == ["a.go", "b.go"]

    def test_extract_concatenates_spans(self) -> None:
        result = extract_file_diff(self.BLOB, "a.go", HG_DIALECT)
        assert result.split("\n") == [
            "diff -r 1 a.go",
            "@@ -1 +1 @@",
            "+first",
            "diff -r 1 a.go",
            "@@ -5 +5 @@",
            "+second",
        ]


class TestEmptyInput:
    def test_empty_blob(self) -> None:
        for dialect in (GIT_DIALECT, HG_DIALECT):
            assert parse_files_from_diff("", dialect) == []
            assert extract_file_diff("", "file.txt", dialect) == ""

    def test_not_a_diff(self) -> None:
        for dialect in (GIT_DIALECT, HG_DIALECT):
            assert parse_files_from_diff("not a diff", dialect) == []

    def test_empty_target(self) -> None:
        for dialect in (GIT_DIALECT, HG_DIALECT):
            assert extract_file_diff("some diff", "", dialect) == ""
