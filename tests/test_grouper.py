"""
Unit tests for FileGrouperImpl.
Verifies size and digest grouping with single-file filtering.
"""
from unittest import mock

from duplex.core import FileGrouperImpl, HasherImpl, File, DuplicateGroup
from duplex.core import remove_single_item_groups
from duplex.core.errors import FileAccessError, FileVanishedError


class TestGroupBySize:
    """Test the size pre-filter that avoids hashing files with unique sizes."""

    def test_groups_by_size_filters_single_files(self):
        """
        group_by_size returns ONLY groups with 2+ files of same size.
        Single files are filtered out (not considered duplicates).
        """
        files = [
            File(path="/a.txt", size=1024),
            File(path="/b.txt", size=1024),  # Same size → group
            File(path="/c.txt", size=2048),  # Single file → filtered
        ]

        size_groups = FileGrouperImpl().group_by_size(files)

        assert len(size_groups) == 1
        assert 1024 in size_groups
        assert len(size_groups[1024]) == 2

    def test_size_grouping_never_hashes(self):
        """Size grouping must not touch file contents."""
        hasher = mock.Mock()
        files = [File(path="/a", size=1), File(path="/b", size=1)]

        FileGrouperImpl(hasher).group_by_size(files)

        hasher.compute_digest.assert_not_called()

    def test_empty_input_returns_empty_mapping(self):
        assert FileGrouperImpl().group_by_size([]) == {}


class TestGroupByDigest:
    """Test digest grouping of same-size files."""

    def test_scenario_two_equal_one_different(self):
        """Digests A, A, B → one group of two, lone B dropped."""
        files = [
            File(path="/x/1", size=100, digest="A"),
            File(path="/x/2", size=100, digest="A"),
            File(path="/x/3", size=100, digest="B"),
        ]

        groups = FileGrouperImpl().group_by_digest(files)

        assert list(groups.keys()) == ["A"]
        assert [f.path for f in groups["A"]] == ["/x/1", "/x/2"]

    def test_members_sorted_by_path(self):
        files = [
            File(path="/z.txt", size=10, digest="d"),
            File(path="/a.txt", size=10, digest="d"),
            File(path="/m.txt", size=10, digest="d"),
        ]

        groups = FileGrouperImpl().group_by_digest(files)

        assert [f.path for f in groups["d"]] == ["/a.txt", "/m.txt", "/z.txt"]

    def test_imported_digests_are_not_recomputed(self):
        """Files with a known digest never reach the file system."""
        files = [File(path="/missing/a", size=5, digest="f" * 32),
                 File(path="/missing/b", size=5, digest="f" * 32)]

        with mock.patch("builtins.open") as mock_open:
            groups = FileGrouperImpl(HasherImpl()).group_by_digest(files)

        mock_open.assert_not_called()
        assert len(groups["f" * 32]) == 2

    def test_unreadable_files_are_skipped(self, temp_dir):
        """A file that cannot be read is excluded and counted, the pass continues."""
        a = temp_dir / "a.bin"
        b = temp_dir / "b.bin"
        a.write_bytes(b"same")
        b.write_bytes(b"same")
        files = [
            File(path=str(a), size=4),
            File(path=str(b), size=4),
            File(path=str(temp_dir / "vanished.bin"), size=4),
        ]

        grouper = FileGrouperImpl()
        groups = grouper.group_by_digest(files)

        assert grouper.skipped_files == 1
        assert len(groups) == 1
        assert {f.path for f in next(iter(groups.values()))} == {str(a), str(b)}

    def test_permission_errors_are_skipped(self):
        hasher = mock.Mock()
        hasher.compute_digest.side_effect = [
            "d1", FileAccessError("/b", "Permission denied"), "d1",
        ]
        files = [File(path="/a", size=1), File(path="/b", size=1), File(path="/c", size=1)]

        grouper = FileGrouperImpl(hasher)
        groups = grouper.group_by_digest(files)

        assert grouper.skipped_files == 1
        assert [f.path for f in groups["d1"]] == ["/a", "/c"]

    def test_vanished_error_is_a_hash_error(self):
        hasher = mock.Mock()
        hasher.compute_digest.side_effect = FileVanishedError("/a")

        grouper = FileGrouperImpl(hasher)
        assert grouper.group_by_digest([File(path="/a", size=1)]) == {}
        assert grouper.skipped_files == 1


class TestRemoveSingleItemGroups:
    def test_drops_groups_with_one_or_zero_files(self):
        groups = {
            "keep": DuplicateGroup(size=1, files=[File("/a", 1), File("/b", 1)]),
            "one": DuplicateGroup(size=1, files=[File("/c", 1)]),
            "none": DuplicateGroup(size=1, files=[]),
        }

        removed = remove_single_item_groups(groups)

        assert removed == 2
        assert list(groups.keys()) == ["keep"]
