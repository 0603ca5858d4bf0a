"""
Unit tests for the grouping pipeline stages.
Verifies size pruning, digest grouping per size class and parallel hashing.
"""
import logging
from unittest import mock

from duplex.core.stages import SizeStageImpl, HashStageImpl
from duplex.core.grouper import FileGrouperImpl
from duplex.core.models import File, DuplicateGroup, Stage


class TestSizeStageImpl:
    """Test initial size-based grouping stage."""

    def test_groups_files_by_size_filters_single_files(self):
        """Size stage must return only groups with 2+ files of identical size."""
        files = [
            File(path="/a.txt", size=1024),
            File(path="/b.txt", size=1024),  # Same size → group
            File(path="/c.txt", size=2048),  # Single file → filtered out
        ]
        groups = SizeStageImpl(FileGrouperImpl()).process(files)
        assert len(groups) == 1
        assert groups[0].size == 1024
        assert {f.path for f in groups[0].files} == {"/a.txt", "/b.txt"}

    def test_empty_input_returns_empty_list(self):
        assert SizeStageImpl(FileGrouperImpl()).process([]) == []

    def test_largest_size_first(self):
        files = [File(path=f"/{i}", size=size) for i, size in enumerate([10, 10, 30, 30, 20, 20])]
        groups = SizeStageImpl(FileGrouperImpl()).process(files)
        assert [g.size for g in groups] == [30, 20, 10]

    def test_progress_callback_invoked(self):
        files = [File(path=f"/file{i}.txt", size=1024) for i in range(5)]
        calls = []

        SizeStageImpl(FileGrouperImpl()).process(
            files, progress_callback=lambda *args: calls.append(args))

        assert calls == [(Stage.SIZE.value, 5, 5)]

    def test_stopped_flag_returns_nothing(self):
        files = [File(path="/a", size=1), File(path="/b", size=1)]
        assert SizeStageImpl(FileGrouperImpl()).process(files, stopped_flag=lambda: True) == []


class TestHashStageImpl:
    """Test splitting of size groups by content digest."""

    @staticmethod
    def _size_group(temp_dir, contents):
        files = []
        for name, content in contents.items():
            path = temp_dir / name
            path.write_bytes(content)
            files.append(File(path=str(path), size=len(content)))
        return DuplicateGroup(size=files[0].size, files=files)

    def test_splits_same_size_files_by_content(self, temp_dir):
        group = self._size_group(temp_dir, {"a": b"xxxx", "b": b"xxxx", "c": b"yyyy"})

        collection = HashStageImpl(FileGrouperImpl()).process([group])

        assert len(collection) == 1
        (digest, result), = collection.items()
        assert digest == result.digest
        assert [f.path for f in result.files] == [str(temp_dir / "a"), str(temp_dir / "b")]
        assert result.size == 4

    def test_parallel_hashing_matches_sequential(self, temp_dir):
        contents = {f"f{i}": (b"%d" % (i % 3)) * 64 for i in range(12)}
        group_a = self._size_group(temp_dir, contents)
        sequential = HashStageImpl(FileGrouperImpl()).process([group_a])

        for f in group_a.files:
            f.digest = None
        parallel = HashStageImpl(FileGrouperImpl(), workers=4).process([group_a])

        assert sequential.keys() == parallel.keys()
        for key in sequential:
            assert [f.path for f in sequential[key].files] == [f.path for f in parallel[key].files]

    def test_parallel_hashing_skips_unreadable_files(self, temp_dir):
        group = self._size_group(temp_dir, {"a": b"zz", "b": b"zz", "c": b"zz"})
        (temp_dir / "c").unlink()
        grouper = FileGrouperImpl()

        collection = HashStageImpl(grouper, workers=3).process([group])

        assert grouper.skipped_files == 1
        (result,) = collection.values()
        assert [f.name for f in result.files] == ["a", "b"]

    def test_hash_progress_reports_bytes(self, temp_dir):
        group = self._size_group(temp_dir, {"a": b"1234", "b": b"1234"})
        calls = []

        HashStageImpl(FileGrouperImpl()).process([group], progress_callback=lambda *a: calls.append(a))

        assert calls[-1] == (Stage.HASH.value, 8, 8)

    def test_stopped_flag_returns_empty_collection(self):
        hasher = mock.Mock()
        group = DuplicateGroup(size=1, files=[File("/a", 1), File("/b", 1)])

        result = HashStageImpl(FileGrouperImpl(hasher)).process([group], stopped_flag=lambda: True)

        assert result == {}
        hasher.compute_digest.assert_not_called()

    def test_same_digest_in_two_size_classes_keeps_both_groups(self, caplog):
        hasher = mock.Mock()
        hasher.compute_digest.return_value = "abc"
        small = DuplicateGroup(size=1, files=[File("/a", 1), File("/b", 1)])
        large = DuplicateGroup(size=2, files=[File("/c", 2), File("/d", 2)])
        caplog.set_level(logging.WARNING)

        collection = HashStageImpl(FileGrouperImpl(hasher)).process([large, small])

        assert sorted(g.size for g in collection.values()) == [1, 2]
        assert collection["abc"].size == 2
        assert "Digest abc shared by files of 2 and 1 bytes" in caplog.text
