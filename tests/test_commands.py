"""
Tests for DeduplicationCommand: scan, manifest import and grouping in one call.
"""
import hashlib

from duplex.commands import DeduplicationCommand
from duplex.core.models import DuplexParams, HashAlgorithmName


class TestDeduplicationCommand:

    def test_finds_duplicate_groups(self, test_files, temp_dir):
        params = DuplexParams(recursive_folders=(str(temp_dir),))
        command = DeduplicationCommand()

        groups, stats = command.execute(params)

        assert len(groups) == 2
        sizes = sorted(g.size for g in groups.values())
        assert sizes == [1024, 2048]
        assert len(command.get_files()) == 7
        assert stats.stage_stats["hash"]["groups"] == 2

    def test_non_recursive_folder(self, test_files, temp_dir):
        params = DuplexParams(folders=(str(temp_dir),))

        groups, _ = DeduplicationCommand().execute(params)

        small = [g for g in groups.values() if g.size == 1024][0]
        assert str(test_files["sub_dup"]) not in [f.path for f in small.files]
        assert len(small.files) == 2

    def test_manifest_entries_grouped_with_scanned_files(self, temp_dir):
        content = b"manifest content"
        scanned = temp_dir / "scan"
        scanned.mkdir()
        (scanned / "real.bin").write_bytes(content)
        listed = str(temp_dir / "archive" / "old.bin")  # not on disk
        manifest = temp_dir / "list.md5"
        manifest.write_text(f"{len(content)}  {hashlib.md5(content).hexdigest()}  {listed}\n")

        params = DuplexParams(recursive_folders=(str(scanned),), manifests=(str(manifest),))
        groups, _ = DeduplicationCommand().execute(params)

        assert params.hash_algorithm == HashAlgorithmName.MD5
        (group,) = groups.values()
        assert [f.path for f in group.files] == [listed, str(scanned / "real.bin")]

    def test_manifest_path_already_scanned_is_not_duplicated(self, temp_dir):
        content = b"abc"
        path = temp_dir / "x.bin"
        path.write_bytes(content)
        manifest = temp_dir / "list.md5"
        manifest.write_text(f"3 {hashlib.md5(content).hexdigest()} {path}\n")

        params = DuplexParams(recursive_folders=(str(temp_dir),), manifests=(str(manifest),))
        command = DeduplicationCommand()
        groups, _ = command.execute(params)

        assert groups == {}
        assert [f.path for f in command.get_files()].count(str(path)) == 1

    def test_unreadable_manifest_is_skipped(self, test_files, temp_dir, caplog):
        params = DuplexParams(
            recursive_folders=(str(temp_dir),),
            manifests=(str(temp_dir / "missing.md5"),),
        )

        groups, _ = DeduplicationCommand().execute(params)

        assert len(groups) == 2
        assert "Couldn't open file" in caplog.text

    def test_parallel_workers_same_result(self, test_files, temp_dir):
        single, _ = DeduplicationCommand().execute(DuplexParams(recursive_folders=(str(temp_dir),)))
        multi, _ = DeduplicationCommand().execute(
            DuplexParams(recursive_folders=(str(temp_dir),), workers=4))

        assert single.keys() == multi.keys()
        for key in single:
            assert [f.path for f in single[key].files] == [f.path for f in multi[key].files]
