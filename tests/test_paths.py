"""Tests for fvm._paths filesystem helpers."""

import stat
import sys

import pytest

from fvm._paths import ensure_dir, is_empty_dir, is_real_dir, path_exists, touch_empty


class _Boom(Exception):
    pass


class TestEnsureDir:
    def test_creates_missing_nested_dir(self, tmp_path):
        target = tmp_path / "a" / "b" / "versions"
        assert ensure_dir(target, "versions", _Boom) == target
        assert target.is_dir()

    @pytest.mark.skipif(sys.platform == "win32", reason="Unix permissions only")
    def test_created_dir_mode(self, tmp_path):
        import os

        old = os.umask(0o022)
        try:
            target = tmp_path / "versions"
            ensure_dir(target, "versions", _Boom)
        finally:
            os.umask(old)
        assert stat.S_IMODE(target.stat().st_mode) == 0o755

    def test_existing_dir_is_noop(self, tmp_path):
        target = tmp_path / "temp"
        target.mkdir()
        (target / "keep.txt").write_text("x")
        ensure_dir(target, "temp", _Boom)
        ensure_dir(target, "temp", _Boom)
        assert (target / "keep.txt").read_text() == "x"

    def test_regular_file_raises(self, tmp_path):
        target = tmp_path / "versions"
        target.write_text("not a dir")
        with pytest.raises(_Boom, match="not a directory"):
            ensure_dir(target, "versions", _Boom)

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges")
    def test_symlink_to_dir_raises(self, tmp_path):
        real = tmp_path / "real"
        real.mkdir()
        link = tmp_path / "versions"
        link.symlink_to(real)
        with pytest.raises(_Boom, match="not a directory"):
            ensure_dir(link, "versions", _Boom)

    def test_check_failure_raises(self, tmp_path, monkeypatch):
        target = tmp_path / "versions"
        target.mkdir()

        def _denied(path):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr("fvm._paths.is_real_dir", _denied)
        with pytest.raises(_Boom, match="Can't check versions path"):
            ensure_dir(target, "versions", _Boom)

    def test_uncreatable_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(_Boom, match="Can't create versions directory"):
            ensure_dir(blocker / "versions", "versions", _Boom)


class TestPredicates:
    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges")
    def test_path_exists_sees_dangling_symlink(self, tmp_path):
        link = tmp_path / "dangling"
        link.symlink_to(tmp_path / "missing")
        assert path_exists(link)
        assert not link.exists()

    def test_is_real_dir(self, tmp_path):
        assert is_real_dir(tmp_path)
        f = tmp_path / "f"
        f.write_text("")
        assert not is_real_dir(f)

    def test_is_empty_dir(self, tmp_path):
        assert is_empty_dir(tmp_path)
        (tmp_path / ".hidden").write_text("")
        assert not is_empty_dir(tmp_path)


class TestTouchEmpty:
    def test_creates_zero_byte_file(self, tmp_path):
        target = tmp_path / ".fvmhome"
        touch_empty(target, _Boom, "magic file")
        assert target.is_file()
        assert target.stat().st_size == 0

    def test_failure_raises_error_cls(self, tmp_path):
        with pytest.raises(_Boom, match="Can't create magic file"):
            touch_empty(tmp_path / "missing" / ".fvmhome", _Boom, "magic file")
