"""Unit tests for kubeconfig file handling."""

import os
import stat

import pytest

from skcfctl.errors import SkcfError
from skcfctl.kubeconfig import default_kubeconfig_path, write_config_file


def test_write_config_file_creates_dirs(tmp_path):
    path = tmp_path / "base" / "nested" / "config"

    write_config_file(str(path), "kubeconfig")

    assert path.read_text() == "kubeconfig"
    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    assert stat.S_IMODE((tmp_path / "base" / "nested").stat().st_mode) & 0o077 == 0


def test_write_config_file_overwrites(tmp_path):
    path = tmp_path / "config"
    path.write_text("old")
    os.chmod(path, 0o644)

    write_config_file(str(path), "new")

    assert path.read_text() == "new"
    assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_write_config_file_empty_data(tmp_path):
    path = tmp_path / "empty" / "config"
    with pytest.raises(SkcfError, match="no data"):
        write_config_file(str(path), "")
    assert not path.exists()


def test_write_config_file_empty_location():
    with pytest.raises(SkcfError):
        write_config_file("", "kubeconfig")


def test_write_config_file_directory_path(tmp_path):
    with pytest.raises(SkcfError, match="directory"):
        write_config_file(str(tmp_path / "only_dir") + os.sep, "kubeconfig")
    with pytest.raises(SkcfError, match="directory"):
        write_config_file(str(tmp_path), "kubeconfig")


def test_default_kubeconfig_path(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert default_kubeconfig_path() == os.path.join(str(tmp_path), ".kube", "config")
