"""Kubeconfig file handling."""

import os

from skcfctl.errors import SkcfError


def default_kubeconfig_path():
    """Default kubeconfig location, ``~/.kube/config``."""
    return os.path.join(os.path.expanduser("~"), ".kube", "config")


def write_config_file(config_path, data):
    """Write *data* to *config_path* with owner-only permissions.

    Parent directories are created (mode 0700); the file is written with
    mode 0600, replacing any existing file.

    Raises:
        SkcfError: when there is nothing to write or the path is unusable.
    """
    if not data:
        raise SkcfError("no data to write")
    if not config_path:
        raise SkcfError("no kubeconfig path given")
    if config_path.endswith(os.sep) or os.path.isdir(config_path):
        raise SkcfError(f"kubeconfig path is a directory: {config_path}")

    directory = os.path.dirname(config_path)
    try:
        if directory:
            os.makedirs(directory, mode=0o700, exist_ok=True)
        fd = os.open(config_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w") as f:
            f.write(data)
        os.chmod(config_path, 0o600)
    except OSError as e:
        raise SkcfError(f"write kubeconfig {config_path}: {e}") from e
