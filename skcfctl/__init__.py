"""skcfctl - command-line client for the SKCF cluster management API."""

try:
    from importlib.metadata import version

    __version__ = version("skcfctl")
except Exception:
    __version__ = "0.0.0.dev0"

__all__ = ["__version__"]
