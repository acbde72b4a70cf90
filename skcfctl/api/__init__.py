"""SKCF management API client."""

from skcfctl.api.client import (
    API_VERSION,
    DEFAULT_API_URL,
    SkcfClient,
    cluster_exists,
)

__all__ = [
    "API_VERSION",
    "DEFAULT_API_URL",
    "SkcfClient",
    "cluster_exists",
]
