"""Polling wait handlers for long-running SKCF operations."""

from skcfctl.wait.cluster import (
    classify_create_or_update,
    classify_delete,
    create_or_update_cluster_wait_handler,
    delete_cluster_wait_handler,
)
from skcfctl.wait.handler import WaitHandler
from skcfctl.wait.types import (
    DEFAULT_POLL_INTERVAL,
    OperationHandle,
    OperationState,
    OperationStatus,
    PollingPolicy,
)

__all__ = [
    "DEFAULT_POLL_INTERVAL",
    "OperationHandle",
    "OperationState",
    "OperationStatus",
    "PollingPolicy",
    "WaitHandler",
    "classify_create_or_update",
    "classify_delete",
    "create_or_update_cluster_wait_handler",
    "delete_cluster_wait_handler",
]
