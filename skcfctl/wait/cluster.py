"""Cluster wait handlers: map aggregated cluster state to operation status."""

from skcfctl.errors import ApiError
from skcfctl.wait.handler import WaitHandler
from skcfctl.wait.types import OperationHandle, OperationStatus

STATE_HEALTHY = "STATE_HEALTHY"
STATE_CREATING = "STATE_CREATING"
STATE_RECONCILING = "STATE_RECONCILING"
STATE_DELETING = "STATE_DELETING"
STATE_UNHEALTHY = "STATE_UNHEALTHY"
STATE_FAILED = "STATE_FAILED"

_PROGRESS_STATES = {STATE_CREATING, STATE_RECONCILING}


def _status(cluster):
    if not isinstance(cluster, dict):
        return {}
    status = cluster.get("status")
    return status if isinstance(status, dict) else {}


def aggregated_state(cluster):
    """Return ``status.aggregated`` of a cluster dict, or None if the body is malformed."""
    state = _status(cluster).get("aggregated")
    return state if isinstance(state, str) else None


def _failure_reason(cluster, state):
    error = _status(cluster).get("error")
    if isinstance(error, dict):
        error = error.get("message")
    if error:
        return f"{state}: {error}"
    return f"cluster entered {state}"


def classify_create_or_update(cluster):
    """Classify a cluster read while waiting for create/update to settle."""
    state = aggregated_state(cluster)
    if state == STATE_HEALTHY:
        return OperationStatus.succeeded(cluster, detail=state)
    if state in (STATE_FAILED, STATE_UNHEALTHY):
        return OperationStatus.failed(_failure_reason(cluster, state), detail=state)
    if state == STATE_DELETING:
        return OperationStatus.failed("cluster is being deleted", detail=state)
    if state in _PROGRESS_STATES:
        return OperationStatus.in_progress(detail=state)
    return OperationStatus.pending(detail=state or "")


def classify_delete(cluster):
    """Classify a cluster read while waiting for deletion.

    *cluster* is None once the API answers 404.
    """
    if cluster is None:
        return OperationStatus.succeeded(None, detail="deleted")
    state = aggregated_state(cluster)
    if state == STATE_DELETING:
        return OperationStatus.in_progress(detail=state)
    if state == STATE_FAILED:
        return OperationStatus.failed(_failure_reason(cluster, state), detail=state)
    return OperationStatus.pending(detail=state or "")


def create_or_update_cluster_wait_handler(client, project_id, name, policy=None):
    """WaitHandler that completes when the cluster reports STATE_HEALTHY."""

    async def query(handle):
        return await client.get_cluster(handle.project_id, handle.name)

    return WaitHandler(OperationHandle(project_id, name), query, classify_create_or_update, policy)


def delete_cluster_wait_handler(client, project_id, name, policy=None):
    """WaitHandler that completes when the cluster is gone (HTTP 404)."""

    async def query(handle):
        try:
            return await client.get_cluster(handle.project_id, handle.name)
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise

    return WaitHandler(OperationHandle(project_id, name), query, classify_delete, policy)
