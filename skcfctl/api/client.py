"""SKCF management API client: clusters and kubeconfigs via the v1alpha1 REST API."""

import json
import logging

import httpx

from skcfctl.errors import ApiError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://skcf.api.stackit.cloud"
API_VERSION = "v1alpha1"
REQUEST_TIMEOUT = 60


class SkcfClient:
    """Thin async wrapper around the SKCF REST endpoints.

    Every call opens a short-lived ``httpx.AsyncClient``. In dry-run mode
    requests are logged instead of sent and every method returns None.

    Args:
        api_url: API base URL.
        token: bearer token sent as ``Authorization`` header, if set.
        dry_run: log requests instead of executing them.
        transport: optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(self, api_url=DEFAULT_API_URL, token=None, dry_run=False, transport=None):
        self.api_url = api_url.rstrip("/")
        self.token = token
        self.dry_run = dry_run
        self._transport = transport

    def _cluster_path(self, project_id, name=None):
        path = f"/{API_VERSION}/projects/{project_id}/clusters"
        if name is not None:
            path = f"{path}/{name}"
        return path

    async def _request(self, method, path, data=None):
        """Make an authenticated API request.

        Returns:
            Parsed JSON body, ``{}`` for empty bodies, or None in dry-run mode.

        Raises:
            ApiError: on a non-2xx response.
        """
        url = f"{self.api_url}{path}"

        if self.dry_run:
            logger.info(f"[dry-run] {method} {url}")
            if data is not None:
                logger.info(f"[dry-run] payload: {json.dumps(data, indent=2)}")
            return None

        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        logger.debug(f"{method} {url}")
        async with httpx.AsyncClient(transport=self._transport, timeout=REQUEST_TIMEOUT) as client:
            resp = await client.request(method, url, json=data, headers=headers)

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ApiError(resp.status_code, _error_message(resp), url) from e

        if not resp.content:
            return {}
        return resp.json()

    # ── Clusters ──────────────────────────────────────────────────

    async def list_clusters(self, project_id):
        """GET /v1alpha1/projects/{project}/clusters. Returns the ``items`` list."""
        result = await self._request("GET", self._cluster_path(project_id))
        if result is None:  # dry-run
            return []
        return result.get("items") or []

    async def get_cluster(self, project_id, name):
        """GET /v1alpha1/projects/{project}/clusters/{name}."""
        return await self._request("GET", self._cluster_path(project_id, name))

    async def create_or_update_cluster(self, project_id, name, payload=None):
        """PUT /v1alpha1/projects/{project}/clusters/{name}.

        The API creates the cluster if it does not exist and reconciles it
        otherwise; the returned cluster is usually still in progress.
        """
        return await self._request("PUT", self._cluster_path(project_id, name), payload or {})

    async def delete_cluster(self, project_id, name):
        """DELETE /v1alpha1/projects/{project}/clusters/{name}."""
        await self._request("DELETE", self._cluster_path(project_id, name))

    # ── Kubeconfig ────────────────────────────────────────────────

    async def create_kubeconfig(self, project_id, name, expiration_seconds=None):
        """POST /v1alpha1/projects/{project}/clusters/{name}/kubeconfig.

        Args:
            expiration_seconds: optional lifetime as a decimal string.
        """
        data = {}
        if expiration_seconds is not None:
            data["expirationSeconds"] = expiration_seconds
        return await self._request("POST", f"{self._cluster_path(project_id, name)}/kubeconfig", data)


def _error_message(resp):
    """Best-effort error text from an API error body."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text.strip()
    if isinstance(body, dict):
        return body.get("message") or body.get("error") or json.dumps(body)
    return str(body)


async def cluster_exists(client, project_id, name):
    """Return True if *project_id* already has a cluster called *name*."""
    for cluster in await client.list_clusters(project_id):
        if cluster.get("name") == name:
            return True
    return False
