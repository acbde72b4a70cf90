"""Generic poll-until-terminal wait handler for long-running operations."""

import asyncio
import logging
import time

from skcfctl.errors import (
    OperationFailedError,
    StatusQueryFailedError,
    WaitCancelledError,
    WaitTimeoutError,
)
from skcfctl.wait.types import OperationState, PollingPolicy

logger = logging.getLogger(__name__)


class WaitHandler:
    """Poll the status of one operation until it succeeds, fails, or the wait is aborted.

    Args:
        handle: OperationHandle the handler is bound to.
        query: async callable ``query(handle)`` returning the raw status
            (typically the resource dict read from the API).
        classify: callable mapping the raw status to an OperationStatus.
        policy: PollingPolicy; defaults to a 5s interval with no deadline.
    """

    def __init__(self, handle, query, classify, policy=None):
        self.handle = handle
        self._query = query
        self._classify = classify
        self.policy = policy or PollingPolicy()
        self._used = False
        self.queries = 0

    async def wait(self, cancel: asyncio.Event | None = None):
        """Block until the operation reaches a terminal state.

        Returns:
            The result carried by the SUCCEEDED status.

        Raises:
            OperationFailedError: the operation reached FAILED.
            StatusQueryFailedError: the status query or its classification raised.
            WaitCancelledError: *cancel* was set.
            WaitTimeoutError: ``policy.max_elapsed`` ran out.
        """
        if self._used:
            raise RuntimeError(f"wait handler for {self.handle.label} already ran")
        self._used = True

        cancel = cancel or asyncio.Event()
        start = time.monotonic()
        deadline = None if self.policy.max_elapsed is None else start + self.policy.max_elapsed

        while True:
            if cancel.is_set():
                raise WaitCancelledError(self.handle)
            if deadline is not None and time.monotonic() >= deadline:
                raise WaitTimeoutError(self.handle, self.policy.max_elapsed)

            raw = await self._run_query(cancel, deadline)
            status = self._classify_status(raw)

            if status.terminal:
                if status.state == OperationState.FAILED:
                    raise OperationFailedError(self.handle, status.reason)
                logger.debug(f"{self.handle.label} succeeded after {self.queries} queries")
                return status.result

            logger.info(
                f"Waiting for {self.handle.label}: {status.detail or status.state.value} "
                f"({time.monotonic() - start:.0f}s elapsed)"
            )
            await self._pause(cancel, deadline)

    def _remaining(self, deadline):
        if deadline is None:
            return None
        return max(0.0, deadline - time.monotonic())

    async def _run_query(self, cancel, deadline):
        """Run one status query, racing it against *cancel* and the deadline."""
        self.queries += 1
        query_task = asyncio.ensure_future(self._query(self.handle))
        cancel_task = asyncio.ensure_future(cancel.wait())
        try:
            done, _ = await asyncio.wait(
                {query_task, cancel_task},
                timeout=self._remaining(deadline),
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            cancel_task.cancel()
            if not query_task.done():
                query_task.cancel()

        if query_task not in done:
            if cancel.is_set():
                raise WaitCancelledError(self.handle)
            raise WaitTimeoutError(self.handle, self.policy.max_elapsed)

        try:
            return query_task.result()
        except Exception as e:
            raise StatusQueryFailedError(self.handle, e) from e

    def _classify_status(self, raw):
        """Classify one raw status; a status the classifier cannot read fails the query."""
        try:
            return self._classify(raw)
        except Exception as e:
            raise StatusQueryFailedError(self.handle, e) from e

    async def _pause(self, cancel, deadline):
        """Sleep one interval; wake early on *cancel*, end early at the deadline."""
        timeout = self.policy.interval
        remaining = self._remaining(deadline)
        if remaining is not None:
            timeout = min(timeout, remaining)
        try:
            await asyncio.wait_for(cancel.wait(), timeout)
        except asyncio.TimeoutError:
            return
        raise WaitCancelledError(self.handle)
