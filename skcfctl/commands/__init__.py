"""Shared plumbing for CLI command handlers."""

import argparse
import asyncio
import contextlib
import json
import logging
import signal
import sys

import httpx

from skcfctl.api.client import SkcfClient
from skcfctl.config import OUTPUT_FORMATS, resolve_settings
from skcfctl.duration import duration_arg
from skcfctl.errors import ProjectIdError, SkcfError, WaitCancelledError
from skcfctl.redact import register_secret
from skcfctl.wait.types import PollingPolicy

logger = logging.getLogger(__name__)

EXIT_CANCELLED = 130


def common_arguments():
    """Parent parser with the flags every leaf command accepts."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--project-id", default=None, help="Project ID (fallback: SKCF_PROJECT_ID, config file)")
    parser.add_argument("--api-url", default=None, help="API base URL (fallback: SKCF_API_URL, config file)")
    parser.add_argument("--config", default=None, help="Config file (default: $SKCF_CONFIG or ~/.config/skcfctl/config.yaml)")
    parser.add_argument("-o", "--output-format", choices=OUTPUT_FORMATS, default=None, help="Output format (default: text)")
    parser.add_argument("-y", "--assume-yes", action="store_true", help="Skip confirmation prompts")
    parser.add_argument("--verbose", action="store_true", help="Debug logging, including API requests")
    return parser


def mutation_arguments():
    """Parent parser for commands that start a long-running operation."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--async", dest="async_mode", action="store_true", help="Return without waiting for the operation to finish")
    parser.add_argument(
        "--wait-timeout", type=duration_arg, default=None,
        help="Give up waiting after this long, e.g. 30m or 2h; 0s waits forever (default: 45m)",
    )
    parser.add_argument("--poll-interval", type=duration_arg, default=None, help="Time between status polls (default: 5s)")
    parser.add_argument("--dry-run", action="store_true", help="Print requests without executing")
    return parser


def require_project_id(settings):
    if not settings.project_id:
        raise ProjectIdError()
    return settings.project_id


def make_client(settings, dry_run=False):
    register_secret(settings.token)
    return SkcfClient(api_url=settings.api_url, token=settings.token, dry_run=dry_run)


def polling_policy(settings):
    """PollingPolicy from settings. A zero wait timeout means no deadline."""
    try:
        return PollingPolicy(interval=settings.poll_interval, max_elapsed=settings.wait_timeout or None)
    except ValueError as e:
        raise SkcfError(str(e)) from e


def read_payload(value):
    """Parse a JSON payload given inline or as ``@path``."""
    if value is None:
        return None
    if value.startswith("@"):
        path = value[1:]
        try:
            with open(path) as f:
                value = f.read()
        except OSError as e:
            raise SkcfError(f"read payload file {path}: {e}") from e
    try:
        payload = json.loads(value)
    except json.JSONDecodeError as e:
        raise SkcfError(f"invalid payload JSON: {e}") from e
    if not isinstance(payload, dict):
        raise SkcfError("invalid payload JSON: expected an object")
    return payload


def emit(text):
    """Write command output to stdout. Logs go to stderr."""
    if text:
        print(text)


@contextlib.asynccontextmanager
async def cancel_on_signals(signals=(signal.SIGINT, signal.SIGTERM)):
    """Yield an asyncio.Event that is set when one of *signals* arrives."""
    cancel = asyncio.Event()
    loop = asyncio.get_running_loop()
    installed = []
    for sig in signals:
        try:
            loop.add_signal_handler(sig, cancel.set)
        except (NotImplementedError, RuntimeError, ValueError):
            # No signal support on this platform or outside the main thread
            continue
        installed.append(sig)
    try:
        yield cancel
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)


def run_handler(handler, args):
    """Resolve settings, run the async *handler* and map errors to exit codes."""
    try:
        settings = resolve_settings(args)
        asyncio.run(handler(args, settings))
    except WaitCancelledError as e:
        logger.error(f"Error: {e}")
        sys.exit(EXIT_CANCELLED)
    except SkcfError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)
    except httpx.HTTPError as e:
        logger.error(f"Error: request to SKCF API failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.error("Interrupted.")
        sys.exit(EXIT_CANCELLED)
