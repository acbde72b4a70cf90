"""Kubeconfig command handlers."""

import logging

from skcfctl.commands import (
    common_arguments,
    emit,
    make_client,
    require_project_id,
    run_handler,
)
from skcfctl.duration import format_seconds, parse_duration
from skcfctl.errors import AbortedError, SkcfError
from skcfctl.kubeconfig import default_kubeconfig_path, write_config_file
from skcfctl.output import render
from skcfctl.pipeline import confirm

logger = logging.getLogger(__name__)


def handle_create(args):
    """CLI handler for 'kubeconfig create'."""
    run_handler(_handle_create, args)


async def _handle_create(args, settings):
    project_id = require_project_id(settings)
    expiration = None
    if args.expiration is not None:
        expiration = format_seconds(parse_duration(args.expiration))
    location = args.filepath or default_kubeconfig_path()

    if not args.assume_yes and not args.dry_run:
        prompt = (
            f"Are you sure you want to create a kubeconfig for SKCF cluster '{args.cluster_name}'? "
            f"This will OVERWRITE {location}, if it exists."
        )
        if not confirm(prompt):
            raise AbortedError()

    client = make_client(settings, dry_run=args.dry_run)
    resp = await client.create_kubeconfig(project_id, args.cluster_name, expiration)
    if resp is None:  # dry-run
        logger.info(f"[dry-run] Would write kubeconfig to {location}")
        return

    kubeconfig = resp.get("kubeconfig")
    if not kubeconfig:
        raise SkcfError("API response does not contain a kubeconfig")
    write_config_file(location, kubeconfig)

    expires = resp.get("expirationTimestamp") or "unknown"
    emit(render(
        resp,
        settings.output_format,
        lambda _: f"Created kubeconfig file for cluster '{args.cluster_name}' in \"{location}\", expires {expires}",
    ))


# ── Registration ───────────────────────────────────────────────────


def register_kubeconfig_command(subparsers):
    """Register the 'kubeconfig' command with its action subparsers."""
    common = common_arguments()

    kubeconfig_parser = subparsers.add_parser("kubeconfig", help="Manage SKCF kubeconfigs")
    actions = kubeconfig_parser.add_subparsers(dest="action", required=True)

    parser = actions.add_parser("create", parents=[common], help="Create a kubeconfig for a cluster")
    parser.add_argument("cluster_name", metavar="CLUSTER_NAME")
    parser.add_argument(
        "-e", "--expiration", default=None,
        help="Lifetime as <value><unit>, unit one of s, m, h, d, M (30-day month), e.g. 30d",
    )
    parser.add_argument("--filepath", default=None, help="Where to write the kubeconfig (default: ~/.kube/config)")
    parser.add_argument("--dry-run", action="store_true", help="Print requests without executing")
    parser.set_defaults(func=handle_create)
