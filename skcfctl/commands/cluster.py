"""Cluster command handlers: create, update, delete, describe, list."""

import logging

from skcfctl.api.client import cluster_exists
from skcfctl.commands import (
    cancel_on_signals,
    common_arguments,
    emit,
    make_client,
    mutation_arguments,
    polling_policy,
    read_payload,
    require_project_id,
    run_handler,
)
from skcfctl.errors import SkcfError
from skcfctl.output import format_table, render
from skcfctl.pipeline import run_mutation
from skcfctl.wait.cluster import (
    aggregated_state,
    create_or_update_cluster_wait_handler,
    delete_cluster_wait_handler,
)

logger = logging.getLogger(__name__)


def _cluster_table(cluster):
    rows = [
        ("NAME", cluster.get("name", "")),
        ("STATE", aggregated_state(cluster) or "-"),
    ]
    return format_table(rows)


def _make_waiter(factory, client, project_id, policy, verb):
    """Return the pipeline's ``wait(name)`` callable for one wait handler factory."""

    async def wait(name):
        handler = factory(client, project_id, name, policy)
        logger.info(f"Waiting for cluster '{name}' to finish {verb} (poll every {policy.interval:g}s)...")
        async with cancel_on_signals() as cancel:
            return await handler.wait(cancel)

    return wait


# ── CLI handlers ───────────────────────────────────────────────────


def handle_create(args):
    """CLI handler for 'cluster create'."""
    run_handler(_handle_create, args)


async def _handle_create(args, settings):
    project_id = require_project_id(settings)
    payload = read_payload(args.payload) or {}
    client = make_client(settings, dry_run=args.dry_run)

    if await cluster_exists(client, project_id, args.cluster_name):
        raise SkcfError(f"cluster with name {args.cluster_name} already exists")

    policy = polling_policy(settings)
    result = await run_mutation(
        lambda: client.create_or_update_cluster(project_id, args.cluster_name, payload),
        confirm_prompt=f"Are you sure you want to create a cluster for project '{project_id}'?",
        assume_yes=args.assume_yes,
        wait=_make_waiter(create_or_update_cluster_wait_handler, client, project_id, policy, "creation"),
        async_mode=args.async_mode,
        dry_run=args.dry_run,
    )
    if result.dry_run:
        return

    verb = "Triggered creation of" if result.async_mode else "Created"
    emit(render(
        result.waited or result.response,
        settings.output_format,
        lambda _: f"{verb} cluster for project '{project_id}'. Cluster name: {result.name}",
    ))


def handle_update(args):
    """CLI handler for 'cluster update'."""
    run_handler(_handle_update, args)


async def _handle_update(args, settings):
    project_id = require_project_id(settings)
    payload = read_payload(args.payload)
    client = make_client(settings, dry_run=args.dry_run)

    policy = polling_policy(settings)
    result = await run_mutation(
        lambda: client.create_or_update_cluster(project_id, args.cluster_name, payload),
        confirm_prompt=f"Are you sure you want to update cluster '{args.cluster_name}'?",
        assume_yes=args.assume_yes,
        wait=_make_waiter(create_or_update_cluster_wait_handler, client, project_id, policy, "update"),
        async_mode=args.async_mode,
        dry_run=args.dry_run,
    )
    if result.dry_run:
        return

    verb = "Triggered update of" if result.async_mode else "Updated"
    emit(render(
        result.waited or result.response,
        settings.output_format,
        lambda _: f"{verb} cluster '{result.name}' in project '{project_id}'.",
    ))


def handle_delete(args):
    """CLI handler for 'cluster delete'."""
    run_handler(_handle_delete, args)


async def _handle_delete(args, settings):
    project_id = require_project_id(settings)
    client = make_client(settings, dry_run=args.dry_run)
    name = args.cluster_name

    async def submit():
        await client.delete_cluster(project_id, name)
        # DELETE has no body; the operation is identified by the cluster name
        return {"name": name}

    policy = polling_policy(settings)
    result = await run_mutation(
        submit,
        confirm_prompt=f"Are you sure you want to delete cluster '{name}'? (This cannot be undone)",
        assume_yes=args.assume_yes,
        wait=_make_waiter(delete_cluster_wait_handler, client, project_id, policy, "deletion"),
        async_mode=args.async_mode,
        dry_run=args.dry_run,
    )
    if result.dry_run:
        return

    verb = "Triggered deletion of" if result.async_mode else "Deleted"
    emit(render(
        {"name": name, "projectId": project_id, "deleted": not result.async_mode},
        settings.output_format,
        lambda _: f"{verb} cluster '{name}'.",
    ))


def handle_describe(args):
    """CLI handler for 'cluster describe'."""
    run_handler(_handle_describe, args)


async def _handle_describe(args, settings):
    project_id = require_project_id(settings)
    client = make_client(settings)
    cluster = await client.get_cluster(project_id, args.cluster_name)
    emit(render(cluster, settings.output_format, _cluster_table))


def handle_list(args):
    """CLI handler for 'cluster list'."""
    run_handler(_handle_list, args)


async def _handle_list(args, settings):
    project_id = require_project_id(settings)
    if args.limit is not None and args.limit < 1:
        raise SkcfError("--limit must be greater than 0")

    client = make_client(settings)
    clusters = await client.list_clusters(project_id)
    if args.limit is not None:
        clusters = clusters[: args.limit]

    if not clusters and settings.output_format == "text":
        logger.info(f"No clusters found for project '{project_id}'")
        return

    def as_table(items):
        return format_table(
            [(c.get("name", ""), aggregated_state(c) or "-") for c in items],
            headers=("NAME", "STATE"),
        )

    emit(render(clusters, settings.output_format, as_table))


# ── Registration ───────────────────────────────────────────────────


def register_cluster_command(subparsers):
    """Register the 'cluster' command with its action subparsers."""
    common = common_arguments()
    mutation = mutation_arguments()

    cluster_parser = subparsers.add_parser("cluster", help="Manage SKCF clusters")
    actions = cluster_parser.add_subparsers(dest="action", required=True)

    parser = actions.add_parser("create", parents=[common, mutation], help="Create a cluster")
    parser.add_argument("cluster_name", metavar="CLUSTER_NAME")
    parser.add_argument("--payload", default=None, help='Request payload as JSON, or a file path prefixed with "@"')
    parser.set_defaults(func=handle_create)

    parser = actions.add_parser("update", parents=[common, mutation], help="Update a cluster")
    parser.add_argument("cluster_name", metavar="CLUSTER_NAME")
    parser.add_argument("--payload", required=True, help='Request payload as JSON, or a file path prefixed with "@"')
    parser.set_defaults(func=handle_update)

    parser = actions.add_parser("delete", parents=[common, mutation], help="Delete a cluster")
    parser.add_argument("cluster_name", metavar="CLUSTER_NAME")
    parser.set_defaults(func=handle_delete)

    parser = actions.add_parser("describe", parents=[common], help="Show details of a cluster")
    parser.add_argument("cluster_name", metavar="CLUSTER_NAME")
    parser.set_defaults(func=handle_describe)

    parser = actions.add_parser("list", parents=[common], help="List clusters of a project")
    parser.add_argument("--limit", type=int, default=None, help="Maximum number of entries to list")
    parser.set_defaults(func=handle_list)
