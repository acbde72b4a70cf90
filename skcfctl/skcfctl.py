#!/usr/bin/env python3
"""SKCF command-line client: CLI entrypoint."""

import argparse

from skcfctl import __version__
from skcfctl.commands.cluster import register_cluster_command
from skcfctl.commands.kubeconfig import register_kubeconfig_command
from skcfctl.logging_setup import setup_cli_logging


def build_parser():
    parser = argparse.ArgumentParser(prog="skcfctl", description="Manage SKCF (Korifi Cloud Foundry) clusters")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    register_cluster_command(subparsers)
    register_kubeconfig_command(subparsers)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_cli_logging(verbose=args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
