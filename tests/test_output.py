"""Unit tests for output rendering."""

import json

import yaml

from skcfctl.output import format_table, render

CLUSTER = {"name": "my-cluster", "status": {"aggregated": "STATE_HEALTHY"}}


def test_render_json():
    assert json.loads(render(CLUSTER, "json")) == CLUSTER
    assert render(CLUSTER, "json").startswith("{\n  ")


def test_render_yaml_keeps_key_order():
    text = render(CLUSTER, "yaml")
    assert yaml.safe_load(text) == CLUSTER
    assert text.splitlines()[0] == "name: my-cluster"


def test_render_text_uses_text_fn():
    assert render(CLUSTER, "text", lambda c: c["name"]) == "my-cluster"
    assert render("plain", "text") == "plain"


def test_format_table_with_headers():
    table = format_table([("a-long-name", "STATE_HEALTHY"), ("b", "STATE_CREATING")], headers=("NAME", "STATE"))
    assert table.splitlines() == [
        "NAME         STATE",
        "-----------  --------------",
        "a-long-name  STATE_HEALTHY",
        "b            STATE_CREATING",
    ]


def test_format_table_empty():
    assert format_table([]) == ""
