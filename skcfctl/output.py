"""Render command results as text, JSON or YAML."""

import json

import yaml


def to_json(data):
    return json.dumps(data, indent=2, default=str)


def to_yaml(data):
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip("\n")


def render(data, output_format, text_fn=None):
    """Return *data* formatted for *output_format*.

    Args:
        text_fn: callable producing the ``text`` rendering; defaults to str().
    """
    if output_format == "json":
        return to_json(data)
    if output_format == "yaml":
        return to_yaml(data)
    if text_fn is not None:
        return text_fn(data)
    return str(data)


def format_table(rows, headers=None):
    """Left-aligned, space-padded table. *rows* is a list of equal-length sequences."""
    rows = [[str(c) for c in row] for row in rows]
    if headers:
        rows.insert(0, [str(h) for h in headers])
    if not rows:
        return ""
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    lines = ["  ".join(cell.ljust(w) for cell, w in zip(row, widths)).rstrip() for row in rows]
    if headers:
        lines.insert(1, "  ".join("-" * w for w in widths))
    return "\n".join(lines)
