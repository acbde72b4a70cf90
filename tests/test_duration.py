"""Unit tests for skcfctl.duration."""

import argparse

import pytest

from skcfctl.duration import MAX_SECONDS, duration_arg, format_seconds, parse_duration
from skcfctl.errors import InvalidDurationError, SkcfError


@pytest.mark.parametrize(
    "text,expected",
    [
        ("30s", 30),
        ("30m", 1800),
        ("30h", 108000),
        ("30d", 2592000),
        ("30M", 77760000),
        ("0030M", 77760000),
        ("0s", 0),
        ("1M", 2592000),
    ],
)
def test_parse_duration_valid(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "",
        "x",
        "5",
        "30x",
        "3000abcdef",
        "3000abcdef000",
        "30S",
        "30D",
        "-5s",
        "+5s",
        " 5s",
        "3_0s",
        "3.5h",
        "s",
        "ms",
        "٣s",  # non-ASCII digit
    ],
)
def test_parse_duration_invalid(text):
    with pytest.raises(InvalidDurationError):
        parse_duration(text)


def test_parse_duration_magnitude_beyond_uint64():
    with pytest.raises(InvalidDurationError, match="value"):
        parse_duration(f"{MAX_SECONDS + 1}s")


def test_parse_duration_max_magnitude_in_seconds():
    assert parse_duration(f"{MAX_SECONDS}s") == MAX_SECONDS


def test_parse_duration_product_overflow_fails():
    # Fits in 64 bits as a magnitude, overflows once multiplied
    with pytest.raises(InvalidDurationError, match="overflows"):
        parse_duration(f"{MAX_SECONDS // 60 + 1}m")


def test_invalid_duration_is_value_error_and_skcf_error():
    with pytest.raises(ValueError):
        parse_duration("30x")
    with pytest.raises(SkcfError):
        parse_duration("30x")


def test_format_seconds():
    assert format_seconds(parse_duration("30d")) == "2592000"


def test_duration_arg():
    assert duration_arg("2m") == 120.0
    with pytest.raises(argparse.ArgumentTypeError, match="invalid duration unit"):
        duration_arg("2w")
