"""Tests for the OpenTSDB line parser."""

import pytest

from tsdb_ingest.core.errors import (
    ParsingError,
    InvalidMetricError,
    InvalidTimestampError,
    InvalidValueError,
    InvalidTagError
)
from tsdb_ingest.models import MetricTag
from tsdb_ingest.transformers.opentsdb import parse_opentsdb, parse_timestamp

def test_single_line_with_two_tags():
    """Test a complete line with two tags."""
    batch = parse_opentsdb("sys.cpu.user 1609459200 42.5 host=server01 dc=us-east")

    assert len(batch) == 1
    metric = batch[0]
    assert metric.name == "sys.cpu.user"
    assert metric.value == 42.5
    assert metric.timestamp == 1609459200
    assert metric.tags == [
        MetricTag(name="host", value="server01"),
        MetricTag(name="dc", value="us-east")
    ]

def test_multiple_lines_keep_order():
    """Test that lines are parsed independently and in order."""
    batch = parse_opentsdb(
        "sys.cpu.user 1609459200 42.5 host=server01\n"
        "sys.mem.free 1609459260 1024 host=server02"
    )

    assert [m.name for m in batch] == ["sys.cpu.user", "sys.mem.free"]
    assert [m.timestamp for m in batch] == [1609459200, 1609459260]
    assert batch[1].value == 1024.0
    assert batch[1].tags == [MetricTag(name="host", value="server02")]

def test_millisecond_timestamp_is_normalized():
    """Test that 13 digit timestamps are converted to seconds."""
    batch = parse_opentsdb("sys.cpu.user 1609459200000 42.5 host=server01")
    assert batch[0].timestamp == 1609459200

    batch = parse_opentsdb("sys.cpu.user 1609459200999 42.5 host=server01")
    assert batch[0].timestamp == 1609459200

@pytest.mark.parametrize("token,expected", [
    ("1609459200", 1609459200),
    ("160945920", 160945920),
    ("16094592000", 16094592000),
    ("0", 0),
    ("+1609459200", 1609459200),
    ("-1609459200999", -1609459200),
    ("9223372036854775807", 9223372036854775807),
    ("-9223372036854775808", -9223372036854775808),
])
def test_parse_timestamp(token, expected):
    """Test second and millisecond timestamp handling."""
    assert parse_timestamp(token) == expected

def test_surrounding_whitespace_is_ignored():
    """Test that blank lines and whitespace around the blob change nothing."""
    line = "sys.cpu.user 1609459200 42.5 host=server01"
    plain = parse_opentsdb(line)
    padded = parse_opentsdb(f"\n\n   {line}  \n\t\n")

    assert padded.transform() == plain.transform()

def test_empty_lines_between_metrics_are_skipped():
    """Test that output length equals the number of non-empty lines."""
    blob = "a 1 1 t=1\n\nb 2 2 t=2\n"
    batch = parse_opentsdb(blob)

    assert len(batch) == 2
    assert [m.name for m in batch] == ["a", "b"]

@pytest.mark.parametrize("blob", ["", "   ", "\n\n", " \t\n "])
def test_empty_input_gives_empty_batch(blob):
    """Test that blank input is not an error."""
    batch = parse_opentsdb(blob)
    assert len(batch) == 0
    assert batch.transform() == []

def test_line_without_tags_is_invalid():
    """Test that three tokens are not enough."""
    line = "sys.cpu.user 1609459200 42.5"
    with pytest.raises(InvalidMetricError, match="at least 4 arguments") as exc_info:
        parse_opentsdb(line)

    assert line in str(exc_info.value)
    assert exc_info.value.details["line"] == line
    assert exc_info.value.details["line_number"] == 1

def test_whitespace_only_interior_line_is_invalid():
    """Test that a line of spaces is not mistaken for an empty line."""
    with pytest.raises(InvalidMetricError):
        parse_opentsdb("a 1 1 t=1\n    \nb 2 2 t=2")

@pytest.mark.parametrize("token", ["notatime", "16094592.00", "", "1_609_459_200", "0x10", "99999999999999999999",
                                   "9223372036854775808", "-9223372036854775809"])
def test_invalid_timestamp(token):
    """Test rejection of timestamps that are not base-10 int64 values."""
    with pytest.raises(InvalidTimestampError) as exc_info:
        parse_opentsdb(f"sys.cpu.user {token} 42.5 host=server01")

    assert exc_info.value.details["token"] == token

def test_invalid_value_produces_no_output():
    """Test that a bad value fails the whole parse."""
    with pytest.raises(InvalidValueError, match="notanumber"):
        parse_opentsdb("sys.cpu.user 1609459200 notanumber host=server01")

@pytest.mark.parametrize("token", ["nan", "inf", "-Infinity", "1e400", "1_000", "4,2", ""])
def test_non_finite_or_malformed_values_are_rejected(token):
    """Test rejection of values that are not finite decimal numbers."""
    with pytest.raises(InvalidValueError):
        parse_opentsdb(f"sys.cpu.user 1609459200 {token} host=server01")

@pytest.mark.parametrize("token,expected", [
    ("42", 42.0),
    ("-3.5", -3.5),
    (".5", 0.5),
    ("1.", 1.0),
    ("2.5e3", 2500.0),
    ("+7E-1", 0.7),
])
def test_valid_values(token, expected):
    """Test integer, signed and exponent values."""
    batch = parse_opentsdb(f"m 1609459200 {token} t=v")
    assert batch[0].value == pytest.approx(expected)

@pytest.mark.parametrize("token", ["foo==bar", "foobar", "a=b=c", "=bar", "foo="])
def test_invalid_tag(token):
    """Test rejection of tags that are not a single key=value pair."""
    with pytest.raises(InvalidTagError, match="invalid opentsdb metric tag") as exc_info:
        parse_opentsdb(f"sys.cpu.user 1609459200 42.5 host=server01 {token}")

    assert exc_info.value.details["token"] == token

def test_duplicate_tags_are_preserved():
    """Test that tags are neither deduplicated nor reordered."""
    batch = parse_opentsdb("m 1609459200 1 z=1 a=2 z=3")
    assert [(t.name, t.value) for t in batch[0].tags] == [("z", "1"), ("a", "2"), ("z", "3")]

def test_first_bad_line_aborts_whole_batch():
    """Test all-or-nothing behaviour and the reported line number."""
    blob = (
        "a 1609459200 1 t=1\n"
        "b 1609459200 2 t=2\n"
        "c 1609459200 oops t=3\n"
        "d 1609459200 4 bad"
    )
    with pytest.raises(ParsingError) as exc_info:
        parse_opentsdb(blob)

    assert isinstance(exc_info.value, InvalidValueError)
    assert exc_info.value.details["line_number"] == 3
    assert exc_info.value.details["line"] == "c 1609459200 oops t=3"

def test_double_space_is_not_collapsed():
    """Test that tokens are split on single spaces only."""
    with pytest.raises(InvalidTimestampError):
        parse_opentsdb("m  1609459200 1 t=v")
