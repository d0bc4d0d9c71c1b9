"""Property-based tests for CLI formatters using Hypothesis.

Properties tested:
- JSON roundtrip: format_json output parses back to the input rows
- JSONL line validity: one valid JSON object per row
- CSV shape: one header plus one line per row, whatever the cell text
"""

from __future__ import annotations

import csv
import io
import json
from typing import Any

from hypothesis import given
from hypothesis import strategies as st

from datepoll.cli.formatters import format_csv, format_json, format_jsonl

# Control characters are excluded; records hold labels and ISO dates
printable = st.text(alphabet=st.characters(blacklist_categories=("Cs", "Cc")))

cell_values = st.one_of(
    st.integers(),
    st.booleans(),
    printable,
    st.lists(printable, max_size=4),
)

rows = st.lists(
    st.fixed_dictionaries({"key": printable, "label": printable, "value": cell_values}),
    min_size=1,
    max_size=10,
)


class TestFormatterProperties:
    """Invariants for every list of flat records."""

    @given(data=rows)
    def test_json_roundtrip(self, data: list[dict[str, Any]]) -> None:
        """Property: JSON output parses back to the input."""
        assert json.loads(format_json(data)) == data

    @given(data=rows)
    def test_jsonl_one_object_per_row(self, data: list[dict[str, Any]]) -> None:
        """Property: each row is one parseable line."""
        lines = format_jsonl(data).split("\n")
        assert [json.loads(line) for line in lines] == data

    @given(data=rows)
    def test_csv_row_count(self, data: list[dict[str, Any]]) -> None:
        """Property: csv.reader sees a header plus one record per row."""
        parsed = list(csv.reader(io.StringIO(format_csv(data))))
        assert parsed[0] == list(data[0])
        assert len(parsed) == len(data) + 1
        label_at = parsed[0].index("label")
        assert [r[label_at] for r in parsed[1:]] == [row["label"] for row in data]
