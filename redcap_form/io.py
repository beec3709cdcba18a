"""Input/output utilities for reading and writing JSONL files."""

import json
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any


def read_jsonl(path: Path | str) -> Iterator[dict[str, Any]]:
    """Read a JSONL file of response records.

    Args:
        path: Path to the JSONL file.

    Yields:
        Each parsed record. Blank lines are skipped.

    Raises:
        ValueError: If a line is not valid JSON.
    """
    with open(path, encoding="utf-8") as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON on line {line_num}: {e}") from e


def write_jsonl(path: Path | str, records: Iterable[dict[str, Any]]) -> int:
    """Write decoded records to a JSONL file and return how many were written."""
    count = 0
    with open(path, "w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
            count += 1
    return count
