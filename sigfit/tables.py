"""Loading of mutation-count and signature tables from CSV or TSV files."""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

Table = list[list[float]]


class FileFormat(Enum):
    """Layout of a table file, as guessed from its content."""

    CSV = "csv"
    TSV = "tsv"
    MUTATED_CSV = "mutated_csv"
    MUTATED_TSV = "mutated_tsv"
    UNKNOWN = "unknown"

    @property
    def is_tsv(self) -> bool:
        return self in (FileFormat.TSV, FileFormat.MUTATED_TSV)

    @property
    def is_csv(self) -> bool:
        return self in (FileFormat.CSV, FileFormat.MUTATED_CSV)


def _detect_file_format(content: str) -> FileFormat:
    mutated = "Mutated" in content
    if "\t" in content:
        return FileFormat.MUTATED_TSV if mutated else FileFormat.TSV
    if "," in content:
        return FileFormat.MUTATED_CSV if mutated else FileFormat.CSV
    return FileFormat.UNKNOWN


def detect_format(content: str) -> tuple[FileFormat, str]:
    """Return the format of ``content`` and its field separator.

    Tabs take precedence over commas; an unknown format reports ``","``.
    """
    fmt = _detect_file_format(content)
    if fmt.is_tsv:
        return fmt, "\t"
    return fmt, ","


def _split_line(line: str, sep: str) -> list[str]:
    """Split ``line`` on ``sep``; a single trailing empty field is dropped."""
    parts = line.split(sep)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def _parse_row(line: str, sep: str, skip_columns: int) -> list[float]:
    values = []
    for part in _split_line(line, sep)[skip_columns:]:
        try:
            values.append(float(part.strip()))
        except ValueError:
            logger.warning(
                "cannot parse value %r as a number in line: %s", part, line
            )
            values.append(0.0)
    return values


def _read_table(
    path: str | os.PathLike[str], what: str
) -> tuple[FileFormat, str, list[str], list[str]]:
    content = Path(path).read_text()
    fmt, sep = detect_format(content)
    if fmt is FileFormat.UNKNOWN:
        raise ValueError(f"Unknown Format in {what} file")
    header, *lines = content.split("\n")
    return fmt, sep, _split_line(header.rstrip("\r"), sep), lines


def _rows(lines: list[str], sep: str, skip_columns: int) -> Table:
    rows = (_parse_row(line, sep, skip_columns) for line in lines)
    return [row for row in rows if row]


def load_samples(path: str | os.PathLike[str]) -> tuple[Table, list[str]]:
    """Load a samples table: one row per mutation type, one column per patient.

    TSV files carry one leading label column, CSV files two. Returns the
    numeric rows and the patient names from the header.
    """
    fmt, sep, header, lines = _read_table(path, "samples")
    skip_columns = 1 if fmt.is_tsv else 2
    return _rows(lines, sep, skip_columns), header[skip_columns:]


def load_signatures(path: str | os.PathLike[str]) -> tuple[Table, list[str]]:
    """Load a signatures table: one row per mutation type, one column per signature.

    The first column holds labels and is skipped. The returned names are the
    header with its first entry replaced by ``"Samples"``.
    """
    _, sep, header, lines = _read_table(path, "signatures")
    names = ["Samples", *header[1:]]
    return _rows(lines, sep, 1), names