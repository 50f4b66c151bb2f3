import csv
import io
import logging

import pandas as pd

from grid_model import Grid

logger = logging.getLogger(__name__)


class CsvParseError(ValueError):
    pass


def _header_width(text: str) -> int:
    try:
        for record in csv.reader(io.StringIO(text), strict=True):
            if record:
                return len(record)
    except csv.Error as exc:
        raise CsvParseError(f"Malformed CSV: {exc}") from exc
    raise CsvParseError("CSV input is empty")


def parse_csv(text: str) -> Grid:
    """
    Parse CSV text into a Grid. The first record becomes the header row.

    Cells are read verbatim as strings; blank lines are skipped. Every
    record is fitted to the header width: missing trailing fields become
    empty strings and extra trailing fields are dropped.
    """
    if text is None or not text.strip():
        raise CsvParseError("CSV input is empty")
    width = _header_width(text)

    def _truncate(bad_line):
        logger.warning(
            "Dropping %d extra field(s) from record %r", len(bad_line) - width, bad_line
        )
        return bad_line[:width]

    try:
        df = pd.read_csv(
            io.StringIO(text),
            header=None,
            names=list(range(width)),
            index_col=False,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=_truncate,
        )
    except pd.errors.EmptyDataError as exc:
        raise CsvParseError("CSV input is empty") from exc
    except pd.errors.ParserError as exc:
        raise CsvParseError(f"Malformed CSV: {exc}") from exc
    df = df.fillna("")
    return Grid.from_rows(df.values.tolist())


def serialize_csv(grid: Grid) -> str:
    if grid.is_empty or grid.column_count == 0:
        return ""
    df = pd.DataFrame(grid.rows, dtype=object)
    return df.to_csv(index=False, header=False, lineterminator="\n")
