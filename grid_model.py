from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np
import pandas as pd


class GridError(Exception):
    pass


class GridIndexError(GridError, IndexError):
    pass


class RaggedRowsError(GridError, ValueError):
    pass


@dataclass(frozen=True)
class GridSnapshot:
    """Immutable copy of a grid's rows, as kept on the history stacks."""

    rows: tuple
    label: str = ""

    @property
    def row_count(self) -> int:
        return len(self.rows)


def _frame(rows: list[list[str]], width: int) -> pd.DataFrame:
    # object ndarray keeps the shape even when width is 0
    data = np.empty((len(rows), width), dtype=object)
    for i, row in enumerate(rows):
        data[i, :] = row
    return pd.DataFrame(data)


class Grid:
    """
    Rectangular table of string cells. Row 0 is the header row.

    A Grid never changes after construction; every operation returns a new
    Grid built on a deep copy of the frame.
    """

    HEADER_ROW = 0

    def __init__(self, df: pd.DataFrame):
        self._df = df

    # ---------- constructors ----------
    @classmethod
    def empty(cls) -> "Grid":
        return cls(_frame([], 0))

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable]) -> "Grid":
        cleaned = [[str(cell) for cell in row] for row in rows]
        if not cleaned:
            return cls.empty()
        width = len(cleaned[0])
        for idx, row in enumerate(cleaned):
            if len(row) != width:
                raise RaggedRowsError(
                    f"Row {idx} has {len(row)} cells, expected {width}"
                )
        return cls(_frame(cleaned, width))

    @classmethod
    def from_snapshot(cls, snapshot: GridSnapshot) -> "Grid":
        return cls.from_rows(snapshot.rows)

    # ---------- accessors ----------
    @property
    def row_count(self) -> int:
        return int(self._df.shape[0])

    @property
    def column_count(self) -> int:
        return int(self._df.shape[1])

    @property
    def is_empty(self) -> bool:
        return self.row_count == 0

    @property
    def header(self) -> list[str]:
        if self.is_empty:
            return []
        return list(self._df.iloc[self.HEADER_ROW])

    @property
    def rows(self) -> list[list[str]]:
        return self._df.values.tolist()

    def cell(self, row: int, col: int) -> str:
        self._check_row(row)
        self._check_col(col)
        return self._df.iat[row, col]

    def snapshot(self, label: str = "") -> GridSnapshot:
        return GridSnapshot(tuple(tuple(row) for row in self.rows), label)

    def to_frame(self) -> pd.DataFrame:
        """Data rows as a DataFrame labelled by the header, for display."""
        if self.is_empty:
            return pd.DataFrame()
        body = self._df.iloc[1:].reset_index(drop=True).copy(deep=True)
        body.columns = self.header
        return body

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self.rows == other.rows

    __hash__ = None

    def __repr__(self):
        return f"Grid(rows={self.row_count}, columns={self.column_count})"

    # ---------- bounds ----------
    def _check_row(self, row: int):
        upper = self.row_count
        if not isinstance(row, (int, np.integer)) or isinstance(row, bool):
            raise GridIndexError(f"Row index must be an integer, got {row!r}")
        if row < 0 or row >= upper:
            raise GridIndexError(f"Row {row} out of range (0..{upper - 1})")

    def _check_col(self, col: int, allow_first_when_empty: bool = False):
        if not isinstance(col, (int, np.integer)) or isinstance(col, bool):
            raise GridIndexError(f"Column index must be an integer, got {col!r}")
        if allow_first_when_empty and self.column_count == 0 and self.row_count and col == 0:
            return
        if col < 0 or col >= self.column_count:
            raise GridIndexError(
                f"Column {col} out of range (0..{self.column_count - 1})"
            )

    def _copy_frame(self) -> pd.DataFrame:
        return self._df.copy(deep=True)

    # ---------- cell ----------
    def update_cell(self, row: int, col: int, value: str) -> "Grid":
        self._check_row(row)
        self._check_col(col)
        df = self._copy_frame()
        df.iat[row, col] = "" if value is None else str(value)
        return Grid(df)

    # ---------- rows ----------
    def delete_row(self, row: int) -> "Grid":
        if row == self.HEADER_ROW:
            return self
        self._check_row(row)
        df = self._copy_frame().drop(index=row).reset_index(drop=True)
        return Grid(df)

    def insert_row_above(self, row: int) -> "Grid":
        if row == self.HEADER_ROW and not self.is_empty:
            return self
        self._check_row(row)
        return self._insert_row_at(row)

    def insert_row_below(self, row: int) -> "Grid":
        self._check_row(row)
        return self._insert_row_at(row + 1)

    def _insert_row_at(self, insert_at: int) -> "Grid":
        new_row = _frame([[""] * self.column_count], self.column_count)
        df = self._copy_frame()
        df = pd.concat(
            [df.iloc[:insert_at], new_row, df.iloc[insert_at:]],
            ignore_index=True,
        )
        df.columns = pd.RangeIndex(df.shape[1])
        return Grid(df)

    # ---------- columns ----------
    def delete_column(self, col: int) -> "Grid":
        self._check_col(col)
        df = self._copy_frame().drop(columns=[col])
        df.columns = pd.RangeIndex(df.shape[1])
        return Grid(df)

    def rename_column(self, col: int, new_name: Optional[str]) -> "Grid":
        self._check_col(col)
        if new_name is None:
            return self
        df = self._copy_frame()
        df.iat[self.HEADER_ROW, col] = str(new_name)
        return Grid(df)

    def insert_column_left(self, col: int) -> "Grid":
        self._check_col(col, allow_first_when_empty=True)
        return self._insert_column_at(col)

    def insert_column_right(self, col: int) -> "Grid":
        self._check_col(col, allow_first_when_empty=True)
        return self._insert_column_at(min(col + 1, self.column_count))

    def _insert_column_at(self, insert_at: int) -> "Grid":
        df = self._copy_frame()
        df.insert(insert_at, "__new__", [""] * self.row_count)
        df.columns = pd.RangeIndex(df.shape[1])
        return Grid(df.astype(object))
