import logging
from typing import Callable, Optional

from csv_io import DownloadSink, ExportResult, SaveHandleSink, export_csv
from grid_model import Grid, GridIndexError

logger = logging.getLogger(__name__)


class GridEditor:
    """Grid operations invoked from the command loop, routed through history."""

    def __init__(self, state, set_status_cb: Callable[[str, float], None],
                 download_dir: str = ".", default_file_name: str = "data.csv"):
        self.state = state
        self._set_status = set_status_cb
        self.download_dir = download_dir
        self.default_file_name = default_file_name

    def _apply(self, label: str, mutation: Callable[[Grid], Grid], done_msg: str) -> bool:
        before = self.state.grid
        try:
            after = self.state.history.record_and_apply(before, mutation, label)
        except GridIndexError as exc:
            logger.debug("Rejected %s: %s", label, exc)
            self._set_status(f"Cannot {label}: {exc}", 3)
            return False
        if after is before:
            return False
        self.state.grid = after
        self._set_status(done_msg, 2)
        return True

    # ----- cells -----
    def update_cell(self, row: int, col: int, value: str) -> bool:
        return self._apply(
            "edit cell",
            lambda g: g.update_cell(row, col, value),
            f"Updated cell ({row}, {col})",
        )

    # ----- row operations -----
    def delete_row(self, row: int) -> bool:
        if row == Grid.HEADER_ROW:
            self._set_status("Header row is protected", 2)
            return False
        return self._apply("delete row", lambda g: g.delete_row(row), f"Deleted row {row}")

    def insert_row_above(self, row: int) -> bool:
        if row == Grid.HEADER_ROW and not self.state.grid.is_empty:
            self._set_status("Header row is protected", 2)
            return False
        return self._apply(
            "insert row", lambda g: g.insert_row_above(row), f"Inserted row above {row}"
        )

    def insert_row_below(self, row: int) -> bool:
        return self._apply(
            "insert row", lambda g: g.insert_row_below(row), f"Inserted row below {row}"
        )

    # ----- column operations -----
    def delete_column(self, col: int) -> bool:
        return self._apply(
            "delete column", lambda g: g.delete_column(col), f"Deleted column {col}"
        )

    def rename_column(self, col: int, new_name: Optional[str]) -> bool:
        if new_name is None:
            self._set_status("Rename canceled", 2)
            return False
        return self._apply(
            "rename column",
            lambda g: g.rename_column(col, new_name),
            f"Renamed column {col} to '{new_name}'",
        )

    def insert_column_left(self, col: int) -> bool:
        return self._apply(
            "insert column",
            lambda g: g.insert_column_left(col),
            f"Inserted column left of {col}",
        )

    def insert_column_right(self, col: int) -> bool:
        return self._apply(
            "insert column",
            lambda g: g.insert_column_right(col),
            f"Inserted column right of {col}",
        )

    # ----- history -----
    def undo(self) -> bool:
        history = self.state.history
        label = history.peek_undo_label()
        grid = history.undo(self.state.grid)
        if grid is None:
            self._set_status("Nothing to undo", 2)
            return False
        self.state.grid = grid
        remaining = history.undo_depth
        msg = f"Undone {label}" if label else "Undone"
        self._set_status(f"{msg} ({remaining} more)" if remaining else msg, 2)
        return True

    def redo(self) -> bool:
        history = self.state.history
        label = history.peek_redo_label()
        grid = history.redo(self.state.grid)
        if grid is None:
            self._set_status("Nothing to redo", 2)
            return False
        self.state.grid = grid
        remaining = history.redo_depth
        msg = f"Redone {label}" if label else "Redone"
        self._set_status(f"{msg} ({remaining} more)" if remaining else msg, 2)
        return True

    # ----- import/export -----
    def load_file(self, path: str) -> bool:
        if not self.state.import_file(path):
            self._set_status(f"Load failed: {self.state.last_error}", 4)
            return False
        grid = self.state.grid
        self._set_status(
            f"Loaded {self.state.file_name} ({grid.row_count} rows x {grid.column_count} cols)", 3
        )
        return True

    def _default_name(self) -> str:
        return self.state.file_name or self.default_file_name

    def save(self, name_prompt) -> ExportResult:
        sinks = [SaveHandleSink(self.state.file_path), DownloadSink(self.download_dir)]
        return self._export(sinks, name_prompt)

    def download(self, name_prompt) -> ExportResult:
        sinks = [DownloadSink(self.download_dir), SaveHandleSink(self.state.file_path)]
        return self._export(sinks, name_prompt)

    def _export(self, sinks, name_prompt) -> ExportResult:
        result = export_csv(self.state.grid, sinks, self._default_name(), name_prompt)
        if result.status == "saved":
            self.state.file_path = result.target
            self._set_status(f"Saved {result.target}", 3)
        elif result.status == "downloaded":
            self._set_status(f"Downloaded {result.target}", 3)
        elif result.status == "cancelled":
            self._set_status("Save canceled", 3)
        elif result.status == "empty":
            self._set_status("Nothing to save", 2)
        else:
            self._set_status(f"Save failed: {result.error}", 4)
        return result
