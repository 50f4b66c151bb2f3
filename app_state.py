import logging
import os
from typing import Optional

from csv_codec import CsvParseError, parse_csv
from csv_io import read_csv_file
from grid_history import DEFAULT_MAX_DEPTH, GridHistory
from grid_model import Grid

logger = logging.getLogger(__name__)


class AppState:
    """Single owner of the live grid and its undo/redo history."""

    def __init__(self, grid: Optional[Grid] = None, file_path: Optional[str] = None,
                 undo_max_depth: int = DEFAULT_MAX_DEPTH):
        self.file_path = file_path
        self.history = GridHistory(undo_max_depth)
        self.last_error: Optional[str] = None
        self._grid = grid if grid is not None else Grid.empty()

    @property
    def grid(self) -> Grid:
        return self._grid

    @grid.setter
    def grid(self, value: Grid):
        if not isinstance(value, Grid):
            raise TypeError(f"Expected Grid, got {type(value).__name__}")
        self._grid = value

    @property
    def file_name(self) -> str:
        return os.path.basename(self.file_path) if self.file_path else ""

    @property
    def undo_stack(self):
        return self.history.undo_stack

    @property
    def redo_stack(self):
        return self.history.redo_stack

    # ---------- import ----------
    def load_grid(self, grid: Grid, file_path: Optional[str] = None):
        self._grid = grid
        self.file_path = file_path
        self.history.reset()
        self.last_error = None

    def import_text(self, text: str, file_path: Optional[str] = None) -> bool:
        try:
            grid = parse_csv(text)
        except CsvParseError as exc:
            label = file_path or "<text>"
            logger.warning("Could not import %s: %s", label, exc)
            self.last_error = str(exc)
            return False
        self.load_grid(grid, file_path)
        return True

    def import_file(self, path: str) -> bool:
        try:
            text = read_csv_file(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", path, exc)
            self.last_error = str(exc)
            return False
        return self.import_text(text, path)
