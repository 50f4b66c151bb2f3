import pytest

from app_state import AppState
from grid_model import Grid


def _state():
    state = AppState(Grid.from_rows([["a", "b"], ["1", "2"]]), "orig.csv")
    state.grid = state.history.record_and_apply(state.grid, lambda g: g.update_cell(1, 0, "x"))
    return state


def test_import_text_replaces_grid_and_resets_history():
    state = _state()
    assert state.history.undo_depth == 1

    assert state.import_text("c,d\n5,6\n", "new.csv")
    assert state.grid.header == ["c", "d"]
    assert state.file_name == "new.csv"
    assert state.undo_stack == []
    assert state.redo_stack == []
    assert state.history.undo(state.grid) is None


def test_malformed_import_leaves_state_untouched():
    state = _state()
    before = state.grid

    assert not state.import_text('a,"b\n1,2\n', "bad.csv")
    assert state.grid is before
    assert state.file_path == "orig.csv"
    assert state.history.undo_depth == 1
    assert "Malformed" in state.last_error


def test_import_drops_fields_beyond_header():
    state = _state()
    assert state.import_text("a,b\n1,2,3\n", "wide.csv")
    assert state.grid.rows == [["a", "b"], ["1", "2"]]
    assert state.history.undo_depth == 0


def test_import_file_reads_from_disk(tmp_path):
    path = tmp_path / "people.csv"
    path.write_text("name,age\nann,31\n", encoding="utf-8")
    state = AppState()
    assert state.import_file(str(path))
    assert state.grid.rows == [["name", "age"], ["ann", "31"]]
    assert state.file_name == "people.csv"


def test_import_missing_file_reports_error(tmp_path):
    state = _state()
    assert not state.import_file(str(tmp_path / "nope.csv"))
    assert state.last_error
    assert state.history.undo_depth == 1


def test_grid_setter_rejects_other_types():
    state = AppState()
    with pytest.raises(TypeError):
        state.grid = [["a"]]
