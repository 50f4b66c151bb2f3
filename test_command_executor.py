import pytest

from app_state import AppState
from command_executor import CommandExecutor
from grid_model import Grid


def _executor(answers=None, config=None):
    answers = list(answers or [])
    state = AppState(Grid.from_rows([["a", "b"], ["1", "2"]]))

    def prompt(_message):
        return answers.pop(0) if answers else None

    return CommandExecutor(state, prompt, config), state


def test_set_updates_cell_and_reports():
    exec_obj, state = _executor()
    out = exec_obj.execute("set 1 0 'hello world'")
    assert state.grid.cell(1, 0) == "hello world"
    assert out == ["Updated cell (1, 0)"]


def test_set_accepts_empty_value():
    exec_obj, state = _executor()
    exec_obj.execute('set 1 1 ""')
    assert state.grid.cell(1, 1) == ""


@pytest.mark.parametrize(
    "line, usage",
    [
        ("dr", "Usage: dr R"),
        ("dr x", "Usage: dr R"),
        ("icr 1 2", "Usage: icr C"),
        ("set 1 x y", "Usage: set R C VALUE"),
        ("rc", "Usage: rc C [NAME]"),
        ("u now", "Usage: u"),
    ],
)
def test_bad_arguments_print_usage(line, usage):
    exec_obj, state = _executor()
    before = state.grid
    assert exec_obj.execute(line) == [usage]
    assert state.grid is before


def test_unknown_command_and_parse_error():
    exec_obj, _ = _executor()
    assert exec_obj.execute("frobnicate") == ["Unknown command 'frobnicate' (try 'help')"]
    assert exec_obj.execute("set 1 0 'open")[0].startswith("Parse error")
    assert exec_obj.execute("   ") == []


def test_structural_commands_and_undo_redo():
    exec_obj, state = _executor()
    exec_obj.execute("icr 0")
    exec_obj.execute("irb 1")
    assert state.grid.rows == [["a", "", "b"], ["1", "", "2"], ["", "", ""]]

    exec_obj.execute("u")
    exec_obj.execute("u")
    assert state.grid.rows == [["a", "b"], ["1", "2"]]
    exec_obj.execute("r")
    exec_obj.execute("r")
    assert state.grid.rows == [["a", "", "b"], ["1", "", "2"], ["", "", ""]]


def test_rename_prompts_when_name_missing():
    exec_obj, state = _executor(answers=["renamed"])
    exec_obj.execute("rc 0")
    assert state.grid.header == ["renamed", "b"]


def test_rename_prompt_cancelled():
    exec_obj, state = _executor(answers=[])
    assert exec_obj.execute("rc 0") == ["Rename canceled"]
    assert state.grid.header == ["a", "b"]


def test_show_prints_frame_and_shape():
    exec_obj, _ = _executor()
    out = exec_obj.execute("show")
    assert "a" in out[0] and "b" in out[0]
    assert out[-1] == "[1 data rows x 2 cols]"


def test_write_without_path_downloads(tmp_path):
    exec_obj, _ = _executor(answers=[""], config={"DOWNLOAD_DIR": str(tmp_path)})
    out = exec_obj.execute("w")
    target = tmp_path / "data.csv"
    assert target.read_text(encoding="utf-8") == "a,b\n1,2\n"
    assert out == [f"Downloaded {target}"]


def test_load_command(tmp_path):
    path = tmp_path / "x.csv"
    path.write_text("k,v\n1,2\n", encoding="utf-8")
    exec_obj, state = _executor()
    exec_obj.execute("dr 1")
    exec_obj.execute(f"e {path}")
    assert state.grid.header == ["k", "v"]
    assert exec_obj.execute("u") == ["Nothing to undo"]


def test_help_and_quit():
    exec_obj, _ = _executor()
    assert any(line.startswith("set R C VALUE") for line in exec_obj.execute("help"))
    exec_obj.execute("q")
    assert exec_obj.exit_requested


def test_write_prompts_with_loaded_name(tmp_path):
    path = tmp_path / "orig.csv"
    path.write_text("a,b\n1,2\n", encoding="utf-8")
    prompts = []
    exec_obj, state = _executor()
    exec_obj.prompt = lambda message: prompts.append(message) or ""
    state.file_path = str(path)
    exec_obj.execute("set 1 0 9")

    out = exec_obj.execute("w")
    assert prompts == ["Save as [orig.csv]: "]
    assert out == [f"Saved {path}"]
    assert path.read_text(encoding="utf-8") == "a,b\n9,2\n"


def test_write_cancelled_leaves_file_untouched(tmp_path):
    path = tmp_path / "orig.csv"
    path.write_text("a,b\n1,2\n", encoding="utf-8")
    exec_obj, state = _executor(answers=[], config={"DOWNLOAD_DIR": str(tmp_path / "dl")})
    state.file_path = str(path)
    exec_obj.execute("set 1 0 9")

    out = exec_obj.execute("w")
    assert out == ["Save canceled"]
    assert path.read_text(encoding="utf-8") == "a,b\n1,2\n"
    assert not (tmp_path / "dl").exists()
    assert state.grid.cell(1, 0) == "9"
