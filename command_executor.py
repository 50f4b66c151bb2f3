import shlex
from typing import Callable, Optional

from grid_editor import GridEditor


HELP_LINES = [
    "show                 print the grid",
    "set R C VALUE        set cell (R, C) to VALUE",
    "dr R                 delete row R (row 0 is the header)",
    "ira R / irb R        insert empty row above / below R",
    "dc C                 delete column C",
    "rc C [NAME]          rename column C (prompts when NAME is omitted)",
    "icl C / icr C        insert empty column left / right of C",
    "u / r                undo / redo",
    "e PATH               load a CSV file (clears history)",
    "w                    save beside the loaded file (name prompt defaults to it),",
    "                     falling back to download",
    "dl                   download a copy into the download directory",
    "q                    quit",
]


class CommandExecutor:
    """Parses command lines and dispatches them to a GridEditor."""

    def __init__(self, app_state, prompt_cb: Callable[[str], Optional[str]], config=None):
        cfg = config or {}
        self.state = app_state
        self.prompt = prompt_cb
        self.exit_requested = False
        self._messages: list[str] = []
        self.editor = GridEditor(
            app_state,
            self._set_status,
            download_dir=cfg.get("DOWNLOAD_DIR", "."),
            default_file_name=cfg.get("DEFAULT_FILE_NAME", "data.csv"),
        )
        self._handlers = {
            "show": self._show,
            "set": self._set,
            "dr": self._index_op(self.editor.delete_row, "dr R"),
            "ira": self._index_op(self.editor.insert_row_above, "ira R"),
            "irb": self._index_op(self.editor.insert_row_below, "irb R"),
            "dc": self._index_op(self.editor.delete_column, "dc C"),
            "icl": self._index_op(self.editor.insert_column_left, "icl C"),
            "icr": self._index_op(self.editor.insert_column_right, "icr C"),
            "rc": self._rename,
            "u": self._no_args(self.editor.undo, "u"),
            "r": self._no_args(self.editor.redo, "r"),
            "e": self._load,
            "w": self._save,
            "dl": self._download,
            "help": self._help,
            "q": self._quit,
        }

    def _set_status(self, msg: str, _duration: float = 0):
        self._messages.append(msg)

    def _drain(self, out: Optional[list] = None) -> list[str]:
        lines = list(out or []) + self._messages
        self._messages = []
        return lines

    # ---------- entry point ----------
    def execute(self, line: str) -> list[str]:
        try:
            tokens = shlex.split(line)
        except ValueError as exc:
            return [f"Parse error: {exc}"]
        if not tokens:
            return []
        name, args = tokens[0], tokens[1:]
        handler = self._handlers.get(name)
        if handler is None:
            return [f"Unknown command '{name}' (try 'help')"]
        return self._drain(handler(args))

    # ---------- helpers ----------
    @staticmethod
    def _parse_ints(args, count: int):
        if len(args) != count:
            raise ValueError(f"expected {count} argument(s)")
        return [int(a) for a in args]

    def _index_op(self, fn, usage: str):
        def _run(args):
            try:
                (idx,) = self._parse_ints(args, 1)
            except ValueError:
                return [f"Usage: {usage}"]
            fn(idx)
            return []

        return _run

    def _no_args(self, fn, usage: str):
        def _run(args):
            if args:
                return [f"Usage: {usage}"]
            fn()
            return []

        return _run

    def _name_prompt(self, default_name: str) -> Optional[str]:
        answer = self.prompt(f"Save as [{default_name}]: ")
        if answer is None:
            return None
        return answer.strip() or default_name

    # ---------- commands ----------
    def _show(self, args):
        grid = self.state.grid
        if grid.is_empty:
            return ["(empty grid)"]
        frame = grid.to_frame()
        frame.index = range(1, len(frame) + 1)
        return frame.to_string().splitlines() + [
            f"[{grid.row_count - 1} data rows x {grid.column_count} cols]"
        ]

    def _set(self, args):
        if len(args) != 3:
            return ["Usage: set R C VALUE"]
        try:
            row, col = int(args[0]), int(args[1])
        except ValueError:
            return ["Usage: set R C VALUE"]
        self.editor.update_cell(row, col, args[2])
        return []

    def _rename(self, args):
        if len(args) not in (1, 2):
            return ["Usage: rc C [NAME]"]
        try:
            col = int(args[0])
        except ValueError:
            return ["Usage: rc C [NAME]"]
        new_name = args[1] if len(args) == 2 else self.prompt("New column name: ")
        self.editor.rename_column(col, new_name)
        return []

    def _load(self, args):
        if len(args) != 1:
            return ["Usage: e PATH"]
        self.editor.load_file(args[0])
        return []

    def _save(self, args):
        if args:
            return ["Usage: w"]
        self.editor.save(self._name_prompt)
        return []

    def _download(self, args):
        if args:
            return ["Usage: dl"]
        self.editor.download(self._name_prompt)
        return []

    def _help(self, args):
        return list(HELP_LINES)

    def _quit(self, args):
        self.exit_requested = True
        return []
