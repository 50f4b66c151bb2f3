import logging
import os
import sys

import config_paths
from app_state import AppState
from command_executor import CommandExecutor
from default_grid_initializer import DefaultGridInitializer

try:
    from _version import __version__
except Exception:
    __version__ = "0.0.0"

USAGE = "csvgrid - line-oriented CSV grid editor\n\nUsage:\n  csvgrid [path]\n  csvgrid -v\n  csvgrid -h\n"


def _setup_logging(level: str):
    config_paths.ensure_config_dirs()
    logging.basicConfig(
        filename=config_paths.LOG_PATH,
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _prompt(message: str):
    try:
        return input(message)
    except EOFError:
        return None


def run(executor: CommandExecutor, read_line=_prompt, write=print):
    while not executor.exit_requested:
        line = read_line("> ")
        if line is None:
            break
        for out in executor.execute(line):
            write(out)


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)

    if "-v" in args or "-V" in args:
        print(__version__)
        return 0

    if "-h" in args or len(args) > 1:
        print(USAGE)
        return 0 if "-h" in args else 1

    cfg = config_paths.load_config()
    _setup_logging(cfg["LOG_LEVEL"])

    state = AppState(undo_max_depth=cfg["UNDO_MAX_DEPTH"])
    executor = CommandExecutor(state, _prompt, cfg)

    if args:
        path = args[0]
        if os.path.exists(path):
            if not executor.editor.load_file(path):
                print(f"Load failed: {state.last_error}", file=sys.stderr)
                return 1
        else:
            state.load_grid(DefaultGridInitializer().create(), path)
            print(f"New file {path}")
    else:
        state.load_grid(DefaultGridInitializer().create())

    for line in executor.execute("show"):
        print(line)
    run(executor)
    return 0


if __name__ == "__main__":
    sys.exit(main())
