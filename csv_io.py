import logging
import os
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from csv_codec import serialize_csv
from grid_model import Grid

logger = logging.getLogger(__name__)

NamePrompt = Callable[[str], Optional[str]]


class ExportCancelled(Exception):
    pass


class SinkUnavailableError(Exception):
    pass


@dataclass
class ExportResult:
    status: str  # saved | downloaded | cancelled | empty | failed
    target: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in {"saved", "downloaded"}


def read_csv_file(path: str) -> str:
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        return f.read()


def _write_text(path: str, text: str):
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


class SaveHandleSink:
    """
    Saves beside the file the grid was loaded from.

    The name prompt suggests the loaded file's name; answering with
    another name saves under that name in the same directory.
    """

    status = "saved"

    def __init__(self, path: Optional[str]):
        self.path = path

    def export(self, text: str, default_name: str, name_prompt: NamePrompt) -> str:
        if not self.path:
            raise SinkUnavailableError("No save handle for this grid")
        name = name_prompt(os.path.basename(self.path))
        if name is None or not name.strip():
            raise ExportCancelled("Save canceled")
        target = os.path.join(os.path.dirname(self.path), os.path.basename(name.strip()))
        _write_text(target, text)
        return target


class DownloadSink:
    """Writes a named copy into the download directory."""

    status = "downloaded"

    def __init__(self, download_dir: str):
        self.download_dir = download_dir

    def export(self, text: str, default_name: str, name_prompt: NamePrompt) -> str:
        name = name_prompt(default_name)
        if name is None or not name.strip():
            raise ExportCancelled("Download canceled")
        os.makedirs(self.download_dir, exist_ok=True)
        target = os.path.join(self.download_dir, os.path.basename(name.strip()))
        _write_text(target, text)
        return target


def export_csv(
    grid: Grid,
    sinks: Sequence,
    default_name: str,
    name_prompt: NamePrompt,
) -> ExportResult:
    """
    Serialize ``grid`` once and hand it to the first sink that succeeds.

    A cancellation ends the request. Any other sink failure falls through to
    the next sink in ``sinks``.
    """
    if grid.is_empty:
        return ExportResult("empty")

    text = serialize_csv(grid)
    last_error = None
    for sink in sinks:
        try:
            target = sink.export(text, default_name, name_prompt)
        except ExportCancelled as exc:
            logger.info("Export canceled: %s", exc)
            return ExportResult("cancelled")
        except (SinkUnavailableError, OSError) as exc:
            logger.warning("Export via %s failed: %s", type(sink).__name__, exc)
            last_error = str(exc)
            continue
        return ExportResult(sink.status, target=target)

    return ExportResult("failed", error=last_error or "No export sink available")
