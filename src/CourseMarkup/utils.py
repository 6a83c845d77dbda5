from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Console logging for the CLI; the package loggers go through the root handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("CourseMarkup").setLevel(level)


def resolve_output_path(input_path: Path, output: Optional[str], suffix: str) -> Path:
    """Pick where a converted file goes; never the input file itself.

    preparse reads and writes HTML-ish text, so ``notes.html`` would otherwise
    be overwritten by its own conversion. Such a target becomes
    ``notes.out.html`` next to it.
    """
    if output:
        out_path = Path(output)
        if out_path.is_dir():
            out_path = out_path / f"{input_path.stem}{suffix}"
    else:
        out_path = input_path.with_suffix(suffix)

    if out_path.resolve() == input_path.resolve():
        out_path = out_path.with_name(f"{input_path.stem}.out{suffix}")
        logger.warning("Output would overwrite the input; writing to %s instead", out_path)
    return out_path


def read_text(path: Path) -> str:
    # CMS exports sometimes start with a byte-order mark.
    return path.read_text(encoding="utf-8-sig")


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
