"""Scoped changes of the process working directory."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


@contextmanager
def working_directory(path: Path | str) -> Iterator[Path]:
    """Run the block with ``path`` as the current directory, then restore it."""

    target = Path(path)
    original = Path.cwd()
    os.chdir(target)
    logger.debug("changed working directory to %s", target)
    try:
        yield target
    finally:
        os.chdir(original)
        logger.debug("restored working directory to %s", original)
