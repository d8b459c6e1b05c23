"""Save 3a art files."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from art3a.codec.writer import dumps

if TYPE_CHECKING:
    from art3a.core.art import Art

logger = logging.getLogger(__name__)


def save(art: "Art", path: str | Path) -> None:
    """
    Save an artwork to disk in the current format.

    The document is encoded before the file is touched, so an encoding
    error leaves an existing file as it was.
    """
    data = dumps(art)
    Path(path).write_bytes(data)
    logger.debug("Saved %d frames to %s", len(art.frames), path)
