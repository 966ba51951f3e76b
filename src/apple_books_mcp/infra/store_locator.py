import logging
import os

from ..core.errors import DirectoryAccessError, DirectoryNotFoundError, StoreNotFoundError

logger = logging.getLogger(__name__)

STORE_EXTENSION = ".sqlite"


def locate_store(directory: str, extension: str = STORE_EXTENSION) -> str:
    """Return the path of the newest store file in ``directory``.

    Apple Books suffixes its stores with an increasing version number
    (``BKLibrary-1-091020131601.sqlite``), so the lexicographically last
    name is taken as the most recent one. File modification times are
    not consulted; if names stop sorting by recency the wrong file is
    returned.
    """
    try:
        entries = os.listdir(directory)
    except (FileNotFoundError, NotADirectoryError) as exc:
        raise DirectoryNotFoundError(directory) from exc
    except PermissionError as exc:
        raise DirectoryAccessError(directory) from exc

    candidates = sorted(name for name in entries if name.endswith(extension))
    if not candidates:
        raise StoreNotFoundError(directory, extension)

    if len(candidates) > 1:
        logger.debug("Multiple stores in %r, using %r", directory, candidates[-1])
    return os.path.join(directory, candidates[-1])
