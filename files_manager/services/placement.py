# files_manager/services/placement.py
import logging
import os
import uuid

from files_manager.core.errors import StorageFailure

logger = logging.getLogger(__name__)


def place(blob_store, root_dir: str, data: bytes) -> str:
    """Write ``data`` under ``root_dir`` with a fresh random name and return its location.

    The name is a uuid4, so two uploads never share a location even when the
    bytes are identical or the calls race.
    """
    location = os.path.abspath(os.path.join(root_dir, str(uuid.uuid4())))
    try:
        blob_store.mkdir(root_dir, recursive=True)
        blob_store.write_file(location, data)
    except OSError as e:
        logger.error("Could not write blob %s: %s", location, e)
        raise StorageFailure(str(e)) from e
    return location
