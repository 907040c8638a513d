# files_manager/core/ids.py

ROOT_ID = 0
# largest value a catalog INTEGER column holds
MAX_ID = 2**63 - 1


def parse_id(value) -> int | None:
    """Return the catalog id for ``value``, or None if it isn't a well-formed one.

    Catalog ids are positive integers no larger than ``MAX_ID``; they arrive
    either as ints or as the digit strings found in URLs, JSON bodies and the
    identity store.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str) and value.isascii() and value.isdigit():
        value = int(value)
    if isinstance(value, int) and 0 < value <= MAX_ID:
        return value
    return None


def is_root(value) -> bool:
    if isinstance(value, bool):
        return False
    return value is None or value in ("", ROOT_ID, str(ROOT_ID))
