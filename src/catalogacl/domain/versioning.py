"""Entity version rules for optimistic concurrency."""

from catalogacl.domain.exceptions import Conflict

INITIAL_ENTITY_VERSION = 1


def version_conflict(entity: str, name: str, expected: int, current: int) -> Conflict:
    """Build the Conflict raised for a stale expected version."""
    return Conflict(
        f"{entity} {name} has entity version {current}, request carried {expected}"
    )


def check_entity_version(entity: str, name: str, current: int, expected: int | None) -> int:
    """Compare expected with current and return the next version.

    ``expected=None`` is the relaxed path: the current version is used as the
    base unconditionally.
    """
    if expected is not None and expected != current:
        raise version_conflict(entity, name, expected, current)
    return current + 1
