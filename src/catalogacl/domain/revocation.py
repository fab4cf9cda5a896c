"""Cascade expansion for privilege revocation."""

from catalogacl.domain.entities import Grant
from catalogacl.domain.value_objects.resource import contains


def removal_set(target: Grant, role_grants: list[Grant], cascade: bool) -> list[Grant]:
    """Grants removed by revoking ``target``.

    ``role_grants`` are all grants of the target's catalog role. Without
    cascade only the target itself is removed; with cascade every grant whose
    resource lies in the target's subtree goes as well, regardless of its
    privilege.
    """
    if not cascade:
        return [target]
    removed = [target]
    for grant in role_grants:
        if grant.id == target.id:
            continue
        if contains(target.resource, grant.resource):
            removed.append(grant)
    return removed
