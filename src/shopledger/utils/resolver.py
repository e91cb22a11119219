"""Utility for resolving customer, supplier and product references to IDs."""

from typing import Iterable, Protocol


class _Named(Protocol):
    id: str
    name: str


def resolve_reference(candidates: Iterable[_Named], reference: str, kind: str) -> str:
    """Resolve an ID or name to an entity ID.

    An exact ID match wins. Otherwise the reference is compared against names,
    case-insensitively, and must match exactly one entity.

    Args:
        candidates: Entities to search (anything with ``id`` and ``name``)
        reference: Entity ID or name
        kind: Entity label used in error messages (e.g. "Customer")

    Returns:
        Entity ID

    Raises:
        ValueError: If nothing matches or the name is ambiguous
    """
    candidates = list(candidates)
    for entity in candidates:
        if entity.id == reference:
            return entity.id

    wanted = reference.strip().lower()
    matches = [entity for entity in candidates if entity.name.strip().lower() == wanted]
    if not matches:
        raise ValueError(f"{kind} '{reference}' not found")
    if len(matches) > 1:
        raise ValueError(
            f"{kind} name '{reference}' is ambiguous ({len(matches)} matches); use the ID instead"
        )
    return matches[0].id
