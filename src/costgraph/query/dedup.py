# src/costgraph/query/dedup.py

from typing import Any, Iterable, List


def remove_duplicates(entities: Iterable[Any], key: str = "uid") -> List[str]:
    """
    Return the distinct identifiers of ``entities`` in first-seen order.

    A node reached through several paths shows up once per path; the
    identifier (``uid`` by default) collapses those into one entry.
    Entities without an identifier are skipped.
    """
    seen = set()
    identifiers: List[str] = []
    for entity in entities:
        identifier = getattr(entity, key, None)
        if not identifier or identifier in seen:
            continue
        seen.add(identifier)
        identifiers.append(identifier)
    return identifiers
