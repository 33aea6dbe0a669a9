"""Reconciliation of embedded, possibly partial, child collections.

``getArtists`` lists artists without their albums, ``getAlbumList2`` lists
albums without their songs, yet both report how many children exist. An
entity parsed from such a response carries a declared count and an embedded
sequence that may be shorter. The embedded sequence is only trusted when its
length equals the declared count; otherwise the parent is fetched again and
its freshly embedded children are used instead.

This runs when a caller asks for the children, never at parse time.
"""

import logging
from typing import Callable, List, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def embedded_or_refetch(
    embedded: Sequence[T],
    declared_count: int,
    refetch: Callable[[], Sequence[T]],
    label: str = "entity",
) -> List[T]:
    """Return the embedded children if complete, else the refetched ones.

    Args:
        embedded: Children embedded in the parent as parsed
        declared_count: Number of children the server says the parent has
        refetch: Performs one full fetch of the parent and returns its children
        label: Parent description for logging

    Returns:
        List of children; exactly one call to ``refetch`` when incomplete, none otherwise
    """
    if len(embedded) == declared_count:
        return list(embedded)

    logger.debug(
        f"{label} embeds {len(embedded)} of {declared_count} children, fetching full entity"
    )
    return list(refetch())
