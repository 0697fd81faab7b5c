"""Business logic for the game and user listings."""
import logging
from typing import List, NamedTuple

from ..errors import EntityDecodeError, EntityNotFound
from ..repositories.store import EntityStore


class ListingEntry(NamedTuple):
    slug: str
    display_title: str


class ListingService:
    """Builds ``(slug, display_title)`` listings by scanning the data directory.

    Each listed entity is loaded to read its current display title, so a
    listing of *n* entities costs one directory scan plus *n* file reads.
    Entities that fail to load are skipped and logged; a failure to scan the
    directory itself propagates as
    :class:`~app.errors.DirectoryScanError`.
    """

    def __init__(self, store: EntityStore) -> None:
        self._store = store
        self._log = logging.getLogger('scorekeep.service.listing')

    def list(self, kind: str) -> List[ListingEntry]:
        """Return every stored entity of *kind* in filename order."""
        entries = []
        for slug in self._store.scan_slugs(kind):
            try:
                entity = self._store.load(kind, slug)
            except (EntityNotFound, EntityDecodeError) as exc:
                self._log.warning("Skipping %s %r in listing: %s", kind, slug, exc)
                continue
            entries.append(ListingEntry(slug, entity.display_title))
        return entries
