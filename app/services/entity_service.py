"""Business logic shared by the game and user pages."""
import logging

from ..errors import EntityDecodeError, EntityNotFound
from ..models import Entity
from ..repositories.store import EntityStore
from .locks import SlugLocks


class EntityService:
    """Loads entities for display and saves them from submitted forms."""

    def __init__(self, store: EntityStore, locks: SlugLocks = None) -> None:
        self._store = store
        self._locks = locks or SlugLocks()
        self._log = logging.getLogger('scorekeep.service.entity')

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, kind: str, slug: str) -> Entity:
        """Return the stored entity; load errors propagate."""
        return self._store.load(kind, slug)

    def load_or_blank(self, kind: str, slug: str) -> Entity:
        """Return the stored entity, or a blank one if it cannot be loaded.

        Used to pre-fill the create/edit form.  A corrupt file also yields a
        blank form, but is logged so it can be told apart from a missing one.
        """
        if not slug:
            return Entity()
        try:
            return self._store.load(kind, slug)
        except EntityNotFound:
            return Entity()
        except EntityDecodeError as exc:
            self._log.warning("Showing blank %s form: %s", kind, exc)
            return Entity()

    def save_from_form(self, kind: str, title: str, description: str = '') -> Entity:
        """Create or overwrite the entity titled *title*.

        The whole record is replaced; metadata other than *description*
        (a game's score history included) is not carried over.

        Raises:
            ValueError:      *title* has no slug characters.
            EntitySaveError: The file could not be written.
        """
        entity = Entity.create(title or '', description or '')
        if not entity.slug:
            raise ValueError(f'{kind} title must contain letters or digits')
        with self._locks.hold(kind, entity.slug):
            self._store.save(kind, entity)
        self._log.info("Saved %s %r", kind, entity.slug)
        return entity
