"""Repository base class used by the per-kind entity repositories."""
import json
import logging
import os
import tempfile
from typing import List

from ..errors import DirectoryScanError, EntityDecodeError, EntityNotFound, EntitySaveError
from ..models import Entity
from ..slug import slugify


class EntityRepository:
    """Provides JSON-backed persistence for one kind of entity.

    Every entity lives in its own file inside *data_dir*::

        <data_dir>/<kind>-<slug>.json

    There is no in-memory cache: each :meth:`load` is one file read and each
    :meth:`save` is one file write, so the directory is always the source of
    truth.  The write uses a write-then-rename strategy so the file is never
    left in a partially-written state; the temp file is created with mode
    ``0600`` and keeps it across the rename.
    """

    kind = ''

    def __init__(self, data_dir: str, kind: str = None) -> None:
        self.data_dir = data_dir
        if kind is not None:
            self.kind = kind
        if not self.kind:
            raise ValueError('EntityRepository requires a kind')
        self._prefix = f'{self.kind}-'
        self._log = logging.getLogger(f'scorekeep.repository.{type(self).__name__}')

    def path_for(self, title_or_slug: str) -> str:
        """Return the file path for *title_or_slug* (slugified first)."""
        return os.path.join(self.data_dir, f'{self._prefix}{slugify(title_or_slug)}.json')

    # ------------------------------------------------------------------
    # Read / write
    # ------------------------------------------------------------------

    def load(self, title_or_slug: str) -> Entity:
        """Load the entity stored under *title_or_slug*.

        Raises:
            EntityNotFound:    The file is missing or unreadable.
            EntityDecodeError: The file is not a valid entity document.
        """
        slug = slugify(title_or_slug)
        path = self.path_for(slug)
        try:
            with open(path, 'r', encoding='utf-8') as fh:
                raw = fh.read()
        except (OSError, UnicodeDecodeError) as exc:
            self._log.debug("Could not read %s: %s", path, exc)
            raise EntityNotFound(self.kind, slug) from exc

        try:
            obj = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise EntityDecodeError(self.kind, slug, str(exc)) from exc
        return Entity.from_json(obj, kind=self.kind, slug=slug)

    def save(self, entity: Entity) -> Entity:
        """Overwrite the file for *entity* and return it.

        The filename is derived from ``entity.slug`` (or from the display
        title when the entity has no slug yet), so a loaded entity is always
        written back to the file it came from.  A new title only moves an
        entity when it is rebuilt with :meth:`Entity.create`; the old file is
        left in place.

        Raises:
            ValueError:      The entity has no slug characters.
            EntitySaveError: The file could not be written.
        """
        slug = slugify(entity.slug or entity.display_title)
        if not slug:
            raise ValueError(f'cannot save {self.kind} without a title')
        entity.slug = slug

        path = self.path_for(slug)
        try:
            self._atomic_write(path, entity.to_json())
        except OSError as exc:
            self._log.error("Could not save %s: %s", path, exc)
            raise EntitySaveError(self.kind, slug) from exc
        self._log.debug("Saved %s", path)
        return entity

    @staticmethod
    def _atomic_write(path: str, data) -> None:
        """Atomically write *data* as JSON to *path*."""
        dir_name = os.path.dirname(os.path.abspath(path))
        fd, tmp_path = tempfile.mkstemp(dir=dir_name, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                json.dump(data, fh)
            os.replace(tmp_path, path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

    # ------------------------------------------------------------------
    # Directory scan
    # ------------------------------------------------------------------

    def scan_slugs(self) -> List[str]:
        """Return the slugs of every stored entity of this kind.

        Filenames are matched on the ``<kind>-`` prefix and ``.json`` suffix
        and returned in filename order.

        Raises:
            DirectoryScanError: The data directory could not be listed.
        """
        try:
            names = sorted(os.listdir(self.data_dir))
        except OSError as exc:
            self._log.error("Could not scan %s: %s", self.data_dir, exc)
            raise DirectoryScanError(self.data_dir) from exc

        return [
            name[len(self._prefix):-len('.json')]
            for name in names
            if name.startswith(self._prefix) and name.endswith('.json')
            and len(name) > len(self._prefix) + len('.json')
        ]
