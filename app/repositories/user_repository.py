"""Repository for user entities (``user-<slug>.json``)."""
from .base import EntityRepository
from ..models import USER


class UserRepository(EntityRepository):
    """Persists users, one JSON file each.

    Schema::

        {"Title": "<slug>", "DisplayTitle": "<name>", "Metadata": {"description": "<text>"}}
    """

    kind = USER

    def __init__(self, data_dir: str = 'data') -> None:
        super().__init__(data_dir)
