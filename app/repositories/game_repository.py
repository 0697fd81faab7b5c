"""Repository for game entities (``game-<slug>.json``)."""
from .base import EntityRepository
from ..models import GAME


class GameRepository(EntityRepository):
    """Persists games, one JSON file each.

    Schema::

        {
            "Title":        "<slug>",
            "DisplayTitle": "<title>",
            "Metadata": {
                "description": "<text>",
                "scores":      "<p1>,<s1>,<p2>,<s2>\\n..."
            }
        }
    """

    kind = GAME

    def __init__(self, data_dir: str = 'data') -> None:
        super().__init__(data_dir)
