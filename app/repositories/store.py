"""Kind-dispatching facade over the per-kind repositories."""
from typing import Dict, List

from .base import EntityRepository
from .game_repository import GameRepository
from .user_repository import UserRepository
from ..models import Entity


class EntityStore:
    """Loads and saves entities of any kind from a single data directory.

    ``store.load('game', 'Trivia Night')`` reads ``<data_dir>/game-trivia-night.json``.
    """

    def __init__(self, data_dir: str = 'data') -> None:
        self.data_dir = data_dir
        self._repos: Dict[str, EntityRepository] = {
            repo.kind: repo
            for repo in (GameRepository(data_dir), UserRepository(data_dir))
        }

    @property
    def kinds(self) -> List[str]:
        return list(self._repos)

    def repository(self, kind: str) -> EntityRepository:
        """Return the repository for *kind* or raise ``ValueError``."""
        try:
            return self._repos[kind]
        except KeyError:
            raise ValueError(f'unknown entity kind: {kind!r}') from None

    def load(self, kind: str, title_or_slug: str) -> Entity:
        return self.repository(kind).load(title_or_slug)

    def save(self, kind: str, entity: Entity) -> Entity:
        return self.repository(kind).save(entity)

    def scan_slugs(self, kind: str) -> List[str]:
        return self.repository(kind).scan_slugs()
