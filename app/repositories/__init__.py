"""Repository package — expose all concrete repositories from one import."""
from .base import EntityRepository
from .game_repository import GameRepository
from .user_repository import UserRepository
from .store import EntityStore

__all__ = [
    'EntityRepository',
    'GameRepository',
    'UserRepository',
    'EntityStore',
]
