"""Business logic for per-game score history."""
import logging
from typing import List

from ..models import GAME, Entity, ScoreRecord
from ..repositories.store import EntityStore
from ..slug import slugify
from .locks import SlugLocks


class ScoreService:
    """Appends score records to games, delegating persistence to
    :class:`~app.repositories.store.EntityStore`.

    The history is append-only: records are never edited or removed, and
    their order is the order in which they were appended.  Score values are
    stored as entered; nothing checks that they are numeric.
    """

    def __init__(self, store: EntityStore, locks: SlugLocks = None) -> None:
        self._store = store
        self._locks = locks or SlugLocks()
        self._log = logging.getLogger('scorekeep.service.score')

    def append_score(self, game_slug: str, player_one: str, score_one: str,
                     player_two: str, score_two: str) -> Entity:
        """Append one ``player_one,score_one,player_two,score_two`` record.

        The load, append and save run under the game's lock so concurrent
        appends to the same game cannot overwrite each other.

        Returns:
            The saved game entity.

        Raises:
            EntityNotFound:    The game does not exist.
            EntityDecodeError: The stored game is corrupt.
            EntitySaveError:   The game could not be written back.
        """
        slug = slugify(game_slug)
        with self._locks.hold(GAME, slug):
            game = self._store.load(GAME, slug)
            game.append_score(player_one, score_one, player_two, score_two)
            self._store.save(GAME, game)
        self._log.info("Recorded score for %s: %s %s / %s %s",
                       slug, player_one, score_one, player_two, score_two)
        return game

    def scores_for(self, game_slug: str) -> List[ScoreRecord]:
        """Return the parsed score history of *game_slug*."""
        return self._store.load(GAME, game_slug).score_records
