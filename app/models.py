"""Entity model shared by the repositories, services and web layer.

Games and users are both stored as an :class:`Entity`; the *kind* is not part
of the record itself, it only selects the filename prefix.  On disk each
entity keeps the original field names::

    {
        "Title":        "<slug>",
        "DisplayTitle": "<human readable title>",
        "Metadata":     {"description": "...", "scores": "..."}
    }
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple

from .errors import EntityDecodeError
from .slug import slugify

GAME = 'game'
USER = 'user'
KINDS = (GAME, USER)

DESCRIPTION_KEY = 'description'
SCORES_KEY = 'scores'


class ScoreRecord(NamedTuple):
    """One line of a game's score history."""
    player_one: str
    score_one: str
    player_two: str
    score_two: str


def _clean_field(value) -> str:
    # a field must never introduce a second record
    return str(value or '').replace('\r', ' ').replace('\n', ' ')


def encode_score_record(player_one, score_one, player_two, score_two) -> str:
    """Return the newline-terminated ``p1,s1,p2,s2`` record."""
    fields = (player_one, score_one, player_two, score_two)
    return ','.join(_clean_field(f) for f in fields) + '\n'


def parse_scores(text: str) -> List[ScoreRecord]:
    """Split a stored ``scores`` value into :class:`ScoreRecord` tuples.

    Blank lines are ignored and records with fewer than four fields are
    padded with empty strings.
    """
    records = []
    for line in (text or '').split('\n'):
        if not line:
            continue
        parts = line.split(',')
        parts += [''] * (4 - len(parts))
        records.append(ScoreRecord(*parts[:4]))
    return records


@dataclass
class Entity:
    slug: str = ''
    display_title: str = ''
    metadata: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def create(cls, display_title: str, description: str = '') -> 'Entity':
        """Build a new entity, deriving its slug from *display_title*."""
        return cls(
            slug=slugify(display_title),
            display_title=display_title,
            metadata={DESCRIPTION_KEY: description},
        )

    # ------------------------------------------------------------------
    # Known metadata keys
    # ------------------------------------------------------------------

    @property
    def description(self) -> str:
        return self.metadata.get(DESCRIPTION_KEY, '')

    @description.setter
    def description(self, value: str) -> None:
        self.metadata[DESCRIPTION_KEY] = value

    @property
    def scores(self) -> str:
        """Raw score history: newline-terminated ``p1,s1,p2,s2`` records."""
        return self.metadata.get(SCORES_KEY, '')

    @property
    def score_records(self) -> List[ScoreRecord]:
        return parse_scores(self.scores)

    def append_score(self, player_one, score_one, player_two, score_two) -> None:
        """Append one record to the score history (in memory only)."""
        self.metadata[SCORES_KEY] = self.scores + encode_score_record(
            player_one, score_one, player_two, score_two)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def to_json(self) -> Dict[str, Any]:
        return {
            'Title': self.slug,
            'DisplayTitle': self.display_title,
            'Metadata': dict(self.metadata),
        }

    @classmethod
    def from_json(cls, obj: Any, kind: str = '', slug: str = '') -> 'Entity':
        """Build an entity from a decoded JSON document.

        Args:
            obj:  The decoded document.
            kind: Entity kind, only used in error messages.
            slug: Slug the document was stored under.  It wins over the
                  stored ``Title``, which is only used when *slug* is empty.

        Raises:
            EntityDecodeError: If *obj* does not have the entity shape.
        """
        if not isinstance(obj, dict):
            raise EntityDecodeError(kind, slug, 'document is not an object')

        title = obj.get('Title')
        title = '' if title is None else title
        display_title = obj.get('DisplayTitle')
        display_title = '' if display_title is None else display_title
        if not isinstance(title, str) or not isinstance(display_title, str):
            raise EntityDecodeError(kind, slug, 'title fields must be strings')

        metadata = obj.get('Metadata')
        metadata = {} if metadata is None else metadata
        if not isinstance(metadata, dict):
            raise EntityDecodeError(kind, slug, 'Metadata must be an object')
        for key, value in metadata.items():
            if not isinstance(value, str):
                raise EntityDecodeError(
                    kind, slug, f'Metadata value for {key!r} must be a string')

        return cls(slug=slug or title, display_title=display_title,
                   metadata=dict(metadata))
