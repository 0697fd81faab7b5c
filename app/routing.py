"""Declarative path routing for the page handlers.

Every page is reached through one routing table.  Verbs that act on an
entity accept an optional slug segment::

    /view-game/trivia-night   ->  ('view-game', 'trivia-night')
    /create-user/             ->  ('create-user', '')

Slugs are limited to ``[a-zA-Z0-9-]+``.
"""
from typing import Callable, Dict, NamedTuple, Tuple

from werkzeug.exceptions import HTTPException
from werkzeug.routing import BaseConverter, Map, Rule

from .errors import RouteNotFound


class SlugConverter(BaseConverter):
    regex = r'[a-zA-Z0-9-]+'


class Route(NamedTuple):
    endpoint: str
    takes_slug: bool = True


ROUTES: Tuple[Route, ...] = (
    Route('report', takes_slug=False),
    # games
    Route('create-game'),
    Route('edit-game'),
    Route('view-game'),
    Route('save-game'),
    Route('add-score'),
    Route('save-score'),
    # users
    Route('create-user'),
    Route('edit-user'),
    Route('view-user'),
    Route('save-user'),
)


def _rules_for(route: Route):
    if not route.takes_slug:
        return [Rule('/', endpoint=route.endpoint)]
    return [
        Rule(f'/{route.endpoint}/', endpoint=route.endpoint,
             defaults={'slug': ''}, strict_slashes=False),
        Rule(f'/{route.endpoint}/<slug:slug>', endpoint=route.endpoint),
    ]


class PathRouter:
    """Matches request paths against :data:`ROUTES` and dispatches them.

    Args:
        handlers: Mapping of endpoint name to a callable taking the slug
                  (``''`` when the path has none).  Every endpoint in
                  *routes* must have a handler.
        routes:   Routing table; defaults to :data:`ROUTES`.
    """

    def __init__(self, handlers: Dict[str, Callable[[str], object]],
                 routes: Tuple[Route, ...] = ROUTES) -> None:
        missing = [r.endpoint for r in routes if r.endpoint not in handlers]
        if missing:
            raise ValueError(f"no handler bound for: {', '.join(missing)}")
        self._handlers = dict(handlers)
        self._map = Map(
            [rule for route in routes for rule in _rules_for(route)],
            converters={'slug': SlugConverter},
            redirect_defaults=False,
        )
        self._adapter = self._map.bind('localhost')

    def match(self, path: str) -> Tuple[str, str]:
        """Return ``(endpoint, slug)`` for *path*.

        Raises:
            RouteNotFound: No route accepts *path*.
        """
        try:
            endpoint, values = self._adapter.match(path)
        except HTTPException:
            raise RouteNotFound(path) from None
        return endpoint, values.get('slug', '')

    def dispatch(self, path: str):
        """Invoke the handler bound to *path* and return its result."""
        endpoint, slug = self.match(path)
        return self._handlers[endpoint](slug)
