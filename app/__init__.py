"""
Scorekeep application package.

Layered the same way for every entity kind:

  app/repositories/  — pure I/O: one JSON file per game or user.
  app/services/      — business logic: listings, score history, form saves.
  app/routing.py     — the routing table mapping paths to page handlers.

``Scorekeeper`` (in ``scorekeep.py``) is the integration point: it creates the
store and the services once and exposes them as public attributes
(e.g. ``keeper.score_service``).  The page handlers in ``scorekeep_web.py``
receive that instance rather than building their own.
"""
