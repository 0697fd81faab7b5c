#!/usr/bin/env python3
"""
Tests for the declarative path router.

Run with:
    python -m pytest tests/test_routing.py
"""
import os
import sys
import unittest
from unittest.mock import MagicMock

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.errors import RouteNotFound
from app.routing import ROUTES, PathRouter, Route

VERBS = [
    'create-game', 'edit-game', 'view-game', 'save-game', 'add-score', 'save-score',
    'create-user', 'edit-user', 'view-user', 'save-user',
]


def _echo_handlers():
    return {r.endpoint: (lambda slug, e=r.endpoint: (e, slug)) for r in ROUTES}


class TestRouteTable(unittest.TestCase):

    def test_all_verbs_present(self):
        endpoints = [r.endpoint for r in ROUTES]
        for verb in VERBS:
            self.assertIn(verb, endpoints)
        self.assertIn('report', endpoints)

    def test_missing_handler_rejected(self):
        handlers = _echo_handlers()
        del handlers['save-score']
        with self.assertRaises(ValueError):
            PathRouter(handlers)


class TestPathRouterMatch(unittest.TestCase):

    def setUp(self):
        self.router = PathRouter(_echo_handlers())

    def test_every_verb_with_slug(self):
        for verb in VERBS:
            self.assertEqual(self.router.match(f'/{verb}/trivia-night'), (verb, 'trivia-night'))

    def test_every_verb_without_slug(self):
        for verb in VERBS:
            self.assertEqual(self.router.match(f'/{verb}/'), (verb, ''))

    def test_report(self):
        self.assertEqual(self.router.match('/'), ('report', ''))

    def test_slug_charset(self):
        self.assertEqual(self.router.match('/view-user/Alice-99'), ('view-user', 'Alice-99'))

    def test_rejected_paths(self):
        for path in ('/view-game/foo_bar', '/view-game/caf%C3%A9', '/view-game/a/b',
                     '/delete-game/x', '/view-games/x', '/report', '/favicon.ico'):
            with self.assertRaises(RouteNotFound, msg=path):
                self.router.match(path)

    def test_route_not_found_carries_path(self):
        with self.assertRaises(RouteNotFound) as ctx:
            self.router.match('/nope/')
        self.assertEqual(ctx.exception.path, '/nope/')


class TestPathRouterDispatch(unittest.TestCase):

    def test_dispatch_passes_slug(self):
        handler = MagicMock(return_value='page')
        router = PathRouter({'view-game': handler}, routes=(Route('view-game'),))
        self.assertEqual(router.dispatch('/view-game/x'), 'page')
        handler.assert_called_once_with('x')

    def test_dispatch_empty_slug(self):
        handler = MagicMock(return_value='form')
        router = PathRouter({'create-game': handler}, routes=(Route('create-game'),))
        router.dispatch('/create-game/')
        handler.assert_called_once_with('')

    def test_dispatch_unmatched_does_not_call(self):
        handler = MagicMock()
        router = PathRouter({'view-game': handler}, routes=(Route('view-game'),))
        with self.assertRaises(RouteNotFound):
            router.dispatch('/view-user/x')
        handler.assert_not_called()


if __name__ == '__main__':
    unittest.main()
