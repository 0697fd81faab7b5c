#!/usr/bin/env python3
"""
Scorekeep Web - HTML front end for Scorekeep
Serves the game, user and score pages.  Every request path goes through the
:class:`~app.routing.PathRouter`; the handlers below turn its ``(verb, slug)``
result into store reads/writes and a rendered template.
"""

import logging
import argparse
import os
import sys
from typing import Dict

from dotenv import load_dotenv
from flask import Flask, abort, redirect, render_template, request
from jinja2 import TemplateError

import scorekeep
from app.errors import (
    DirectoryScanError, EntityDecodeError, EntityNotFound, EntitySaveError, RouteNotFound,
)
from app.models import GAME, USER
from app.routing import PathRouter

gui_logger = logging.getLogger('scorekeep.web')

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')


class PageHandlers:
    """One method per route verb.  Each takes the slug from the path."""

    def __init__(self, keeper: scorekeep.Scorekeeper) -> None:
        self.keeper = keeper

    def bindings(self) -> Dict:
        """Endpoint name -> handler, as expected by :class:`PathRouter`."""
        return {
            'report': self.report,
            'create-game': self.edit_game,
            'edit-game': self.edit_game,
            'view-game': self.view_game,
            'save-game': self.save_game,
            'add-score': self.add_score,
            'save-score': self.save_score,
            'create-user': self.edit_user,
            'edit-user': self.edit_user,
            'view-user': self.view_user,
            'save-user': self.save_user,
        }

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _render(template: str, **context):
        try:
            return render_template(f'{template}.html', **context)
        except TemplateError as e:
            gui_logger.exception('Rendering %s failed: %s', template, e)
            abort(500)

    def _listing(self, kind: str):
        try:
            return self.keeper.listing_service.list(kind)
        except DirectoryScanError as e:
            gui_logger.error('Listing %ss unavailable: %s', kind, e)
            abort(503)

    def _load_or_404(self, kind: str, slug: str):
        try:
            return self.keeper.entity_service.get(kind, slug)
        except EntityNotFound:
            abort(404)
        except EntityDecodeError as e:
            gui_logger.warning('%s', e)
            abort(404)

    def _edit(self, kind: str, slug: str):
        entity = self.keeper.entity_service.load_or_blank(kind, slug)
        return self._render(f'create-{kind}', entity=entity)

    def _save(self, kind: str):
        title = request.values.get('title', '')
        description = request.values.get('description', '')
        try:
            entity = self.keeper.entity_service.save_from_form(kind, title, description)
        except ValueError:
            abort(400)
        except EntitySaveError as e:
            gui_logger.error('Save failed: %s (%s)', e, e.__cause__)
            abort(500)
        return redirect(f'/view-{kind}/{entity.slug}')

    # ------------------------------------------------------------------
    # Report
    # ------------------------------------------------------------------

    def report(self, slug: str = ''):
        return self._render('report', games=self._listing(GAME), users=self._listing(USER))

    # ------------------------------------------------------------------
    # Games
    # ------------------------------------------------------------------

    def edit_game(self, slug: str):
        return self._edit(GAME, slug)

    def save_game(self, slug: str):
        return self._save(GAME)

    def view_game(self, slug: str):
        game = self._load_or_404(GAME, slug)
        return self._render('view-game', entity=game, scores=game.score_records)

    def add_score(self, slug: str):
        game = self._load_or_404(GAME, slug)
        return self._render('add-score', entity=game, users=self._listing(USER))

    def save_score(self, slug: str):
        try:
            game = self.keeper.score_service.append_score(
                slug,
                request.values.get('player-one', ''),
                request.values.get('score-one', ''),
                request.values.get('player-two', ''),
                request.values.get('score-two', ''),
            )
        except (EntityNotFound, EntityDecodeError):
            abort(404)
        except EntitySaveError as e:
            gui_logger.error('Save failed: %s (%s)', e, e.__cause__)
            abort(500)
        return redirect(f'/view-game/{game.slug}')

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def edit_user(self, slug: str):
        return self._edit(USER, slug)

    def save_user(self, slug: str):
        return self._save(USER)

    def view_user(self, slug: str):
        return self._render('view-user', entity=self._load_or_404(USER, slug))


def create_app(keeper: scorekeep.Scorekeeper) -> Flask:
    """Build the Flask app around an already constructed :class:`Scorekeeper`."""
    app = Flask(__name__, template_folder=TEMPLATES_DIR)
    handlers = PageHandlers(keeper)
    router = PathRouter(handlers.bindings())
    app.extensions['scorekeep'] = keeper

    def dispatch(path: str = ''):
        try:
            return router.dispatch('/' + path)
        except RouteNotFound:
            gui_logger.debug('No route for /%s', path)
            abort(404)

    app.add_url_rule('/', 'dispatch', dispatch, methods=['GET', 'POST'])
    app.add_url_rule('/<path:path>', 'dispatch', dispatch, methods=['GET', 'POST'])
    return app


def _add_file_logging(level: str) -> None:
    try:
        os.makedirs('logs', exist_ok=True)
        fh = logging.FileHandler('logs/scorekeep_web.log')
        fh.setFormatter(logging.Formatter('[%(asctime)s] %(levelname)s %(name)s: %(message)s'))
        fh.setLevel(getattr(logging, level.upper(), logging.INFO))
        logging.getLogger('scorekeep').addHandler(fh)
    except OSError:
        gui_logger.warning('Could not create log file handler')


def main():
    """Main entry point for the web GUI"""
    load_dotenv()

    parser = argparse.ArgumentParser(description='Scorekeep Web GUI')
    parser.add_argument('--config', default='config.json', help='Path to config file')
    parser.add_argument('--host', help='Interface to bind (overrides config)')
    parser.add_argument('--port', type=int, help='Port to listen on (overrides config)')
    args = parser.parse_args()

    try:
        config = scorekeep.load_config(args.config)
    except scorekeep.ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)
    if args.host:
        config['host'] = args.host
    if args.port:
        config['port'] = args.port

    keeper = scorekeep.Scorekeeper(config)
    _add_file_logging(str(config.get('log_level', 'WARNING')))
    app = create_app(keeper)

    print("\n" + "="*60)
    print("Scorekeep Web is starting...")
    print("="*60)
    print("\nOpen your browser and go to:")
    print(f"  http://{config['host']}:{config['port']}")
    print("\nPress Ctrl+C to stop the server")
    print("="*60 + "\n")

    try:
        app.run(host=config['host'], port=config['port'], debug=False, threaded=True)
    except KeyboardInterrupt:
        print("\nScorekeep Web stopped")


if __name__ == "__main__":
    main()
