#!/usr/bin/env python3
"""
Scorekeep - Game and player score tracker
Keeps games, users and per-game score history as JSON files in a data
directory.  This module holds the configuration, logging and service wiring
shared by the web GUI (``scorekeep_web.py``) and the command line interface.
"""

import argparse
import json
import logging
import os
import sys
from typing import Dict, List, Optional

from colorama import init, Fore, Style
from dotenv import load_dotenv

from app.errors import ScorekeepError
from app.models import GAME, USER
from app.repositories import EntityStore
from app.services import EntityService, ListingService, ScoreService, SlugLocks

# Initialize colorama for cross-platform colored terminal output
init(autoreset=True)

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def setup_logging(level: str = 'WARNING') -> logging.Logger:
    """Configure the root Scorekeep logger.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to WARNING so normal use is quiet.

    Returns:
        Configured logger instance.
    """
    numeric = getattr(logging, str(level).upper(), logging.WARNING)
    logger = logging.getLogger('scorekeep')
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(numeric)
    return logger


logger = setup_logging()

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DEFAULT_CONFIG: Dict = {
    'data_dir': 'data',
    'log_level': 'WARNING',
    'host': '127.0.0.1',
    'port': 8080,
}

# Environment variable -> config key
ENV_OVERRIDES = {
    'SCOREKEEP_DATA_DIR': 'data_dir',
    'SCOREKEEP_LOG_LEVEL': 'log_level',
    'SCOREKEEP_HOST': 'host',
    'SCOREKEEP_PORT': 'port',
}


class ConfigError(Exception):
    """Raised when the configuration file or an override is invalid."""


def load_config(config_path: str = 'config.json') -> Dict:
    """Load configuration from a JSON file with environment variable support.

    The file is optional; missing keys fall back to :data:`DEFAULT_CONFIG`.
    Environment variables take precedence over file values:

    - SCOREKEEP_DATA_DIR overrides data_dir
    - SCOREKEEP_LOG_LEVEL overrides log_level
    - SCOREKEEP_HOST overrides host
    - SCOREKEEP_PORT overrides port

    Raises:
        ConfigError: If the file is not a JSON object or the port is not an
            integer.
    """
    config = dict(DEFAULT_CONFIG)

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                file_config = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigError(f"Could not read config file '{config_path}': {e}") from e
        if not isinstance(file_config, dict):
            raise ConfigError(f"Config file '{config_path}' must contain a JSON object")
        config.update(file_config)
    elif config_path:
        logger.debug("Config file %s not found, using defaults", config_path)

    for env_name, key in ENV_OVERRIDES.items():
        if os.getenv(env_name):
            config[key] = os.getenv(env_name)

    try:
        config['port'] = int(config['port'])
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid port: {config['port']!r}") from None

    return config


# ---------------------------------------------------------------------------
# Service wiring
# ---------------------------------------------------------------------------

class Scorekeeper:
    """Integration point for the data directory and the services on top of it.

    Created once at startup; the web app and the CLI receive the instance
    instead of building their own repositories.

    Attributes:
        config:          The loaded configuration dict.
        store:           :class:`~app.repositories.EntityStore` over ``data_dir``.
        entity_service:  Create/edit/view logic for games and users.
        listing_service: Directory-scan listings.
        score_service:   Append-only score history.
    """

    def __init__(self, config: Optional[Dict] = None) -> None:
        self.config = dict(DEFAULT_CONFIG)
        self.config.update(config or {})
        self._log = logging.getLogger('scorekeep.keeper')

        setup_logging(self.config.get('log_level', 'WARNING'))

        self.data_dir = self.config['data_dir']
        os.makedirs(self.data_dir, exist_ok=True)

        self.store = EntityStore(self.data_dir)
        self.locks = SlugLocks()
        self.entity_service = EntityService(self.store, self.locks)
        self.listing_service = ListingService(self.store)
        self.score_service = ScoreService(self.store, self.locks)
        self._log.info("Using data directory %s", os.path.abspath(self.data_dir))


# ---------------------------------------------------------------------------
# Command line interface
# ---------------------------------------------------------------------------

def _cmd_list(keeper: Scorekeeper, args) -> int:
    kind = GAME if args.kind == 'games' else USER
    entries = keeper.listing_service.list(kind)
    if not entries:
        print(f"{Fore.YELLOW}No {args.kind} yet.")
        return 0
    for entry in entries:
        print(f"{Fore.CYAN}{entry.slug:<30}{Style.RESET_ALL} {entry.display_title}")
    return 0


def _cmd_show(keeper: Scorekeeper, args) -> int:
    entity = keeper.entity_service.get(args.kind, args.slug)
    print(f"{Fore.GREEN}{Style.BRIGHT}{entity.display_title}{Style.RESET_ALL} ({entity.slug})")
    if entity.description:
        print(entity.description)
    if args.kind == GAME:
        records = entity.score_records
        if not records:
            print(f"{Fore.YELLOW}No scores recorded.")
        for record in records:
            print(f"  {record.player_one} {Fore.CYAN}{record.score_one}{Style.RESET_ALL}"
                  f"  vs  {record.player_two} {Fore.CYAN}{record.score_two}")
    return 0


def _cmd_add(kind: str):
    def run(keeper: Scorekeeper, args) -> int:
        entity = keeper.entity_service.save_from_form(kind, args.title, args.description)
        print(f"{Fore.GREEN}Saved {kind} '{entity.display_title}' as {entity.slug}")
        return 0
    return run


def _cmd_add_score(keeper: Scorekeeper, args) -> int:
    game = keeper.score_service.append_score(
        args.slug, args.player_one, args.score_one, args.player_two, args.score_two)
    print(f"{Fore.GREEN}Recorded score #{len(game.score_records)} for {game.display_title}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Scorekeep - track games, players and scores')
    parser.add_argument('--config', default='config.json', help='Path to config file')
    parser.add_argument('--data-dir', help='Override the data directory')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('list', help='List games or users')
    p.add_argument('kind', choices=['games', 'users'])
    p.set_defaults(func=_cmd_list)

    p = sub.add_parser('show', help='Show a game or user')
    p.add_argument('kind', choices=[GAME, USER])
    p.add_argument('slug')
    p.set_defaults(func=_cmd_show)

    for kind in (GAME, USER):
        p = sub.add_parser(f'add-{kind}', help=f'Create or overwrite a {kind}')
        p.add_argument('title')
        p.add_argument('--description', default='')
        p.set_defaults(func=_cmd_add(kind))

    p = sub.add_parser('add-score', help='Append a score to a game')
    p.add_argument('slug')
    p.add_argument('player_one')
    p.add_argument('score_one')
    p.add_argument('player_two')
    p.add_argument('score_two')
    p.set_defaults(func=_cmd_add_score)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI"""
    load_dotenv()

    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"{Fore.RED}Error: {e}")
        return 1
    if args.data_dir:
        config['data_dir'] = args.data_dir

    keeper = Scorekeeper(config)
    try:
        return args.func(keeper, args)
    except (ScorekeepError, ValueError) as e:
        print(f"{Fore.RED}Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
