#!/usr/bin/env python3
"""
Tests for configuration loading, service wiring and the CLI in scorekeep.py.

Run with:
    python -m pytest tests/test_scorekeep.py
"""
import io
import json
import logging
import os
import shutil
import sys
import tempfile
import unittest
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import scorekeep


class TmpDirMixin(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self._env = patch.dict(os.environ, {}, clear=False)
        self._env.start()
        for name in scorekeep.ENV_OVERRIDES:
            os.environ.pop(name, None)

    def tearDown(self):
        self._env.stop()
        shutil.rmtree(self.tmp, ignore_errors=True)

    def _path(self, name: str) -> str:
        return os.path.join(self.tmp, name)

    def _write_config(self, content) -> str:
        path = self._path('config.json')
        with open(path, 'w') as f:
            f.write(content if isinstance(content, str) else json.dumps(content))
        return path


# ===========================================================================
# Configuration
# ===========================================================================

class TestLoadConfig(TmpDirMixin):

    def test_defaults_when_file_missing(self):
        config = scorekeep.load_config(self._path('missing.json'))
        self.assertEqual(config, scorekeep.DEFAULT_CONFIG)

    def test_file_values_merge_over_defaults(self):
        path = self._write_config({'data_dir': '/srv/scores', 'port': 9000})
        config = scorekeep.load_config(path)
        self.assertEqual(config['data_dir'], '/srv/scores')
        self.assertEqual(config['port'], 9000)
        self.assertEqual(config['host'], '127.0.0.1')

    def test_env_overrides_file(self):
        path = self._write_config({'data_dir': 'from-file'})
        with patch.dict(os.environ, {'SCOREKEEP_DATA_DIR': 'from-env', 'SCOREKEEP_PORT': '8123'}):
            config = scorekeep.load_config(path)
        self.assertEqual(config['data_dir'], 'from-env')
        self.assertEqual(config['port'], 8123)

    def test_invalid_json(self):
        path = self._write_config('NOT JSON')
        with self.assertRaises(scorekeep.ConfigError):
            scorekeep.load_config(path)

    def test_non_object_json(self):
        path = self._write_config('[1, 2]')
        with self.assertRaises(scorekeep.ConfigError):
            scorekeep.load_config(path)

    def test_invalid_port(self):
        path = self._write_config({'port': 'eighty'})
        with self.assertRaises(scorekeep.ConfigError):
            scorekeep.load_config(path)


class TestSetupLogging(unittest.TestCase):

    def test_sets_level_and_single_handler(self):
        logger = scorekeep.setup_logging('DEBUG')
        scorekeep.setup_logging('INFO')
        self.assertEqual(logger.name, 'scorekeep')
        self.assertEqual(logger.level, logging.INFO)
        self.assertEqual(len(logger.handlers), 1)
        scorekeep.setup_logging('WARNING')

    def test_unknown_level_falls_back_to_warning(self):
        logger = scorekeep.setup_logging('LOUD')
        self.assertEqual(logger.level, logging.WARNING)


class TestScorekeeper(TmpDirMixin):

    def test_creates_data_dir_and_services(self):
        data_dir = self._path('nested/data')
        keeper = scorekeep.Scorekeeper({'data_dir': data_dir})
        self.assertTrue(os.path.isdir(data_dir))
        self.assertEqual(keeper.store.data_dir, data_dir)
        self.assertEqual(keeper.config['port'], 8080)

    def test_services_share_the_store(self):
        keeper = scorekeep.Scorekeeper({'data_dir': self.tmp})
        keeper.entity_service.save_from_form('game', 'Trivia Night')
        keeper.score_service.append_score('trivia-night', 'a', '1', 'b', '2')
        self.assertEqual([e.slug for e in keeper.listing_service.list('game')], ['trivia-night'])
        self.assertEqual(len(keeper.score_service.scores_for('trivia-night')), 1)


# ===========================================================================
# Command line interface
# ===========================================================================

class TestCLI(TmpDirMixin):

    def _run(self, *argv):
        out = io.StringIO()
        with patch('sys.stdout', out):
            code = scorekeep.main(['--config', self._path('missing.json'),
                                   '--data-dir', self.tmp, *argv])
        return code, out.getvalue()

    def test_add_game_and_list(self):
        code, _ = self._run('add-game', 'Trivia Night', '--description', 'Weekly')
        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(self._path('game-trivia-night.json')))
        code, out = self._run('list', 'games')
        self.assertEqual(code, 0)
        self.assertIn('trivia-night', out)
        self.assertIn('Trivia Night', out)

    def test_add_score_and_show(self):
        self._run('add-game', 'Trivia Night')
        self._run('add-user', 'Alice')
        code, _ = self._run('add-score', 'trivia-night', 'alice', '10', 'bob', '7')
        self.assertEqual(code, 0)
        code, out = self._run('show', 'game', 'trivia-night')
        self.assertEqual(code, 0)
        self.assertIn('alice', out)
        self.assertIn('10', out)

    def test_list_users_empty(self):
        code, out = self._run('list', 'users')
        self.assertEqual(code, 0)
        self.assertIn('No users yet.', out)

    def test_missing_entity_exits_1(self):
        code, out = self._run('show', 'user', 'nobody')
        self.assertEqual(code, 1)
        self.assertIn("user 'nobody' not found", out)

    def test_score_for_missing_game_exits_1(self):
        code, _ = self._run('add-score', 'nope', 'a', '1', 'b', '2')
        self.assertEqual(code, 1)

    def test_bad_config_exits_1(self):
        path = self._write_config('NOT JSON')
        with patch('sys.stdout', io.StringIO()):
            code = scorekeep.main(['--config', path, 'list', 'games'])
        self.assertEqual(code, 1)


if __name__ == '__main__':
    unittest.main()
