#!/usr/bin/env python3
"""
Tests for the demo.py showcase script.

Run with:
    python -m pytest tests/test_demo.py
"""
import importlib.util
import io
import json
import os
import sys
import unittest
from unittest.mock import patch

_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _ROOT)

import nephra

# ---------------------------------------------------------------------------
# Import demo.py from the repo root
# ---------------------------------------------------------------------------
spec = importlib.util.spec_from_file_location('demo', os.path.join(_ROOT, 'demo.py'))
demo = importlib.util.module_from_spec(spec)
spec.loader.exec_module(demo)


# ===========================================================================
# run_demo() - smoke test
# ===========================================================================

class TestRunDemo(unittest.TestCase):

    def _run(self, seed=7) -> str:
        buf = io.StringIO()
        with patch('sys.stdout', buf):
            demo.run_demo(quiet=True, seed=seed)
        return buf.getvalue()

    def test_run_demo_completes_without_exception(self):
        self._run()

    def test_output_has_completion_message(self):
        self.assertIn('Demo complete', self._run())

    def test_output_mentions_setup_steps(self):
        out = self._run()
        self.assertIn('config_template.json', out)
        self.assertIn('nephra_gui.py', out)

    def test_output_has_rank_table(self):
        out = self._run()
        for name in ('Trainee', 'Hydro-Hero', "Poseidon's Chosen", nephra.MAX_RANK):
            self.assertIn(name, out)

    def test_output_has_leaderboard(self):
        out = self._run()
        self.assertIn('Joan Clarke', out)
        self.assertIn('13,500', out)

    def test_output_has_session_toasts(self):
        out = self._run()
        self.assertIn('NEPHRA Connected', out)
        self.assertIn('Level Up!', out)

    def test_same_seed_same_session(self):
        self.assertEqual(self._session_lines(self._run(seed=1)),
                         self._session_lines(self._run(seed=1)))

    @staticmethod
    def _session_lines(out):
        return [line for line in out.splitlines() if ' mL  →  ' in line]

    def test_session_logs_every_sip(self):
        self.assertEqual(len(self._session_lines(self._run())), demo.DEMO_SESSION_SIPS)


# ===========================================================================
# config_template.json
# ===========================================================================

class TestConfigTemplate(unittest.TestCase):

    def setUp(self):
        with open(os.path.join(_ROOT, 'config_template.json')) as f:
            self._cfg = json.load(f)

    def test_has_every_default_key(self):
        self.assertEqual(set(self._cfg), set(nephra.DEFAULT_CONFIG))

    def test_api_key_is_placeholder(self):
        self.assertTrue(nephra.is_placeholder_value(self._cfg['gemini_api_key']))

    def test_value_types(self):
        for key, default in nephra.DEFAULT_CONFIG.items():
            self.assertIsInstance(self._cfg[key], type(default), key)


if __name__ == '__main__':
    unittest.main()
