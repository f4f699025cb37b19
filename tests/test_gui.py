#!/usr/bin/env python3
"""
Tests for the Flask web application (pages and JSON API).

Run with:
    python -m pytest tests/test_gui.py
"""
import io
import json
import os
import shutil
import sys
import tempfile
import unittest
from unittest.mock import MagicMock, patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import nephra_gui
from app.services import ProfileService
from genai_client import GenAIAPIError

VALID_PROFILE = {'name': 'Joan Clarke', 'age': 16, 'gender': 'female', 'weight': 55}


class GuiTestCase(unittest.TestCase):
    """Resets the shared session and toasts around every test and runs
    without an AI client unless a test installs one."""

    def setUp(self):
        self.client = nephra_gui.app.test_client()
        nephra_gui.session.disconnect()
        nephra_gui.session.motivation = None
        nephra_gui.toast_service.remove()
        patcher = patch.object(nephra_gui, 'profile_service', ProfileService(None))
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self):
        nephra_gui.toast_service.shutdown()

    def _use_ai(self, answer=None, error=None):
        ai = MagicMock()
        if error is not None:
            ai.generate_json.side_effect = error
        else:
            ai.generate_json.return_value = answer
        nephra_gui.profile_service = ProfileService(ai)
        return ai


class TestPages(GuiTestCase):

    def test_root_redirects_to_dashboard(self):
        resp = self.client.get('/')
        self.assertEqual(resp.status_code, 302)
        self.assertTrue(resp.headers['Location'].endswith('/dashboard'))

    def test_pages_render_with_nav(self):
        for path in ('/dashboard', '/timeline', '/leaderboard', '/profile', '/profile/2'):
            resp = self.client.get(path)
            self.assertEqual(resp.status_code, 200, path)
            html = resp.get_data(as_text=True)
            self.assertIn('href="/leaderboard"', html)

    def test_dashboard_shows_fallback_motivation(self):
        html = self.client.get('/dashboard').get_data(as_text=True)
        self.assertIn('Welcome Back!', html)

    def test_leaderboard_lists_users(self):
        html = self.client.get('/leaderboard').get_data(as_text=True)
        self.assertIn('Joan Clarke', html)
        self.assertIn('13,500', html)

    def test_unknown_user_profile_404(self):
        self.assertEqual(self.client.get('/profile/999').status_code, 404)


class TestDashboardApi(GuiTestCase):

    def test_status(self):
        data = self.client.get('/api/status').get_json()
        self.assertTrue(data['ready'])
        self.assertFalse(data['ai_enabled'])

    def test_connect_and_drink(self):
        data = self.client.post('/api/dashboard/connect').get_json()
        self.assertTrue(data['dashboard']['connected'])
        self.assertEqual(data['dashboard']['streak'], 5)

        resp = self.client.post('/api/dashboard/drink', json={'amount': 250})
        self.assertEqual(resp.status_code, 200)
        data = resp.get_json()
        self.assertEqual(data['level_up'], 2)
        self.assertEqual(data['dashboard']['current_ml'], 250)

    def test_drink_validation(self):
        self.client.post('/api/dashboard/connect')
        for body in ({}, {'amount': 0}, {'amount': 'lots'}, {'amount': True}):
            resp = self.client.post('/api/dashboard/drink', json=body)
            self.assertEqual(resp.status_code, 400, body)

    def test_drink_requires_connection(self):
        resp = self.client.post('/api/dashboard/drink', json={'amount': 100})
        self.assertEqual(resp.status_code, 409)

    def test_dashboard_includes_motivation(self):
        data = self.client.get('/api/dashboard').get_json()
        self.assertEqual(data['motivation']['title'], 'Welcome Back!')

    @patch('app.services.dashboard_service.threading.Timer')
    def test_sync(self, mock_timer):
        resp = self.client.post('/api/dashboard/sync')
        self.assertTrue(resp.get_json()['success'])
        toasts = self.client.get('/api/toasts').get_json()['toasts']
        self.assertEqual(toasts[0]['title'], 'Syncing Data...')

    def test_fresh_motivation_from_ai(self):
        ai = self._use_ai({'title': 'Halfway!', 'message': 'Keep going'})
        resp = self.client.post('/api/motivation', json={'progress_percentage': 50})
        self.assertEqual(resp.get_json()['title'], 'Halfway!')
        self.assertIn('50%', ai.generate_json.call_args[0][0])
        self.assertEqual(self.client.get('/api/motivation').get_json()['title'], 'Halfway!')

    def test_motivation_bad_numbers(self):
        resp = self.client.post('/api/motivation', json={'streak': 'many'})
        self.assertEqual(resp.status_code, 400)


class TestTimelineLeaderboardApi(GuiTestCase):

    def test_timeline_today(self):
        data = self.client.get('/api/timeline').get_json()
        self.assertEqual(len(data['events']), 3)
        self.assertIsNone(data['message'])

    def test_timeline_offset(self):
        data = self.client.get('/api/timeline?date=2024-06-03&offset=-1').get_json()
        self.assertEqual(data['date'], '2024-06-02')
        self.assertEqual(data['next'], '2024-06-03')

    def test_timeline_empty_day_message(self):
        data = self.client.get('/api/timeline?date=1999-01-01').get_json()
        self.assertEqual(data['events'], [])
        self.assertIn('No hydration events', data['message'])

    def test_timeline_bad_date(self):
        self.assertEqual(self.client.get('/api/timeline?date=junk').status_code, 400)
        self.assertEqual(self.client.get('/api/timeline?offset=x').status_code, 400)

    def test_leaderboard(self):
        data = self.client.get('/api/leaderboard?limit=3').get_json()
        self.assertEqual([u['rank'] for u in data['leaderboard']], [1, 2, 3])
        self.assertEqual(self.client.get('/api/leaderboard?limit=x').status_code, 400)

    def test_user_card(self):
        data = self.client.get('/api/users/2').get_json()
        self.assertEqual(data['user']['name'], 'Alan Turing')
        self.assertEqual(self.client.get('/api/users/999').status_code, 404)

    def test_rank_lookup(self):
        data = self.client.get('/api/rank/23').get_json()
        self.assertEqual(data['rank'], 'Hydro-Hero')
        self.assertEqual(data['level'], 23)
        self.assertEqual(self.client.get('/api/rank/-3').get_json()['progress'], 0.0)


class TestProfileApi(GuiTestCase):

    def test_recommendation_without_ai(self):
        resp = self.client.post('/api/profile/recommendation', json=VALID_PROFILE)
        self.assertEqual(resp.status_code, 503)

    def test_recommendation_invalid_input(self):
        resp = self.client.post('/api/profile/recommendation', json={'name': 'x', 'age': 'old'})
        self.assertEqual(resp.status_code, 400)
        fields = {d['field'] for d in resp.get_json()['details']}
        self.assertIn('age', fields)

    def test_recommendation_success(self):
        self._use_ai({'goal_ml': 2100, 'alert_interval_minutes': 50})
        resp = self.client.post('/api/profile/recommendation', json=VALID_PROFILE)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json()['goal_ml'], 2100)

    def test_recommendation_ai_failure(self):
        self._use_ai(error=GenAIAPIError('down'))
        resp = self.client.post('/api/profile/recommendation', json=VALID_PROFILE)
        self.assertEqual(resp.status_code, 502)

    def test_insights_default_user(self):
        self._use_ai({'insight': 'Morning star!'})
        resp = self.client.get('/api/profile/insights')
        self.assertEqual(resp.get_json(), {'insight': 'Morning star!'})

    def test_insights_posted_profile(self):
        ai = self._use_ai({'insight': 'ok'})
        resp = self.client.post('/api/profile/insights', json={
            'name': 'Ada', 'level': 22, 'hydrationRank': 'Hydro-Hero', 'historicalData': '[]'})
        self.assertEqual(resp.status_code, 200)
        self.assertIn('Ada', ai.generate_json.call_args[0][0])

    def test_insights_without_ai(self):
        self.assertEqual(self.client.get('/api/profile/insights').status_code, 503)


class TestToastAndDevApi(GuiTestCase):

    @patch('app.services.toast_service.threading.Timer')
    def test_dismiss(self, mock_timer):
        self.client.post('/api/dashboard/connect')
        toast_id = self.client.get('/api/toasts').get_json()['toasts'][0]['id']
        data = self.client.post('/api/toasts/dismiss', json={'id': toast_id}).get_json()
        self.assertFalse(data['toasts'][0]['open'])
        mock_timer.assert_called_once()

    @patch('app.services.toast_service.threading.Timer')
    def test_dismiss_unknown_ids_queue_nothing(self, mock_timer):
        self.client.post('/api/dashboard/connect')
        for n in range(50):
            resp = self.client.post('/api/toasts/dismiss', json={'id': f'missing-{n}'})
            self.assertEqual(resp.status_code, 200)
        self.assertEqual(nephra_gui.toast_service.pending_removals(), [])
        mock_timer.assert_not_called()
        self.assertTrue(self.client.get('/api/toasts').get_json()['toasts'][0]['open'])

    def test_telemetry(self):
        data = self.client.get('/api/dev/telemetry').get_json()
        self.assertIn('position', data)
        self.assertGreaterEqual(len(data['event_log']), 1)


class TestMainConfig(GuiTestCase):

    def setUp(self):
        super().setUp()
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = os.path.join(self.temp_dir, 'config.json')
        with open(self.config_path, 'w') as f:
            json.dump({'daily_goal_ml': 3000, 'bottle_capacity_ml': 1000}, f)
        for name in ('config', 'session', 'telemetry_simulator'):
            patcher = patch.object(nephra_gui, name, getattr(nephra_gui, name))
            patcher.start()
            self.addCleanup(patcher.stop)

    def tearDown(self):
        super().tearDown()
        shutil.rmtree(self.temp_dir)

    def test_config_file_sizes_the_session(self):
        old_simulator = nephra_gui.telemetry_simulator
        scheduler = MagicMock()
        with patch('sys.argv', ['nephra_gui.py', '--config', self.config_path]), \
                patch.dict(os.environ, {}, clear=True), \
                patch.object(nephra_gui, 'simulation_scheduler', scheduler), \
                patch.object(nephra_gui.app, 'run') as mock_run, \
                patch('sys.stdout', io.StringIO()):
            nephra_gui.main()

        mock_run.assert_called_once()
        snap = nephra_gui.session.snapshot()
        self.assertEqual(snap['goal_ml'], 3000)
        self.assertEqual(snap['bottle_capacity_ml'], 1000)
        self.assertIsNot(nephra_gui.telemetry_simulator, old_simulator)
        self.assertLessEqual(nephra_gui.telemetry_simulator.water_level(), 1000)
        self.assertIs(scheduler.session, nephra_gui.session)
        scheduler.start.assert_called_once()
        scheduler.stop.assert_called_once()


class TestApiDocs(GuiTestCase):

    def test_openapi_lists_routes(self):
        spec = self.client.get('/api/openapi.json').get_json()
        self.assertEqual(spec['openapi'], '3.0.3')
        for path in ('/api/dashboard', '/api/timeline', '/api/profile/insights'):
            self.assertIn(path, spec['paths'])

    def test_swagger_ui(self):
        resp = self.client.get('/api/docs')
        self.assertEqual(resp.status_code, 200)
        self.assertIn('swagger-ui', resp.get_data(as_text=True))


if __name__ == '__main__':
    unittest.main()
