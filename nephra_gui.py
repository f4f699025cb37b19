#!/usr/bin/env python3
"""
NEPHRA GUI - Web interface for the NEPHRA smart water bottle demo.
Serves the dashboard, timeline, leaderboard and profile pages plus the JSON
API they are built on.
"""

import logging
import argparse
import datetime
import os
from typing import Dict, Optional

from dotenv import load_dotenv
from flask import Flask, abort, jsonify, redirect, render_template, request, url_for
from pydantic import ValidationError

import nephra
from app import mock_data
from app.schemas import Profile, ProfileInsightsInput
from app.services import (
    HydrationSession, LeaderboardService, ProfileService, SimulationScheduler,
    TelemetrySimulator, TimelineService, ToastService,
)

load_dotenv()

# Initialize logging early so service module logs are captured
log_level = os.getenv('NEPHRA_LOG_LEVEL', 'INFO')
nephra_logger = nephra.setup_logging(log_level)
gui_logger = logging.getLogger('nephra.gui')
gui_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
try:
    os.makedirs('logs', exist_ok=True)
    fh = logging.FileHandler('logs/nephra_gui.log')
    fh.setFormatter(logging.Formatter('[%(asctime)s] %(levelname)s %(name)s: %(message)s'))
    fh.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    gui_logger.addHandler(fh)
except OSError:
    gui_logger.warning('Could not create log file handler')


def load_base_config(config_path: str = 'config.json') -> Dict:
    """Load config for the web app, falling back to defaults when the file
    is unreadable (the GUI must still start in demo mode)."""
    try:
        return nephra.load_config(config_path)
    except nephra.ConfigError as e:
        gui_logger.error('%s; using defaults', e)
        return dict(nephra.DEFAULT_CONFIG)


app = Flask(__name__)

config = load_base_config(os.getenv('NEPHRA_CONFIG', 'config.json'))

toast_service = ToastService()
leaderboard_service = LeaderboardService()
timeline_service = TimelineService()
telemetry_simulator = TelemetrySimulator(capacity_ml=config['bottle_capacity_ml'])
profile_service = ProfileService(nephra.build_genai_client(config))
session = HydrationSession(toast_service,
                           daily_goal_ml=config['daily_goal_ml'],
                           bottle_capacity_ml=config['bottle_capacity_ml'])
simulation_scheduler = SimulationScheduler(session, interval=config['tick_seconds'])


def _json_body() -> Dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _validation_error(e: ValidationError):
    return jsonify({
        'error': 'Invalid input',
        'details': [
            {'field': '.'.join(str(p) for p in err['loc']), 'message': err['msg']}
            for err in e.errors()
        ],
    }), 400


def _ai_unavailable():
    return jsonify({'error': 'AI coach is not configured (set GEMINI_API_KEY)'}), 503


def _ensure_motivation() -> Dict:
    """Fetch the dashboard's motivational message once per session."""
    if session.motivation is None:
        snap = session.snapshot()
        session.motivation = profile_service.get_initial_motivation(
            streak=snap['streak'] or 5,
            progress_percentage=round(snap['progress']),
        )
    return session.motivation


def _render_page(page: str, active: str, **context):
    return render_template('index.html', page=page, active=active,
                           nav_items=mock_data.NAV_ITEMS, **context)


# ===========================================================================================
# Pages
# ===========================================================================================

@app.route('/')
def index():
    """Redirect to the dashboard"""
    return redirect(url_for('dashboard_page'))


@app.route('/dashboard')
def dashboard_page():
    """Dashboard page"""
    return _render_page('dashboard', '/dashboard',
                        user=profile_service.current_user(),
                        motivation=_ensure_motivation())


@app.route('/timeline')
def timeline_page():
    """Timeline page"""
    return _render_page('timeline', '/timeline')


@app.route('/leaderboard')
def leaderboard_page():
    """Leaderboard page"""
    return _render_page('leaderboard', '/leaderboard',
                        rankings=leaderboard_service.get_rankings())


@app.route('/profile')
def profile_page():
    """Own profile page"""
    return _render_page('profile', '/profile',
                        card=leaderboard_service.get_user_card(mock_data.CURRENT_USER_ID),
                        profile=profile_service.default_profile())


@app.route('/profile/<int:user_id>')
def user_profile_page(user_id: int):
    """Public profile of a leaderboard user"""
    card = leaderboard_service.get_user_card(user_id)
    if card is None:
        abort(404)
    return _render_page('user_profile', '/leaderboard', card=card)


# ===========================================================================================
# Status
# ===========================================================================================

@app.route('/api/status')
def api_status():
    """Get application status"""
    return jsonify({
        'ready': True,
        'connected': session.connected,
        'ai_enabled': profile_service.ai_enabled,
        'model': config.get('model') if profile_service.ai_enabled else None,
        'simulation_running': simulation_scheduler.running,
    })


# ===========================================================================================
# Dashboard Endpoints
# ===========================================================================================

@app.route('/api/dashboard')
def api_dashboard():
    """Current dashboard state"""
    _ensure_motivation()
    return jsonify(session.snapshot())


@app.route('/api/dashboard/connect', methods=['POST'])
def api_dashboard_connect():
    """Connect to the (simulated) bottle and start the demo day"""
    snap = session.connect()
    gui_logger.info('Bottle connected via web UI')
    return jsonify({'success': True, 'dashboard': snap})


@app.route('/api/dashboard/disconnect', methods=['POST'])
def api_dashboard_disconnect():
    session.disconnect()
    return jsonify({'success': True, 'dashboard': session.snapshot()})


@app.route('/api/dashboard/sync', methods=['POST'])
def api_dashboard_sync():
    """Manual sync with the bottle"""
    session.sync()
    return jsonify({'success': True, 'message': 'Sync started'})


@app.route('/api/dashboard/drink', methods=['POST'])
def api_dashboard_drink():
    """Log a drink manually"""
    data = _json_body()
    amount = data.get('amount')
    if not isinstance(amount, int) or isinstance(amount, bool) or amount <= 0:
        return jsonify({'error': 'amount must be a positive integer (mL)'}), 400
    if not session.connected:
        return jsonify({'error': 'Bottle is not connected'}), 409
    new_level = session.record_drink(amount)
    return jsonify({'success': True, 'level_up': new_level, 'dashboard': session.snapshot()})


@app.route('/api/motivation', methods=['GET', 'POST'])
def api_motivation():
    """Get the dashboard's motivational message (POST asks for a fresh one)"""
    if request.method == 'GET':
        return jsonify(_ensure_motivation())

    data = _json_body()
    snap = session.snapshot()
    try:
        streak = int(data.get('streak', snap['streak']))
        progress = float(data.get('progress_percentage', round(snap['progress'])))
    except (TypeError, ValueError):
        return jsonify({'error': 'streak and progress_percentage must be numbers'}), 400
    session.motivation = profile_service.get_initial_motivation(
        name=data.get('name'), streak=streak, progress_percentage=progress)
    return jsonify(session.motivation)


# ===========================================================================================
# Timeline / Leaderboard Endpoints
# ===========================================================================================

@app.route('/api/timeline')
def api_timeline():
    """Events for one day (``date`` defaults to today, ``offset`` shifts it)"""
    day_str = request.args.get('date')
    try:
        day = datetime.date.fromisoformat(day_str) if day_str else datetime.date.today()
        offset = int(request.args.get('offset', 0))
    except ValueError:
        return jsonify({'error': 'date must be YYYY-MM-DD and offset an integer'}), 400

    day = timeline_service.shift_day(day, offset)
    events = timeline_service.events_for(day)
    return jsonify({
        'date': day.isoformat(),
        'heading': timeline_service.format_heading(day),
        'previous': timeline_service.shift_day(day, -1).isoformat(),
        'next': timeline_service.shift_day(day, 1).isoformat(),
        'events': events,
        'message': None if events else 'No hydration events recorded for this day.',
    })


@app.route('/api/leaderboard')
def api_leaderboard():
    """Ranked users by drops"""
    limit: Optional[int] = None
    if 'limit' in request.args:
        try:
            limit = int(request.args['limit'])
        except ValueError:
            return jsonify({'error': 'limit must be an integer'}), 400
    return jsonify({'leaderboard': leaderboard_service.get_rankings(limit=limit)})


@app.route('/api/users/<int:user_id>')
def api_user_card(user_id: int):
    """Public profile card for a leaderboard user"""
    card = leaderboard_service.get_user_card(user_id)
    if card is None:
        return jsonify({'error': 'User not found'}), 404
    return jsonify(card)


@app.route('/api/rank/<int(signed=True):level>')
def api_rank(level: int):
    """Hydration rank lookup for a level"""
    return jsonify(dict(nephra.get_hydration_rank(level), level=level))


# ===========================================================================================
# Profile Endpoints (AI coach)
# ===========================================================================================

@app.route('/api/profile/recommendation', methods=['POST'])
def api_profile_recommendation():
    """AI hydration goal for the submitted profile"""
    try:
        profile = Profile.model_validate(_json_body())
    except ValidationError as e:
        return _validation_error(e)
    if not profile_service.ai_enabled:
        return _ai_unavailable()

    result = profile_service.get_hydration_recommendation(profile.model_dump())
    if result is None:
        return jsonify({'error': 'Could not get a recommendation from the AI coach'}), 502
    return jsonify(result)


@app.route('/api/profile/insights', methods=['GET', 'POST'])
def api_profile_insights():
    """AI insight for the demo user (GET) or a submitted profile (POST)"""
    if request.method == 'GET':
        payload = profile_service.default_insights_request()
    else:
        try:
            payload = ProfileInsightsInput.model_validate(_json_body()).model_dump()
        except ValidationError as e:
            return _validation_error(e)
    if not profile_service.ai_enabled:
        return _ai_unavailable()

    result = profile_service.get_profile_insights(payload)
    if result is None:
        return jsonify({'error': 'Could not get an insight from the AI coach'}), 502
    return jsonify(result)


# ===========================================================================================
# Toasts / Developer Options
# ===========================================================================================

@app.route('/api/toasts')
def api_toasts():
    """Current toast state"""
    return jsonify(toast_service.state)


@app.route('/api/toasts/dismiss', methods=['POST'])
def api_toasts_dismiss():
    """Dismiss one toast (``id``) or all of them"""
    toast_id = _json_body().get('id')
    toast_service.dismiss(str(toast_id) if toast_id is not None else None)
    return jsonify(toast_service.state)


@app.route('/api/dev/telemetry')
def api_dev_telemetry():
    """Simulated raw bottle data for the developer options panel"""
    telemetry_simulator.log_event()
    return jsonify(telemetry_simulator.snapshot())


# ---------------------------------------------------------------------------
# API Documentation - OpenAPI 3.0
# ---------------------------------------------------------------------------

@app.route('/api/openapi.json')
def api_openapi_spec():
    """Serve the OpenAPI 3.0 specification as JSON."""
    from openapi_spec import build_spec
    server_url = request.url_root.rstrip('/')
    return jsonify(build_spec(server_url=server_url))


@app.route('/api/docs')
def api_swagger_ui():
    """Serve an interactive Swagger UI for the NEPHRA REST API."""
    openapi_url = '/api/openapi.json'
    html = f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>NEPHRA API Documentation</title>
  <link rel="stylesheet"
        href="https://unpkg.com/swagger-ui-dist@5/swagger-ui.css">
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
  <script>
    SwaggerUIBundle({{
      url: "{openapi_url}",
      dom_id: "#swagger-ui",
      presets: [SwaggerUIBundle.presets.apis, SwaggerUIBundle.SwaggerUIStandalonePreset],
      layout: "BaseLayout",
      deepLinking: true,
    }});
  </script>
</body>
</html>"""
    return html, 200, {'Content-Type': 'text/html; charset=utf-8'}


def main():
    """Main entry point for GUI"""
    global config, profile_service, session, telemetry_simulator
    parser = argparse.ArgumentParser(description='NEPHRA Web GUI')
    parser.add_argument('--config', default='config.json', help='Path to config file')
    parser.add_argument('--host', help='Interface to bind (default from config)')
    parser.add_argument('--port', type=int, help='Port to listen on (default from config)')
    args = parser.parse_args()

    config = load_base_config(args.config)
    profile_service = ProfileService(nephra.build_genai_client(config))
    session = HydrationSession(toast_service,
                               daily_goal_ml=config['daily_goal_ml'],
                               bottle_capacity_ml=config['bottle_capacity_ml'])
    telemetry_simulator = TelemetrySimulator(capacity_ml=config['bottle_capacity_ml'])
    simulation_scheduler.session = session
    simulation_scheduler.interval = config['tick_seconds']
    host = args.host or config['host']
    port = args.port or config['port']

    # Start background drinking simulation
    simulation_scheduler.start()

    print("\n" + "="*60)
    print("💧 NEPHRA Web GUI is starting...")
    print("="*60)
    print("\nOpen your browser and go to:")
    print(f"  http://{host}:{port}")
    if not profile_service.ai_enabled:
        print("\nAI coach disabled: set GEMINI_API_KEY to enable it")
    print("\nPress Ctrl+C to stop the server")
    print("="*60 + "\n")

    try:
        app.run(host=host, port=port, debug=False)
    except KeyboardInterrupt:
        print("\n\n" + "="*60)
        print("🛑 NEPHRA Web GUI stopped")
        print("="*60 + "\n")
    finally:
        simulation_scheduler.stop()
        toast_service.shutdown()


if __name__ == "__main__":
    main()
