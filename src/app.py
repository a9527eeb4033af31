"""
Flask JSON API for the bracket engine.
"""
import os
import logging
import yaml
from flask import Flask, request, jsonify
from brackets import SUPPORTED_FORMATS, BracketInvariantError, calculate_standings, generate_rounds

app = Flask(__name__)

SETTINGS_FILE = os.environ.get('BRACKETS_SETTINGS_FILE')


def get_default_settings():
    """Return default settings."""
    return {
        'default_format': 'single-elimination',
        'log_level': 'INFO',
        'free_for_all_group_size': 8,
    }


def load_settings(file_path=None):
    """Load settings from YAML, falling back to defaults for missing keys."""
    settings = get_default_settings()
    file_path = file_path or SETTINGS_FILE
    if file_path and os.path.exists(file_path):
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
            if isinstance(data, dict):
                settings.update(data)
            else:
                app.logger.warning(f'Ignoring {file_path}: expected a mapping of settings')
        except (OSError, yaml.YAMLError) as e:
            app.logger.warning(f'Failed to parse {file_path}: {e}')
    env_level = os.environ.get('BRACKETS_LOG_LEVEL')
    if env_level:
        settings['log_level'] = env_level
    return settings


settings = load_settings()
app.logger.setLevel(getattr(logging, str(settings['log_level']).upper(), logging.INFO))


def _error(message, status=400):
    return jsonify({'success': False, 'error': message}), status


@app.route('/api/formats', methods=['GET'])
def api_formats():
    return jsonify({
        'success': True,
        'formats': SUPPORTED_FORMATS,
        'default_format': settings['default_format'],
    })


@app.route('/api/rounds', methods=['POST'])
def api_rounds():
    """Generate the rounds for a roster.

    Body: {"players": [...], "num_participants": int (optional), "format": str (optional)}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error('Request body must be a JSON object.')

    players = data.get('players')
    if players is None:
        return _error('Players are required.')
    if not isinstance(players, list):
        return _error('Players must be a list.')

    num_participants = data.get('num_participants', len(players))
    if not isinstance(num_participants, int):
        return _error('num_participants must be an integer.')

    tournament_format = data.get('format') or settings['default_format']
    try:
        rounds = generate_rounds(num_participants, players, tournament_format,
                                 group_size=int(settings['free_for_all_group_size']))
    except BracketInvariantError as e:
        app.logger.error(f'Bracket generation failed for {len(players)} players ({tournament_format}): {e}')
        return _error('Bracket generation failed.', 500)

    app.logger.info(f'Generated {tournament_format} bracket with {len(rounds)} rounds for {len(players)} players')
    return jsonify({'success': True, 'format': tournament_format, 'rounds': rounds})


@app.route('/api/standings', methods=['POST'])
def api_standings():
    """Calculate standings from a rounds snapshot.

    Body: {"rounds": [...], "format": str (optional)}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error('Request body must be a JSON object.')

    rounds = data.get('rounds')
    if not isinstance(rounds, list):
        return _error('Rounds must be a list.')

    try:
        standings = calculate_standings(rounds, data.get('format') or settings['default_format'])
    except (KeyError, TypeError, AttributeError) as e:
        app.logger.warning(f'Malformed rounds submitted for standings: {e}')
        return _error('Rounds are malformed.')

    return jsonify({'success': True, 'standings': standings})


if __name__ == '__main__':
    app.run(debug=True, port=5000)
