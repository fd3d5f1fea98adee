"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from dataclasses import asdict
from ..utils.decorators import require_game_service
from ..utils.game_logger import game_logger
from ..utils.helpers import get_int, get_request_data

game_bp = Blueprint('game', __name__)


def _not_found(action, game_id):
    error_response = {
        'success': False,
        'error': 'Game not found'
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 404


def _bad_request(action, error, game_id=None):
    error_response = {
        'success': False,
        'error': error
    }
    game_logger.log_server_response(request, action, False, error_response, game_id, validation_error=error)
    return jsonify(error_response), 400


def _server_error(action, e, game_id=None):
    game_logger.log_error(request, e, action, game_id)
    error_response = {
        'success': False,
        'error': str(e)
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 500


@game_bp.route('/new_game', methods=['POST'])
@require_game_service
def new_game(game_service):
    """Create a new game session."""
    try:
        data = get_request_data()
        game_type = data.get('game_type', 'RANDOM')
        category = data.get('category', 'GENERAL')
        difficulty = data.get('difficulty', 'easy')

        try:
            word_length = get_int(data, 'word_length', 5)
        except ValueError as e:
            return _bad_request('new_game', str(e))

        game_logger.log_user_action(
            request, 'new_game',
            extra_data={'game_type': game_type, 'category': category,
                        'difficulty': difficulty, 'word_length': word_length}
        )

        try:
            game_id = game_service.create_new_game(word_length, category, difficulty, game_type)
        except ValueError as e:
            return _bad_request('new_game', str(e))

        state = game_service.get_game_state(game_id)

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            word_length=state.word_length, max_attempts=state.max_attempts
        )

        return jsonify(response_data)

    except Exception as e:
        return _server_error('new_game', e)


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@require_game_service
def get_state(game_id, game_service):
    """Get current game state."""
    try:
        game_logger.log_user_action(request, 'get_state', game_id)

        state = game_service.get_game_state(game_id)
        if state is None:
            return _not_found('get_state', game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            current_attempt=state.current_attempt, game_over=state.game_over
        )

        return jsonify(response_data)

    except Exception as e:
        return _server_error('get_state', e, game_id)


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
@require_game_service
def make_guess(game_id, game_service):
    """Submit a guess for validation and evaluation."""
    try:
        data = get_request_data()
        if 'guess' not in data:
            return _bad_request('submit_guess', 'Guess is required', game_id)

        guess = data['guess']

        game_logger.log_user_action(request, 'submit_guess', game_id, guess=guess)

        is_valid, error = game_service.is_valid_guess(game_id, guess)
        if not is_valid:
            if error == 'Game not found':
                return _not_found('submit_guess', game_id)
            return _bad_request('submit_guess', error, game_id)

        state = game_service.make_guess(game_id, guess)
        if state is None:
            error_response = {
                'success': False,
                'error': 'Failed to process guess'
            }
            game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
            return jsonify(error_response), 500

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, game_id,
            guess=guess, attempt=state.current_attempt, game_over=state.game_over
        )

        if state.game_over:
            if state.won:
                game_logger.log_game_event(
                    game_id, 'game_won', request.remote_addr,
                    attempts_used=state.current_attempt, target_word=state.answer,
                    score=state.score
                )
            else:
                game_logger.log_game_event(
                    game_id, 'game_lost', request.remote_addr,
                    attempts_used=state.current_attempt, target_word=state.answer,
                    final_guess=guess
                )

        return jsonify(response_data)

    except Exception as e:
        return _server_error('submit_guess', e, game_id)


@game_bp.route('/game/<game_id>/hint', methods=['POST'])
@require_game_service
def request_hint(game_id, game_service):
    """Reveal more letters of the secret word for a score cost."""
    try:
        game_logger.log_user_action(request, 'request_hint', game_id)

        if game_service.get_game_state(game_id) is None:
            return _not_found('request_hint', game_id)

        state = game_service.request_hint(game_id)
        if state is None:
            return _bad_request('request_hint', 'Game is already over', game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(request, 'request_hint', True, response_data, game_id)
        game_logger.log_game_event(
            game_id, 'hint_given', request.remote_addr,
            cost=game_service.hint_cost, score=state.score
        )

        return jsonify(response_data)

    except Exception as e:
        return _server_error('request_hint', e, game_id)


@game_bp.route('/game/<game_id>/select', methods=['POST'])
@require_game_service
def select_cell(game_id, game_service):
    """Select a grid cell; a cell on a submitted row shows where its letter may go."""
    try:
        data = get_request_data()
        try:
            row = get_int(data, 'row')
            col = get_int(data, 'col')
        except ValueError as e:
            return _bad_request('select_cell', str(e), game_id)
        if row is None or col is None:
            return _bad_request('select_cell', 'Row and column are required', game_id)

        game_logger.log_user_action(request, 'select_cell', game_id, row=row, col=col)

        if game_service.get_game_state(game_id) is None:
            return _not_found('select_cell', game_id)

        state = game_service.select_cell(game_id, row, col)
        if state is None:
            return _bad_request('select_cell', 'Cell cannot be selected', game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(request, 'select_cell', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        return _server_error('select_cell', e, game_id)


@game_bp.route('/game/<game_id>/about', methods=['POST'])
@require_game_service
def show_about(game_id, game_service):
    """Show the descriptive text for the secret word."""
    try:
        game_logger.log_user_action(request, 'show_about', game_id)

        state = game_service.show_about(game_id)
        if state is None:
            return _not_found('show_about', game_id)

        response_data = {
            'success': True,
            'about': state.about_word,
            'state': asdict(state)
        }

        game_logger.log_server_response(request, 'show_about', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        return _server_error('show_about', e, game_id)


@game_bp.route('/game/<game_id>/export', methods=['GET'])
@require_game_service
def export_game(game_id, game_service):
    """Export the full session so a client can save and resume it."""
    try:
        game_logger.log_user_action(request, 'export_game', game_id)

        data = game_service.export_game(game_id)
        if data is None:
            return _not_found('export_game', game_id)

        response_data = {
            'success': True,
            'game': data
        }

        game_logger.log_server_response(request, 'export_game', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        return _server_error('export_game', e, game_id)


@game_bp.route('/game/restore', methods=['POST'])
@require_game_service
def restore_game(game_service):
    """Resume a session previously exported."""
    try:
        data = get_request_data()
        saved = data.get('game')
        if not isinstance(saved, dict):
            return _bad_request('restore_game', 'Saved game is required')

        game_logger.log_user_action(request, 'restore_game', saved.get('game_id'))

        try:
            game_id = game_service.restore_game(saved)
        except ValueError as e:
            return _bad_request('restore_game', str(e), saved.get('game_id'))

        state = game_service.get_game_state(game_id)
        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }

        game_logger.log_server_response(request, 'restore_game', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        return _server_error('restore_game', e)


@game_bp.route('/game/<game_id>/resume', methods=['POST'])
@require_game_service
def resume_game(game_id, game_service):
    """Resume a session saved in the progress store."""
    try:
        game_logger.log_user_action(request, 'resume_game', game_id)

        state = game_service.resume_game(game_id)
        if state is None:
            return _not_found('resume_game', game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(request, 'resume_game', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        return _server_error('resume_game', e, game_id)


@game_bp.route('/game/<game_id>', methods=['DELETE'])
@require_game_service
def delete_game(game_id, game_service):
    """Delete a game session."""
    try:
        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)

        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if success:
            game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)

        return jsonify(response_data)

    except Exception as e:
        return _server_error('delete_game', e, game_id)


@game_bp.route('/daily', methods=['GET'])
@require_game_service
def daily_status(game_service):
    """Whether today's daily challenge was already solved."""
    try:
        game_logger.log_user_action(request, 'daily_status')

        response_data = {
            'success': True,
            **game_service.daily_status()
        }

        game_logger.log_server_response(request, 'daily_status', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        return _server_error('daily_status', e)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        from ..services.game_service import get_game_service
        game_service = get_game_service()

        game_logger.log_user_action(request, 'health_check')

        log_stats = game_logger.get_log_stats()

        response_data = {
            'status': 'healthy',
            'active_games': len(game_service.games) if game_service else 0,
            'log_stats': log_stats,
            'storage': type(game_service.ledger.store).__name__ if game_service else None
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
