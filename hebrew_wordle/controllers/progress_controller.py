"""
Progress Controller

Handles the player's score and solved-word overview endpoints.
"""

from flask import Blueprint, request, jsonify
from ..config.game_settings import MAP_CATEGORY_NAME, MAP_DIFFICULTY_NAME
from ..utils.decorators import require_game_service
from ..utils.game_logger import game_logger

progress_bp = Blueprint('progress', __name__)


@progress_bp.route('/progress', methods=['GET'])
@require_game_service
def get_progress(game_service):
    """Running score plus solved words against pool totals."""
    try:
        game_logger.log_user_action(request, 'get_progress')

        ledger = game_service.ledger
        response_data = {
            'success': True,
            'score': ledger.score,
            'reveals': ledger.reveals_and_totals(game_service.provider),
            'category_names': MAP_CATEGORY_NAME,
            'difficulty_names': MAP_DIFFICULTY_NAME
        }

        game_logger.log_server_response(request, 'get_progress', True, {'score': ledger.score})
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_progress')
        return jsonify({'success': False, 'error': str(e)}), 500
