"""
Hebrew Wordle Game Server Application Package

This package contains the guess-evaluation and hint engine for a Hebrew
Wordle game, exposed through a Flask application.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask application instance with all extensions initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    # Hebrew stays readable in JSON responses
    app.json.ensure_ascii = False

    CORS(app)

    from .controllers.game_controller import game_bp
    from .controllers.progress_controller import progress_bp

    app.register_blueprint(game_bp, url_prefix='/api')
    app.register_blueprint(progress_bp, url_prefix='/api')

    return app
