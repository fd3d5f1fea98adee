"""
Hebrew Wordle Game Server - Main Entry Point

This is the main entry point for the game server.
It initializes all services and starts the Flask application.
"""

from hebrew_wordle import create_app
from hebrew_wordle.config import get_config, validate_dictionary_integrity, validate_word_pool_integrity
from hebrew_wordle.services.game_service import initialize_game_service
from hebrew_wordle.services.progress_service import ProgressLedger
from hebrew_wordle.services.storage_service import initialize_progress_store
from hebrew_wordle.services.word_service import WordPoolProvider
from hebrew_wordle.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    settings = get_config()
    ledger = None
    try:
        print("Initializing services...")

        validate_word_pool_integrity()
        validate_dictionary_integrity()
        print("✓ Word pools and dictionaries validated")

        store = initialize_progress_store(settings.MONGO_URI, settings.MONGO_DB_NAME)
        print(f"✓ Progress store: {type(store).__name__}")

        ledger = ProgressLedger(store, background=settings.PERSIST_IN_BACKGROUND)
        game_service = initialize_game_service(
            WordPoolProvider(),
            ledger,
            max_attempts=settings.MAX_ATTEMPTS,
            hint_reveal_cap=settings.HINT_REVEAL_CAP,
            hint_cost=settings.HINT_COST,
            about_cost=settings.ABOUT_COST,
        )
        if game_service:
            print("✓ Game service initialized successfully")

        print("Creating Flask application...")
        app = create_app(settings)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Hebrew Wordle Server Starting")

        print(f"\nStarting Hebrew Wordle Server on {settings.HOST}:{settings.PORT}")
        print(f"Debug mode: {settings.DEBUG}")
        print("=" * 50)

        app.run(host=settings.HOST, port=settings.PORT, debug=settings.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Hebrew Wordle Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise
    finally:
        # Persistence boundary: queued progress writes land before exit
        if ledger is not None:
            ledger.flush()
            ledger.store.close()


if __name__ == '__main__':
    main()
