from hebrew_wordle import create_app
from hebrew_wordle.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    get_config,
)


def test_get_config_by_name():
    assert get_config('testing') is TestingConfig
    assert get_config('production') is ProductionConfig
    assert get_config('development') is DevelopmentConfig


def test_unknown_environment_falls_back_to_default():
    assert get_config('staging') is DevelopmentConfig


def test_get_config_reads_app_env(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'production')
    assert get_config() is ProductionConfig


def test_testing_config_keeps_progress_in_memory():
    assert TestingConfig.MONGO_URI is None
    assert TestingConfig.PERSIST_IN_BACKGROUND is False


def test_create_app_registers_blueprints():
    app = create_app(TestingConfig)
    assert app.config['TESTING'] is True
    rules = {rule.rule for rule in app.url_map.iter_rules()}
    assert '/api/new_game' in rules
    assert '/api/progress' in rules
    assert '/api/game/<game_id>/hint' in rules
