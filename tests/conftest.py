import os
import random
import tempfile
from datetime import date

import pytest

# Keep test runs from writing log files into the working tree
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='hebrew_wordle_logs_'))

from hebrew_wordle import create_app  # noqa: E402
from hebrew_wordle.config import TestingConfig  # noqa: E402
from hebrew_wordle.models import WordGuess  # noqa: E402
from hebrew_wordle.services import game_service as game_service_module  # noqa: E402
from hebrew_wordle.services.evaluator import evaluate_guess  # noqa: E402
from hebrew_wordle.services.game_service import GameService  # noqa: E402
from hebrew_wordle.services.progress_service import ProgressLedger  # noqa: E402
from hebrew_wordle.services.storage_service import MemoryProgressStore  # noqa: E402
from hebrew_wordle.services.word_service import WordPoolProvider  # noqa: E402

TODAY = date(2024, 3, 7)

# GENERAL/5/easy holds a single word so random games are predictable
TEST_POOLS = {
    'GENERAL': {
        5: {
            'easy': {'שולחן': 'רהיט שעליו אוכלים'},
            'medium': {'ספרים': 'יותר מספר אחד', 'ילדים': 'יותר מילד אחד'},
            'hard': {'שמיים': 'מעל לראשנו'},
        },
        3: {
            'easy': {'ספר': 'קוראים בו'},
        },
    },
    'ANIMALS': {
        5: {
            'easy': {'עכביש': 'טווה קורים'},
        },
    },
}


# Guess-only words, in no pool
TEST_DICTIONARIES = {
    3: ['בית'],
    5: ['גבינה', 'אבטיח'],
}


def make_guess(secret, word):
    """Build an evaluated WordGuess the way a submitted row looks."""
    return WordGuess(letters=list(word), correctness=evaluate_guess(secret, word))


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def provider():
    return WordPoolProvider(TEST_POOLS, TEST_DICTIONARIES)


@pytest.fixture
def store():
    return MemoryProgressStore()


@pytest.fixture
def ledger(store):
    return ProgressLedger(store, background=False)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(provider, ledger, clock):
    return GameService(
        provider,
        ledger,
        rng=random.Random(7),
        clock=clock,
        today=lambda: TODAY,
    )


@pytest.fixture
def app(service, monkeypatch):
    monkeypatch.setattr(game_service_module, '_game_service', service)
    app = create_app(TestingConfig)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()
