import logging
from datetime import date, datetime

import pytest
from pymongo.errors import ConnectionFailure

from hebrew_wordle.models import RevealedWord
from hebrew_wordle.services.progress_service import ProgressLedger, format_daily_date
from hebrew_wordle.services import storage_service
from hebrew_wordle.services.storage_service import MemoryProgressStore, MongoProgressStore, initialize_progress_store


class FailingStore:
    """Every read and write raises, as an unreachable database would."""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise RuntimeError(f"{name} unavailable")
        return fail


def storage_warnings(caplog):
    return [r for r in caplog.records if 'STORAGE_WARNING' in r.getMessage()]


class TestScore:
    def test_delta_updates_score_and_store(self, ledger, store):
        assert ledger.apply_score_delta(3) == 3
        assert ledger.apply_score_delta(-10) == -7
        assert ledger.score == -7
        assert store.score == -7

    def test_score_loaded_from_store(self, store):
        store.save_score(42)
        assert ProgressLedger(store, background=False).score == 42

    def test_background_writes_land_after_flush(self, store):
        ledger = ProgressLedger(store, background=True)
        for _ in range(5):
            ledger.apply_score_delta(2)
        ledger.flush()
        assert store.score == 10


class TestRevealRecords:
    def test_first_reveal_is_stored(self, ledger, store):
        record = ledger.record_reveal('שולחן', 30.7, 4, 'רהיט', 'GENERAL', 'easy')
        assert record == RevealedWord('שולחן', 30, 4, 'רהיט')
        assert ledger.revealed_words('GENERAL', 'easy') == [record]
        assert store.revealed['GENERAL']['easy'] == [record]

    def test_higher_score_replaces_score_and_time(self, ledger):
        ledger.record_reveal('שולחן', 30, 4, 'רהיט', 'GENERAL', 'easy')
        record = ledger.record_reveal('שולחן', 50, 5, 'רהיט', 'GENERAL', 'easy')
        assert (record.score, record.time) == (5, 50)

    def test_equal_score_faster_time_replaces_time(self, ledger):
        ledger.record_reveal('שולחן', 30, 4, 'רהיט', 'GENERAL', 'easy')
        record = ledger.record_reveal('שולחן', 20, 4, 'רהיט', 'GENERAL', 'easy')
        assert (record.score, record.time) == (4, 20)

    def test_worse_result_is_ignored(self, ledger):
        ledger.record_reveal('שולחן', 30, 4, 'רהיט', 'GENERAL', 'easy')
        record = ledger.record_reveal('שולחן', 10, 3, 'רהיט', 'GENERAL', 'easy')
        assert (record.score, record.time) == (4, 30)
        assert len(ledger.revealed_words('GENERAL', 'easy')) == 1

    def test_sections_are_separate(self, ledger):
        ledger.record_reveal('שולחן', 30, 4, '', 'GENERAL', 'easy')
        assert ledger.revealed_words('GENERAL', 'medium') == []
        assert ledger.revealed_words('ANIMALS', 'easy') == []

    def test_reveals_and_totals(self, ledger, provider):
        ledger.record_reveal('שולחן', 30, 4, 'רהיט', 'GENERAL', 'easy')
        overview = ledger.reveals_and_totals(provider)
        assert set(overview) == {'GENERAL', 'ANIMALS', 'GEOGRAPHY', 'SCIENCE', 'SPORT'}
        assert overview['GENERAL']['easy']['total'] == 2
        assert overview['GENERAL']['easy']['reveals'] == [
            {'word': 'שולחן', 'time': 30, 'score': 4, 'hint': 'רהיט'}
        ]
        assert overview['SPORT']['hard'] == {'reveals': [], 'total': 0}


class TestDailyDone:
    def test_date_format(self):
        assert format_daily_date(date(2024, 3, 7)) == '07.03.2024'

    def test_mark_daily_done(self, ledger, store):
        assert not ledger.is_daily_done(date(2024, 3, 7))
        ledger.mark_daily_done(date(2024, 3, 7))
        assert ledger.is_daily_done(date(2024, 3, 7))
        assert not ledger.is_daily_done(date(2024, 3, 8))
        assert store.daily_done == '07.03.2024'


class TestSavedGames:
    def test_save_and_load(self, ledger):
        ledger.save_game('g1', {'game_id': 'g1', 'score': 3})
        assert ledger.load_game('g1') == {'game_id': 'g1', 'score': 3}

    def test_saving_none_removes(self, ledger):
        ledger.save_game('g1', {'game_id': 'g1'})
        ledger.save_game('g1', None)
        assert ledger.load_game('g1') is None

    def test_load_waits_for_background_writes(self, store):
        ledger = ProgressLedger(store, background=True)
        ledger.save_game('g1', {'game_id': 'g1'})
        assert ledger.load_game('g1') == {'game_id': 'g1'}


class TestStorageFailures:
    def test_failed_loads_fall_back_to_defaults(self, caplog):
        caplog.set_level(logging.WARNING, logger='hebrew_wordle')
        ledger = ProgressLedger(FailingStore(), background=False)
        assert ledger.score == 0
        assert ledger.revealed_words('GENERAL', 'easy') == []
        assert not ledger.is_daily_done(date(2024, 3, 7))
        assert storage_warnings(caplog)

    def test_failed_writes_do_not_interrupt(self, caplog):
        ledger = ProgressLedger(FailingStore(), background=False)
        caplog.clear()
        caplog.set_level(logging.WARNING, logger='hebrew_wordle')

        assert ledger.apply_score_delta(5) == 5
        ledger.record_reveal('שולחן', 10, 5, '', 'GENERAL', 'easy')
        ledger.mark_daily_done(date(2024, 3, 7))
        ledger.save_game('g1', {'game_id': 'g1'})

        assert ledger.score == 5
        assert len(ledger.revealed_words('GENERAL', 'easy')) == 1
        assert ledger.is_daily_done(date(2024, 3, 7))
        assert ledger.load_game('g1') is None
        assert len(storage_warnings(caplog)) == 5

    def test_failed_background_writes_are_logged(self, caplog):
        caplog.set_level(logging.WARNING, logger='hebrew_wordle')
        ledger = ProgressLedger(FailingStore(), background=True)
        caplog.clear()
        ledger.apply_score_delta(1)
        ledger.flush()
        assert ledger.score == 1
        assert len(storage_warnings(caplog)) == 1


class TestStoreSelection:
    def test_memory_store_without_uri(self):
        assert isinstance(initialize_progress_store(None), MemoryProgressStore)
        assert isinstance(initialize_progress_store(''), MemoryProgressStore)

    def test_memory_store_copies_saved_games(self):
        store = MemoryProgressStore()
        state = {'guesses': [{'letters': ['א']}]}
        store.save_game('g1', state)
        state['guesses'].append({'letters': ['ב']})
        assert len(store.load_game('g1')['guesses']) == 1


class FakeCollection:
    def __init__(self):
        self.docs = {}

    def create_index(self, keys, unique=False):
        pass

    def replace_one(self, key, doc, upsert=False):
        self.docs[key['_id']] = doc


class FakeDatabase:
    def __init__(self):
        self.collections = {}

    def __getattr__(self, name):
        return self.collections.setdefault(name, FakeCollection())


class FakeAdmin:
    def __init__(self, reachable):
        self.reachable = reachable

    def command(self, name):
        if not self.reachable:
            raise ConnectionFailure('no servers available')
        return {'ok': 1}


class FakeMongoClient:
    reachable = True
    instances = []

    def __init__(self, uri, server_api=None):
        self.admin = FakeAdmin(self.reachable)
        self.database = FakeDatabase()
        self.closed = False
        FakeMongoClient.instances.append(self)

    def __getitem__(self, name):
        return self.database

    def close(self):
        self.closed = True


@pytest.fixture
def fake_mongo(monkeypatch):
    FakeMongoClient.instances = []
    FakeMongoClient.reachable = True
    monkeypatch.setattr(storage_service, 'MongoClient', FakeMongoClient)
    return FakeMongoClient


class TestMongoStore:
    def test_unreachable_server_closes_client(self, fake_mongo):
        fake_mongo.reachable = False
        with pytest.raises(ConnectionFailure):
            MongoProgressStore('mongodb://db.invalid')
        [client] = fake_mongo.instances
        assert client.closed

    def test_unreachable_server_falls_back_to_memory(self, fake_mongo, caplog):
        fake_mongo.reachable = False
        caplog.set_level(logging.WARNING, logger='hebrew_wordle')
        store = initialize_progress_store('mongodb://db.invalid')
        assert isinstance(store, MemoryProgressStore)
        assert fake_mongo.instances[0].closed
        assert len(storage_warnings(caplog)) == 1

    def test_saved_game_timestamp_is_utc(self, fake_mongo):
        store = MongoProgressStore('mongodb://db.example')
        store.save_game('g1', {'game_id': 'g1'})

        doc = store.games_collection.docs['g1']
        assert doc['state'] == {'game_id': 'g1'}
        assert datetime.fromisoformat(doc['date']).utcoffset().total_seconds() == 0
        assert not store.client.closed
