from hebrew_wordle.services import game_service as game_service_module

SECRET = 'שולחן'


def start_game(client, **body):
    payload = {'category': 'GENERAL', 'difficulty': 'easy', 'word_length': 5}
    payload.update(body)
    response = client.post('/api/new_game', json=payload)
    assert response.status_code == 200
    return response.get_json()['game_id']


class TestNewGame:
    def test_defaults(self, client):
        response = client.post('/api/new_game', json={})
        data = response.get_json()

        assert response.status_code == 200
        assert data['success'] is True
        assert data['state']['status'] == 'PLAYING'
        assert data['state']['answer'] is None
        assert data['state']['word_length'] == 5

    def test_missing_body(self, client):
        response = client.post('/api/new_game')
        assert response.status_code == 200

    def test_invalid_game_type(self, client):
        response = client.post('/api/new_game', json={'game_type': 'WEEKLY'})
        assert response.status_code == 400
        assert response.get_json()['success'] is False

    def test_non_integer_length(self, client):
        response = client.post('/api/new_game', json={'word_length': 'five'})
        assert response.status_code == 400

    def test_daily(self, client):
        response = client.post('/api/new_game', json={'game_type': 'DAILY'})
        assert response.get_json()['state']['game_type'] == 'DAILY'


class TestGamePlay:
    def test_state_for_unknown_game(self, client):
        assert client.get('/api/game/missing/state').status_code == 404

    def test_guess_required(self, client):
        game_id = start_game(client)
        response = client.post(f'/api/game/{game_id}/guess', json={})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Guess is required'

    def test_rejected_guess(self, client):
        game_id = start_game(client)
        response = client.post(f'/api/game/{game_id}/guess', json={'guess': 'אבגדה'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Word not in word list'

    def test_guess_for_unknown_game(self, client):
        response = client.post('/api/game/missing/guess', json={'guess': 'ספרים'})
        assert response.status_code == 404

    def test_winning_guess(self, client):
        game_id = start_game(client)
        response = client.post(f'/api/game/{game_id}/guess', json={'guess': SECRET})
        state = response.get_json()['state']

        assert response.status_code == 200
        assert state['won'] is True
        assert state['answer'] == SECRET
        assert state['guesses'][0]['correctness'] == ['correct'] * 5

    def test_state_after_guess(self, client):
        game_id = start_game(client)
        client.post(f'/api/game/{game_id}/guess', json={'guess': 'ילדים'})
        state = client.get(f'/api/game/{game_id}/state').get_json()['state']
        assert state['current_attempt'] == 1
        assert state['keyboard']['ל'] == 'exists'

    def test_hint(self, client):
        game_id = start_game(client)
        response = client.post(f'/api/game/{game_id}/hint')
        state = response.get_json()['state']

        assert response.status_code == 200
        assert state['display_hint']['correctness'].count('correct') == 2
        assert state['score'] == -10

    def test_hint_after_game_over(self, client):
        game_id = start_game(client)
        client.post(f'/api/game/{game_id}/guess', json={'guess': SECRET})
        assert client.post(f'/api/game/{game_id}/hint').status_code == 400
        assert client.post('/api/game/missing/hint').status_code == 404

    def test_select_cell(self, client):
        game_id = start_game(client)
        client.post(f'/api/game/{game_id}/guess', json={'guess': 'ילדים'})
        response = client.post(f'/api/game/{game_id}/select', json={'row': 0, 'col': 1})
        state = response.get_json()['state']

        assert response.status_code == 200
        assert state['display_hint']['letters'] == ['ל', '', 'ל', 'ל', 'ל']

    def test_select_cell_validation(self, client):
        game_id = start_game(client)
        assert client.post(f'/api/game/{game_id}/select', json={'row': 0}).status_code == 400
        assert client.post(f'/api/game/{game_id}/select', json={'row': 'a', 'col': 0}).status_code == 400
        assert client.post(f'/api/game/{game_id}/select', json={'row': 9, 'col': 0}).status_code == 400
        assert client.post('/api/game/missing/select', json={'row': 0, 'col': 0}).status_code == 404

    def test_about(self, client):
        game_id = start_game(client)
        data = client.post(f'/api/game/{game_id}/about').get_json()
        assert data['about'] == 'רהיט שעליו אוכלים'
        assert data['state']['score'] == -5
        assert client.post('/api/game/missing/about').status_code == 404


class TestSessions:
    def test_export_and_restore(self, client, service):
        game_id = start_game(client)
        client.post(f'/api/game/{game_id}/guess', json={'guess': 'ילדים'})
        saved = client.get(f'/api/game/{game_id}/export').get_json()['game']
        assert saved['secret_word'] == SECRET

        service.games.clear()
        response = client.post('/api/game/restore', json={'game': saved})
        data = response.get_json()

        assert response.status_code == 200
        assert data['game_id'] == game_id
        assert data['state']['current_attempt'] == 1

    def test_restore_requires_game(self, client):
        assert client.post('/api/game/restore', json={}).status_code == 400
        assert client.post('/api/game/restore', json={'game': {'game_id': 'x'}}).status_code == 400

    def test_restore_rejects_malformed_session(self, client):
        game_id = start_game(client)
        saved = client.get(f'/api/game/{game_id}/export').get_json()['game']

        bad_hint = {**saved, 'line_hint': {'letters': ['ש', ''], 'correctness': ['correct', None]}}
        response = client.post('/api/game/restore', json={'game': bad_hint})
        assert response.status_code == 400
        assert response.get_json()['success'] is False

        bad_keyboard = {**saved, 'keyboard': ['x']}
        assert client.post('/api/game/restore', json={'game': bad_keyboard}).status_code == 400

        assert client.post(f'/api/game/{game_id}/hint').status_code == 200

    def test_export_unknown_game(self, client):
        assert client.get('/api/game/missing/export').status_code == 404

    def test_resume(self, client, service):
        game_id = start_game(client)
        service.games.clear()
        response = client.post(f'/api/game/{game_id}/resume')
        assert response.status_code == 200
        assert response.get_json()['state']['game_id'] == game_id
        assert client.post('/api/game/missing/resume').status_code == 404

    def test_delete(self, client):
        game_id = start_game(client)
        assert client.delete(f'/api/game/{game_id}').get_json()['success'] is True
        assert client.get(f'/api/game/{game_id}/state').status_code == 404
        assert client.delete(f'/api/game/{game_id}').get_json()['success'] is False


class TestStatusEndpoints:
    def test_daily_status(self, client):
        data = client.get('/api/daily').get_json()
        assert data == {'success': True, 'date': '2024-03-07', 'done': False}

    def test_daily_done_after_win(self, client):
        start = client.post('/api/new_game', json={'game_type': 'DAILY'}).get_json()
        client.post(f"/api/game/{start['game_id']}/guess", json={'guess': 'ספרים'})
        assert client.get('/api/daily').get_json()['done'] is True

    def test_health(self, client):
        start_game(client)
        data = client.get('/api/health').get_json()
        assert data['status'] == 'healthy'
        assert data['active_games'] == 1
        assert data['storage'] == 'MemoryProgressStore'

    def test_progress(self, client):
        game_id = start_game(client)
        client.post(f'/api/game/{game_id}/guess', json={'guess': SECRET})
        data = client.get('/api/progress').get_json()

        assert data['score'] == 5
        assert data['reveals']['GENERAL']['easy']['reveals'][0]['word'] == SECRET
        assert data['category_names']['GENERAL'] == 'ידע כללי'
        assert data['difficulty_names']['hard'] == 'קשה'

    def test_service_unavailable(self, client, monkeypatch):
        monkeypatch.setattr(game_service_module, '_game_service', None)
        response = client.post('/api/new_game', json={})
        assert response.status_code == 500
        assert response.get_json()['error'] == 'Game service unavailable'
