import pytest
from pydantic import ValidationError

from medikalak.config import GameConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so teardown also removes whatever a .env file loaded
    for name in GameConfig.model_fields:
        monkeypatch.setenv('MEDIKALAK_' + name.upper(), '')
        monkeypatch.delenv('MEDIKALAK_' + name.upper())


def test_defaults():
    config = GameConfig()
    assert config.score_correct_answer == 500
    assert config.score_tricked_player == 300
    assert config.min_answer_options == 4


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv('MEDIKALAK_SCORE_CORRECT_ANSWER', '250')
    monkeypatch.setenv('MEDIKALAK_SIMULATED_CORRECT_BIAS', '0.8')
    config = GameConfig.from_env(env_file=str(tmp_path / 'missing.env'))
    assert config.score_correct_answer == 250
    assert config.simulated_correct_bias == 0.8
    assert config.score_tricked_player == 300


def test_from_env_file(monkeypatch, tmp_path):
    env_file = tmp_path / '.env'
    env_file.write_text('MEDIKALAK_MIN_ANSWER_OPTIONS=6\n', encoding='utf-8')
    config = GameConfig.from_env(env_file=str(env_file))
    assert config.min_answer_options == 6


def test_overrides_win(monkeypatch, tmp_path):
    monkeypatch.setenv('MEDIKALAK_TOTAL_ROUNDS', '3')
    config = GameConfig.from_env(env_file=str(tmp_path / 'missing.env'), total_rounds=5)
    assert config.total_rounds == 5


@pytest.mark.parametrize('field, value', [
    ('score_correct_answer', -1),
    ('min_answer_options', 0),
    ('simulated_correct_bias', 1.5),
])
def test_validation(field, value):
    with pytest.raises(ValidationError):
        GameConfig(**{field: value})
