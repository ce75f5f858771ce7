import random

import pytest

from medikalak.models import Player, PlayerSubmission, Question


def make_submissions(players, texts):
    """Build a submissions mapping from {player_id: text}."""
    names = {p.id: p.name for p in players}
    return {
        pid: PlayerSubmission(player_id=pid, player_name=names.get(pid, pid), raw_answer_text=text)
        for pid, text in texts.items()
    }


@pytest.fixture()
def question():
    return Question(
        text='Pick the third letter',
        options=('A', 'B', 'C', 'D'),
        correct_index=2,
        explanation='C is the third letter.',
        category='Alphabet',
    )


@pytest.fixture()
def players():
    return [
        Player(id='p1', name='Alice', is_current_user=True),
        Player(id='p2', name='Bob'),
        Player(id='p3', name='Cara'),
        Player(id='p4', name='Dan'),
        Player(id='p5', name='Eve'),
    ]


@pytest.fixture()
def submit(players):
    def _submit(texts):
        return make_submissions(players, texts)
    return _submit


@pytest.fixture()
def rng():
    return random.Random(1234)
