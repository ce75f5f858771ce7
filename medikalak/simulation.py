"""Stand-in opponents for offline rounds.

Players other than the current user answer and vote through these helpers
when no real opponent is connected.
"""
import random
from typing import Dict, Mapping, Optional, Sequence

from medikalak.config import GameConfig
from medikalak.models import DisplayAnswer, Player, PlayerSubmission, Question
from medikalak.reconciler import check_question


def generate_fake_answer(question: Question, rng: Optional[random.Random] = None) -> str:
    """Pick a plausible but incorrect option as a bluff."""
    check_question(question)
    rng = rng or random.Random()
    incorrect = [opt for idx, opt in enumerate(question.options) if idx != question.correct_index]
    if not incorrect:
        # single-option question: nothing to bluff with
        return ''
    return rng.choice(incorrect)


def simulate_submissions(question: Question, players: Sequence[Player],
                         submissions: Mapping[str, PlayerSubmission],
                         rng: Optional[random.Random] = None) -> Dict[str, PlayerSubmission]:
    rng = rng or random.Random()
    completed = dict(submissions)
    for player in players:
        if player.is_current_user or player.id in completed:
            continue
        completed[player.id] = PlayerSubmission(
            player_id=player.id,
            player_name=player.name,
            raw_answer_text=generate_fake_answer(question, rng),
        )
    return completed


def simulate_votes(players: Sequence[Player], display_answers: Sequence[DisplayAnswer],
                   ballots: Mapping[str, str], rng: Optional[random.Random] = None,
                   correct_bias: Optional[float] = None,
                   config: Optional[GameConfig] = None) -> Dict[str, str]:
    """
    Fill in a ballot for every simulated player who has not voted.

    A simulated player picks the correct answer with probability
    `correct_bias`, otherwise any answer at random, its own included.
    Without an explicit bias, `config.simulated_correct_bias` is used.
    """
    if correct_bias is None:
        correct_bias = (config or GameConfig()).simulated_correct_bias
    rng = rng or random.Random()
    completed = dict(ballots)
    if not display_answers:
        return completed

    correct = next((a for a in display_answers if a.is_correct), None)
    for player in players:
        if player.is_current_user or player.id in completed:
            continue
        if correct is not None and rng.random() < correct_bias:
            completed[player.id] = correct.id
        else:
            completed[player.id] = rng.choice(display_answers).id
    return completed


def random_vote(display_answers: Sequence[DisplayAnswer],
                rng: Optional[random.Random] = None) -> Optional[str]:
    # used when the voting timer runs out before the user picked anything
    if not display_answers:
        return None
    rng = rng or random.Random()
    return rng.choice(display_answers).id
