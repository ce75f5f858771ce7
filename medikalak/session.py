import logging
import random
from typing import Dict, List, Mapping, Optional, Sequence

from medikalak.config import GameConfig
from medikalak.errors import RoundStateError
from medikalak.game_logic import pick_question
from medikalak.models import DisplayAnswer, Player, PlayerSubmission, Question, RoundResult
from medikalak.reconciler import AnswerReconciler
from medikalak.scoring import Leaderboard, RoundScorer, tally_ballots

logger = logging.getLogger(__name__)


class GameSession:
    """
    In-memory driver for a multiplayer bluff game.

    Each round is opened with the players' submissions, which fixes the
    answer list, and closed with the ballots cast against that same list.
    """

    def __init__(self, session_id: str, players: Sequence[Player],
                 questions: Optional[Sequence[Question]] = None,
                 category: Optional[str] = None,
                 config: Optional[GameConfig] = None,
                 rng: Optional[random.Random] = None,
                 drop_blank: bool = False):
        self.session_id = session_id
        self.players = list(players)
        self.questions = list(questions or [])
        self.category = category
        self.config = config or GameConfig()
        self.rng = rng or random.Random()

        self.reconciler = AnswerReconciler.from_config(self.config, rng=self.rng, drop_blank=drop_blank)
        self.scorer = RoundScorer.from_config(self.config)
        self.leaderboard = Leaderboard()

        self.state = 'waiting'  # waiting, playing, finished
        self.round_number = 0
        self.current_question: Optional[Question] = None
        self.display_answers: Optional[List[DisplayAnswer]] = None
        self.history: List[RoundResult] = []

    @property
    def total_rounds(self) -> int:
        return self.config.total_rounds

    @property
    def round_open(self) -> bool:
        return self.display_answers is not None

    def open_round(self, submissions: Mapping[str, PlayerSubmission],
                   question: Optional[Question] = None) -> List[DisplayAnswer]:
        if self.state == 'finished':
            raise RoundStateError(f"Session {self.session_id} is finished")
        if self.round_open:
            raise RoundStateError(f"Round {self.round_number} of session {self.session_id} is still open")

        if question is None:
            question = pick_question(self.questions, self.category, rng=self.rng)

        display_answers = self.reconciler.reconcile(question, submissions)

        self.state = 'playing'
        self.round_number += 1
        self.current_question = question
        self.display_answers = display_answers
        logger.info(
            f"[round-open] session={self.session_id} round={self.round_number}/{self.total_rounds} "
            f"answers={len(display_answers)}"
        )
        return display_answers

    def close_round(self, ballots: Mapping[str, str]) -> RoundResult:
        if not self.round_open:
            raise RoundStateError(f"Session {self.session_id} has no open round")

        votes = tally_ballots(ballots, self.display_answers)
        changes = self.scorer.score(self.players, self.display_answers, votes)
        self.leaderboard.apply(changes)

        result = RoundResult(
            round_number=self.round_number,
            question=self.current_question,
            display_answers=self.display_answers,
            votes=votes,
            score_changes=changes,
            standings=self.leaderboard.standings(self.players),
        )
        self.history.append(result)
        self.display_answers = None

        if self.round_number >= self.total_rounds:
            self.state = 'finished'
            logger.info(f"[finish] session={self.session_id} finished at round={self.round_number}")
        else:
            logger.info(f"[round-close] session={self.session_id} round={self.round_number}")
        return result

    def scores(self) -> Dict[str, int]:
        return {p.id: self.leaderboard.score_of(p.id) for p in self.players}
