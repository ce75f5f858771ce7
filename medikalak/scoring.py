import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from medikalak.config import SCORE_CORRECT_ANSWER, SCORE_TRICKED_PLAYER
from medikalak.models import DisplayAnswer, Player, ScoreChange, Standing, VoteAssignment

logger = logging.getLogger(__name__)


def _unique(ids: Iterable[str]) -> List[str]:
    seen = set()
    out = []
    for pid in ids:
        if pid not in seen:
            seen.add(pid)
            out.append(pid)
    return out


class RoundScorer:
    """
    Awards the points of one bluff round.

    Voting for the correct answer earns `score_correct_answer`. Every author
    of a wrong player answer earns `score_tricked_player` for each vote it
    drew from someone who is not one of its authors. Co-authors are each
    credited in full; the reward is not split between them.
    """

    def __init__(self, score_correct_answer: int = SCORE_CORRECT_ANSWER,
                 score_tricked_player: int = SCORE_TRICKED_PLAYER):
        self.score_correct_answer = score_correct_answer
        self.score_tricked_player = score_tricked_player

    @classmethod
    def from_config(cls, config) -> "RoundScorer":
        return cls(
            score_correct_answer=config.score_correct_answer,
            score_tricked_player=config.score_tricked_player,
        )

    def score(self, players: Sequence[Player], display_answers: Sequence[DisplayAnswer],
              vote_assignment: Mapping[str, Sequence[str]]) -> Dict[str, ScoreChange]:
        changes = {p.id: ScoreChange() for p in players}
        names = {p.id: p.name for p in players}

        correct = next((a for a in display_answers if a.is_correct), None)
        if correct is not None:
            for voter_id in _unique(vote_assignment.get(correct.id, [])):
                if voter_id in changes:
                    changes[voter_id].add_correct_vote(self.score_correct_answer)
        else:
            logger.warning("[score] no correct answer in display list; skipping correct-vote bonus")

        for answer in display_answers:
            if answer.is_correct or not answer.is_player_answer or answer.is_system_generated:
                continue

            tricked = [v for v in _unique(vote_assignment.get(answer.id, []))
                       if not answer.has_contributor(v)]
            points = len(tricked) * self.score_tricked_player
            if points <= 0:
                continue

            voter_names = ', '.join(names.get(v, 'Unknown') for v in tricked)
            for contributor in answer.contributors:
                if contributor.player_id not in changes:
                    continue
                changes[contributor.player_id].add_trick(
                    points, f"Tricked {len(tricked)} player(s): {voter_names}"
                )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("[score] " + ' '.join(f"{pid}={c.total}" for pid, c in changes.items()))
        return changes


def tally_ballots(ballots: Mapping[str, str], display_answers: Sequence[DisplayAnswer]) -> VoteAssignment:
    """
    Turn per-voter ballots (voter id -> answer id) into a vote assignment.

    Every displayed answer gets an entry, even without votes. Ballots for
    ids that are not displayed are kept under their own id; the scorer
    ignores them.
    """
    votes: VoteAssignment = {a.id: [] for a in display_answers}
    for voter_id, answer_id in ballots.items():
        votes.setdefault(answer_id, []).append(voter_id)
    return votes


def most_popular_answer(display_answers: Sequence[DisplayAnswer],
                        vote_assignment: Mapping[str, Sequence[str]]) -> Optional[DisplayAnswer]:
    """Answer with the most votes; the earliest in display order wins a tie."""
    best = None
    max_votes = 0
    for answer in display_answers:
        count = len(_unique(vote_assignment.get(answer.id, [])))
        if count > max_votes:
            max_votes = count
            best = answer
    return best


class Leaderboard:
    """Running per-player totals across rounds."""

    def __init__(self, scores: Optional[Mapping[str, int]] = None):
        self.scores: Dict[str, int] = dict(scores or {})

    def apply(self, score_changes: Mapping[str, ScoreChange]) -> None:
        for player_id, change in score_changes.items():
            self.scores[player_id] = self.scores.get(player_id, 0) + change.total

    def score_of(self, player_id: str) -> int:
        return self.scores.get(player_id, 0)

    def standings(self, players: Sequence[Player]) -> List[Standing]:
        rows = [
            Standing(player_id=p.id, name=p.name, score=self.score_of(p.id), is_current_user=p.is_current_user)
            for p in players
        ]
        rows.sort(key=lambda row: row.score, reverse=True)
        return rows
