import logging
import random
from typing import Dict, Iterable, List, Mapping, Optional

from medikalak.config import MIN_ANSWER_OPTIONS
from medikalak.errors import InvalidQuestion
from medikalak.models import Contributor, DisplayAnswer, PlayerSubmission, Question

logger = logging.getLogger(__name__)

CORRECT_ANSWER_ID = 'correct'
SYSTEM_ANSWER_PREFIX = 'system_'


def check_question(question: Question) -> None:
    """Raise InvalidQuestion unless the question has a usable correct option."""
    if not question.options:
        raise InvalidQuestion(f"Question {question.text!r} has no options")
    if not 0 <= question.correct_index < len(question.options):
        raise InvalidQuestion(
            f"Question {question.text!r}: correct index {question.correct_index} "
            f"out of range for {len(question.options)} options"
        )


def _reserve_id(base: str, taken: set) -> str:
    candidate = base
    while candidate in taken:
        candidate += '_'
    taken.add(candidate)
    return candidate


class AnswerReconciler:
    """
    Builds the answer list players vote on in a bluff round.

    Identical submissions are merged into one answer credited to every
    author, the correct option is injected when nobody typed it, and the
    list is padded with the question's other options up to `min_options`.
    """

    def __init__(self, min_options: int = MIN_ANSWER_OPTIONS, drop_blank: bool = False,
                 rng: Optional[random.Random] = None):
        self.min_options = min_options
        self.drop_blank = drop_blank
        self.rng = rng or random.Random()

    @classmethod
    def from_config(cls, config, rng: Optional[random.Random] = None,
                    drop_blank: bool = False) -> "AnswerReconciler":
        return cls(min_options=config.min_answer_options, drop_blank=drop_blank, rng=rng)

    def reconcile(self, question: Question, submissions: Mapping[str, PlayerSubmission],
                  min_options: Optional[int] = None) -> List[DisplayAnswer]:
        """
        Return the de-duplicated, shuffled answer list for one round.

        Raises:
            InvalidQuestion: if the question has no options or its correct
                index does not point at one of them.
        """
        check_question(question)
        if min_options is None:
            min_options = self.min_options

        grouped = self._group(submissions.values())
        correct_text = question.correct_text
        taken_ids = {s.player_id for s in submissions.values()}

        answers = []
        for text, contributors in grouped.items():
            answers.append(DisplayAnswer(
                id=contributors[0].player_id,
                text=text,
                contributors=tuple(contributors),
                is_correct=(text == correct_text),
                is_player_answer=True,
            ))

        injected_correct = correct_text not in grouped
        if injected_correct:
            answers.append(DisplayAnswer(
                id=_reserve_id(CORRECT_ANSWER_ID, taken_ids),
                text=correct_text,
                is_correct=True,
            ))

        fillers = []
        if len(answers) < min_options:
            existing = {a.text for a in answers}
            available = []
            for idx, option in enumerate(question.options):
                if idx != question.correct_index and option not in existing and option not in available:
                    available.append(option)
            self.rng.shuffle(available)
            for index, option in enumerate(available[:min_options - len(answers)]):
                fillers.append(DisplayAnswer(
                    id=_reserve_id(f"{SYSTEM_ANSWER_PREFIX}{index}", taken_ids),
                    text=option,
                    is_system_generated=True,
                ))
        answers.extend(fillers)

        logger.debug(
            f"[reconcile] question={question.text!r} submissions={len(submissions)} "
            f"merged={len(grouped)} injected_correct={injected_correct} fillers={len(fillers)}"
        )

        self.rng.shuffle(answers)
        return answers

    def _group(self, submissions: Iterable[PlayerSubmission]) -> Dict[str, List[Contributor]]:
        # dicts keep insertion order, so answers and contributors stay first-seen
        grouped: Dict[str, List[Contributor]] = {}
        for submission in submissions:
            text = submission.raw_answer_text
            if self.drop_blank and not text.strip():
                continue
            grouped.setdefault(text, []).append(
                Contributor(player_id=submission.player_id, player_name=submission.player_name)
            )
        return grouped
