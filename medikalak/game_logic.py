import json
import math
import random
from typing import List, Optional
from medikalak.config import GameConfig
from medikalak.errors import InvalidQuestion
from medikalak.models import Question
from pathlib import Path
from pydantic import ValidationError

RATINGS = [
    (90, 'Excellent'),
    (75, 'Great'),
    (60, 'Good'),
    (45, 'Fair'),
]

FEEDBACK = {
    'Excellent': 'Outstanding! Your medical knowledge is exceptional!',
    'Great': 'Very good! You have a strong grasp of medical concepts.',
    'Good': 'Good job! Your medical knowledge is solid.',
    'Fair': 'Nice effort! Keep studying to improve your medical knowledge.',
    'Needs Improvement': 'Keep practicing! Medical knowledge takes time to build.',
}


def calculate_question_score(is_correct: bool, time_remaining: float, config: Optional[GameConfig] = None) -> int:
    """
    Calculate the classic-mode score for a single question.

    Correct answer: base points plus a bonus per second left on the clock
    Wrong answer: 0
    """
    if not is_correct:
        return 0
    config = config or GameConfig()

    # Clamp to the question timer
    remaining = max(0, min(time_remaining, config.max_time_per_question))
    return config.base_points + math.floor(remaining * config.time_bonus_factor)


def performance_rating(score: float, max_possible_score: float) -> str:
    if max_possible_score <= 0:
        return 'Needs Improvement'
    percentage = (score / max_possible_score) * 100
    for threshold, rating in RATINGS:
        if percentage >= threshold:
            return rating
    return 'Needs Improvement'


def feedback_message(rating: str) -> str:
    return FEEDBACK.get(rating, 'Thanks for playing MediKalak!')


def load_questions(path) -> List[Question]:
    """
    Load a question bank from a JSON file.

    The file holds either {"questions": [...]} or a bare list. Entries use
    the bank's keys (question, options, correctAnswer, explanation, category).
    """
    bank_path = Path(path)
    if not bank_path.exists():
        raise FileNotFoundError(f"Question bank '{bank_path}' not found")

    with open(bank_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    entries = data.get('questions', []) if isinstance(data, dict) else data

    questions = []
    for idx, q in enumerate(entries):
        try:
            question = Question.model_validate(q)
        except ValidationError as e:
            raise InvalidQuestion(f"Entry {idx} in '{bank_path}' is malformed: {e}") from e
        if not 0 <= question.correct_index < len(question.options):
            raise InvalidQuestion(
                f"Entry {idx} in '{bank_path}': correct answer {question.correct_index} "
                f"out of range for {len(question.options)} options"
            )
        questions.append(question)

    return questions


def categories(questions: List[Question]) -> List[str]:
    return sorted({q.category for q in questions if q.category})


def pick_question(questions: List[Question], category: Optional[str] = None,
                  rng: Optional[random.Random] = None) -> Question:
    """Pick a random question, restricted to `category` when given."""
    pool = [q for q in questions if q.category == category] if category else list(questions)
    if not pool:
        raise InvalidQuestion(f"No questions available for category {category!r}")
    rng = rng or random.Random()
    return rng.choice(pool)
