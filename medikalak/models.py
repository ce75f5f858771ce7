from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Tuple


class Question(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[int] = None
    text: str = Field(validation_alias=AliasChoices('text', 'question'))
    options: Tuple[str, ...]
    correct_index: int = Field(
        validation_alias=AliasChoices('correct_index', 'correctAnswer', 'correct_answer')
    )  # Index of correct option (0-based)
    explanation: str = ''
    category: str = ''

    @property
    def correct_text(self) -> str:
        return self.options[self.correct_index]


class Player(BaseModel):
    id: str
    name: str
    is_current_user: bool = False


class PlayerSubmission(BaseModel):
    model_config = ConfigDict(frozen=True)

    player_id: str
    player_name: str
    raw_answer_text: str


class Contributor(BaseModel):
    model_config = ConfigDict(frozen=True)

    player_id: str
    player_name: str


class DisplayAnswer(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    contributors: Tuple[Contributor, ...] = ()
    is_correct: bool = False
    is_player_answer: bool = False
    is_system_generated: bool = False

    def has_contributor(self, player_id: str) -> bool:
        return any(c.player_id == player_id for c in self.contributors)


# answer id -> ids of the players who voted for it
VoteAssignment = Dict[str, List[str]]


class ScoreDetail(BaseModel):
    type: str  # 'correct' or 'tricked'
    text: str
    points: int


class ScoreChange(BaseModel):
    correct_vote_bonus: int = 0
    trick_bonus: int = 0
    total: int = 0
    details: List[ScoreDetail] = []

    def add_correct_vote(self, points: int):
        self.correct_vote_bonus = points
        self.total += points
        self.details.append(ScoreDetail(type='correct', text='Voted for correct answer', points=points))

    def add_trick(self, points: int, text: str):
        self.trick_bonus += points
        self.total += points
        self.details.append(ScoreDetail(type='tricked', text=text, points=points))


class Standing(BaseModel):
    player_id: str
    name: str
    score: int
    is_current_user: bool = False


class RoundResult(BaseModel):
    round_number: int
    question: Question
    display_answers: List[DisplayAnswer]
    votes: VoteAssignment
    score_changes: Dict[str, ScoreChange]
    standings: List[Standing] = []
