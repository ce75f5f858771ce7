import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_PREFIX = "MEDIKALAK_"

# Multiplayer (bluff) mode
SCORE_CORRECT_ANSWER = 500  # Points for voting for the correct answer
SCORE_TRICKED_PLAYER = 300  # Points per player tricked by your answer
MIN_ANSWER_OPTIONS = 4

# Classic (single player) mode
MAX_TIME_PER_QUESTION = 15  # seconds
BASE_POINTS = 100
TIME_BONUS_FACTOR = 10  # Points per second remaining


class GameConfig(BaseModel):
    score_correct_answer: int = Field(SCORE_CORRECT_ANSWER, ge=0)
    score_tricked_player: int = Field(SCORE_TRICKED_PLAYER, ge=0)
    min_answer_options: int = Field(MIN_ANSWER_OPTIONS, ge=1)
    total_rounds: int = Field(10, ge=1)
    simulated_correct_bias: float = Field(0.5, ge=0.0, le=1.0)
    max_time_per_question: int = Field(MAX_TIME_PER_QUESTION, ge=0)
    base_points: int = Field(BASE_POINTS, ge=0)
    time_bonus_factor: int = Field(TIME_BONUS_FACTOR, ge=0)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None, **overrides: Any) -> "GameConfig":
        """
        Build a config from MEDIKALAK_* environment variables.

        A .env file is loaded first (without overriding variables that are
        already set). Keyword overrides win over the environment.
        """
        load_dotenv(env_file)

        values: Dict[str, Any] = {}
        for name in cls.model_fields:
            raw = os.getenv(ENV_PREFIX + name.upper())
            if raw is not None and raw != "":
                values[name] = raw
        values.update(overrides)
        return cls(**values)
