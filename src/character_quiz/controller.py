"""
Quiz Session Controller

Drives a round from start to finish:
1. Fetch the catalog's total character count
2. Generate a batch of five questions
3. Take answers, keep score, advance
4. Report completion and restart with a fresh batch

Each batch is tagged with a generation number. Restart bumps the
generation, so a batch that lands after a restart is dropped instead of
replacing the new round.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .cache import QueryCache
from .catalog.base import CatalogClient, CatalogError
from .quiz.generator import QuestionGenerator
from .quiz.schema import Question, QuizError

logger = logging.getLogger(__name__)

TOTAL_COUNT_KEY = ("total_count",)
QUIZ_KEY_PREFIX = ("quiz",)


class QuizStatus(str, Enum):
    """Where the controller is in a round."""
    IDLE = "idle"
    LOADING_TOTAL = "loading_total"
    LOADING_QUESTIONS = "loading_questions"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_loading(self) -> bool:
        return self in (QuizStatus.LOADING_TOTAL, QuizStatus.LOADING_QUESTIONS)


@dataclass
class QuizSession:
    """Progress through one batch of questions."""
    questions: list[Question]
    generation: int = 0
    current_index: int = 0
    score: int = 0

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def is_complete(self) -> bool:
        return self.current_index >= len(self.questions)

    @property
    def current_question(self) -> Optional[Question]:
        if self.is_complete:
            return None
        return self.questions[self.current_index]

    def record_answer(self, option: str) -> bool:
        """Score the answer to the current question and move on."""
        correct = self.questions[self.current_index].is_correct(option)
        if correct:
            self.score += 1
        self.current_index += 1
        return correct

    def to_dict(self) -> dict:
        return {
            "generation": self.generation,
            "current_index": self.current_index,
            "score": self.score,
            "total": self.total,
            "questions": [q.to_dict() for q in self.questions],
        }


class QuizController:
    """
    Owns the quiz state machine.

    IDLE -> LOADING_TOTAL -> LOADING_QUESTIONS -> IN_PROGRESS -> COMPLETED,
    with FAILED reachable from either loading state. restart() goes back to
    LOADING_QUESTIONS (or LOADING_TOTAL if the count was never fetched).
    """

    def __init__(
        self,
        client: CatalogClient,
        generator: Optional[QuestionGenerator] = None,
        cache: Optional[QueryCache] = None,
    ):
        """
        Initialize controller.

        Args:
            client: Catalog client for the total count
            generator: Question generator (defaults to one over client)
            cache: Query cache (defaults to a fresh one)
        """
        self.client = client
        self.generator = generator or QuestionGenerator(client)
        self.cache = cache or QueryCache()

        self.status = QuizStatus.IDLE
        self.generation = 0
        self.total_count: Optional[int] = None
        self.session: Optional[QuizSession] = None
        self.total_error: Optional[str] = None
        self.questions_error: Optional[str] = None

    @property
    def error(self) -> Optional[str]:
        """First error to show: the count failure wins over the batch failure."""
        return self.total_error or self.questions_error

    @property
    def current_question(self) -> Optional[Question]:
        if self.status != QuizStatus.IN_PROGRESS or self.session is None:
            return None
        return self.session.current_question

    async def start(self) -> QuizStatus:
        """Fetch the total count, then the first batch of questions."""
        generation = self.generation
        self.status = QuizStatus.LOADING_TOTAL
        self.total_error = None

        try:
            total_count = await self.cache.fetch(
                TOTAL_COUNT_KEY, self.client.fetch_total_count
            )
        except CatalogError as e:
            if generation != self.generation:
                logger.debug(f"Ignoring count failure from stale generation {generation}: {e}")
                return self.status
            self.total_error = str(e)
            self.status = QuizStatus.FAILED
            logger.warning(f"Could not fetch total count: {e}")
            return self.status

        # A restart while the count was loading owns the round now
        if generation != self.generation:
            logger.debug(f"Start from generation {generation} superseded by {self.generation}")
            return self.status

        self.total_count = total_count
        await self.load_questions()
        return self.status

    async def load_questions(self) -> QuizStatus:
        """Generate a batch for the current generation."""
        if self.total_count is None:
            logger.debug("Question load skipped: total count unknown")
            return self.status

        generation = self.generation
        total_count = self.total_count
        self.status = QuizStatus.LOADING_QUESTIONS
        self.session = None

        try:
            questions = await self.cache.fetch(
                QUIZ_KEY_PREFIX + (generation,),
                lambda: self.generator.generate_questions(total_count),
            )
        except (CatalogError, QuizError) as e:
            if generation != self.generation:
                logger.debug(f"Ignoring failure from stale generation {generation}: {e}")
                return self.status
            self.questions_error = str(e)
            self.status = QuizStatus.FAILED
            logger.warning(f"Could not generate questions: {e}")
            return self.status

        if generation != self.generation:
            self.cache.invalidate(QUIZ_KEY_PREFIX + (generation,))
            logger.debug(
                f"Dropping batch from generation {generation}, now at {self.generation}"
            )
            return self.status

        self.session = QuizSession(questions=questions, generation=generation)
        self.status = QuizStatus.IN_PROGRESS
        logger.info(f"Round {generation} ready with {len(questions)} questions")
        return self.status

    def answer(self, selected_option: str) -> Optional[bool]:
        """
        Answer the current question.

        Args:
            selected_option: The option text the player picked

        Returns:
            True/False for a right/wrong answer, None if no question is
            active and nothing changed
        """
        if self.status != QuizStatus.IN_PROGRESS or self.session is None:
            logger.debug(f"Answer ignored in state {self.status.value}")
            return None

        correct = self.session.record_answer(selected_option)

        if self.session.is_complete:
            self.status = QuizStatus.COMPLETED
            logger.info(f"Round {self.session.generation} completed: {self.session.score}/{self.session.total}")

        return correct

    async def restart(self) -> QuizStatus:
        """Throw the session away and load a new batch."""
        self.generation += 1
        self.cache.invalidate(QUIZ_KEY_PREFIX)
        self.session = None
        self.questions_error = None
        logger.info(f"Restarting quiz, generation {self.generation}")

        if self.total_count is None:
            return await self.start()
        return await self.load_questions()

    def snapshot(self) -> dict:
        """Plain-dict view of the controller for front ends and logs."""
        return {
            "status": self.status.value,
            "generation": self.generation,
            "total_count": self.total_count,
            "current_index": self.session.current_index if self.session else 0,
            "score": self.session.score if self.session else 0,
            "questions": self.session.total if self.session else 0,
            "error": self.error,
        }
