"""
Question Generator - Builds multiple-choice questions from the catalog

Each question picks one character at random as the answer, draws four
other characters as wrong answers and shuffles the five names together.
A round runs five of these concurrently.
"""

import asyncio
import logging
import random
from typing import Optional, Sequence, TypeVar

from ..catalog.base import CatalogClient, Entity
from ..config import config
from .schema import (
    INCORRECT_OPTIONS,
    OPTIONS_PER_QUESTION,
    QUESTIONS_PER_ROUND,
    InsufficientCatalogError,
    Question,
    QuestionGenerationError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def shuffle_options(options: Sequence[T], rng: Optional[random.Random] = None) -> list[T]:
    """
    Return a uniformly shuffled copy of options (Fisher-Yates).

    Args:
        options: Items to shuffle; left untouched
        rng: Random source, a fresh unseeded one if omitted

    Returns:
        New list with the same items in random order
    """
    rng = rng or random.Random()
    items = list(options)
    for i in range(len(items) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        items[i], items[j] = items[j], items[i]
    return items


class QuestionGenerator:
    """
    Generates quiz questions from a catalog client.

    Randomness is deliberately unseeded; pass an rng to make it
    reproducible in tests.
    """

    def __init__(
        self,
        client: CatalogClient,
        rng: Optional[random.Random] = None,
        max_draws: Optional[int] = None,
    ):
        """
        Initialize the generator.

        Args:
            client: Catalog to fetch characters from
            rng: Random source (defaults to an unseeded random.Random)
            max_draws: Cap on id draws per question (defaults to config)
        """
        self.client = client
        self.rng = rng or random.Random()
        self.max_draws = config.quiz.max_draws_per_question if max_draws is None else max_draws

    def _draw_id(self, total_count: int) -> int:
        """Uniform id in [1, total_count]."""
        return int(self.rng.random() * total_count) + 1

    async def generate_question(self, total_count: int) -> Question:
        """
        Build one question.

        Args:
            total_count: Number of characters in the catalog

        Returns:
            Question with the answer's image and five shuffled names

        Raises:
            InsufficientCatalogError: If total_count < 5
            QuestionGenerationError: If the draw limit runs out
            CatalogError: Propagated from the client
        """
        if total_count < OPTIONS_PER_QUESTION:
            raise InsufficientCatalogError(
                f"Catalog has {total_count} characters, need at least {OPTIONS_PER_QUESTION}"
            )

        correct_id = self._draw_id(total_count)
        correct = await self.client.fetch_entity(correct_id)

        # Ids we've already drawn, including duplicates-by-name we threw away
        seen_ids = {correct_id}
        incorrect: list[Entity] = []
        names = {correct.name}
        draws = 0

        while len(incorrect) < INCORRECT_OPTIONS:
            if draws >= self.max_draws:
                raise QuestionGenerationError(
                    f"Found only {len(incorrect)} distinct wrong answers "
                    f"after {draws} draws from {total_count} characters"
                )
            draws += 1

            candidate_id = self._draw_id(total_count)
            if candidate_id in seen_ids:
                continue
            seen_ids.add(candidate_id)

            entity = await self.client.fetch_entity(candidate_id)
            if entity.name in names:
                logger.debug(f"Skipping id {candidate_id}: name {entity.name!r} already used")
                continue

            names.add(entity.name)
            incorrect.append(entity)

        options = shuffle_options(
            [correct.name] + [e.name for e in incorrect],
            self.rng,
        )

        logger.debug(f"Question for id {correct_id} built in {draws} draws")
        return Question(
            image=correct.image,
            correct_name=correct.name,
            options=tuple(options),
        )

    async def generate_questions(self, total_count: int) -> list[Question]:
        """
        Build a full round concurrently.

        All-or-nothing: the first failure fails the whole batch.

        Args:
            total_count: Number of characters in the catalog

        Returns:
            Five questions in request order
        """
        questions = await asyncio.gather(
            *[self.generate_question(total_count) for _ in range(QUESTIONS_PER_ROUND)]
        )
        logger.info(f"Generated {len(questions)} questions from {total_count} characters")
        return list(questions)
