"""
Quiz system for character-quiz

Question structures and the generator that builds them from the catalog.
"""

from .schema import (
    QUESTIONS_PER_ROUND,
    OPTIONS_PER_QUESTION,
    Question,
    QuizError,
    InsufficientCatalogError,
    QuestionGenerationError,
)
from .generator import QuestionGenerator, shuffle_options

__all__ = [
    "QUESTIONS_PER_ROUND",
    "OPTIONS_PER_QUESTION",
    "Question",
    "QuizError",
    "InsufficientCatalogError",
    "QuestionGenerationError",
    "QuestionGenerator",
    "shuffle_options",
]
