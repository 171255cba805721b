"""
Quiz data structures

Defines questions and the errors raised while building them.
"""

from dataclasses import dataclass

# A round is always five questions of five options each
QUESTIONS_PER_ROUND = 5
OPTIONS_PER_QUESTION = 5
INCORRECT_OPTIONS = OPTIONS_PER_QUESTION - 1


class QuizError(Exception):
    """Base exception for question generation errors."""
    pass


class InsufficientCatalogError(QuizError):
    """Catalog is too small to fill a question with distinct options."""
    pass


class QuestionGenerationError(QuizError):
    """Could not find enough distinct wrong answers within the draw limit."""
    pass


@dataclass(frozen=True)
class Question:
    """
    One quiz prompt: a character image and five candidate names.

    Exactly one option equals correct_name.
    """
    image: str
    correct_name: str
    options: tuple[str, ...]

    def __post_init__(self):
        if self.correct_name not in self.options:
            raise ValueError(f"Correct answer {self.correct_name!r} missing from options")
        if len(set(self.options)) != len(self.options):
            raise ValueError(f"Duplicate options: {self.options!r}")

    def is_correct(self, option: str) -> bool:
        return option == self.correct_name

    def to_dict(self) -> dict:
        return {
            "image": self.image,
            "correct_name": self.correct_name,
            "options": list(self.options),
        }
