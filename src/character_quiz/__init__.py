"""
character-quiz: guess-the-character trivia over a public REST catalog.

Fetches characters asynchronously, builds five-option questions and runs
a five-question round with score tracking and restart.
"""

__version__ = "0.1.0"

from .catalog import CatalogClient, Entity, FetchError, HttpCatalogClient, MockCatalogClient, get_client
from .cache import QueryCache
from .config import config
from .controller import QuizController, QuizSession, QuizStatus
from .presentation import QuestionCard, QuizView
from .quiz import Question, QuestionGenerator, shuffle_options
from .theme import Theme, ThemeStore

__all__ = [
    # Catalog
    "CatalogClient",
    "Entity",
    "FetchError",
    "HttpCatalogClient",
    "MockCatalogClient",
    "get_client",
    # Quiz
    "Question",
    "QuestionGenerator",
    "shuffle_options",
    # Controller
    "QueryCache",
    "QuizController",
    "QuizSession",
    "QuizStatus",
    # Presentation
    "QuestionCard",
    "QuizView",
    "Theme",
    "ThemeStore",
    # Config
    "config",
]
