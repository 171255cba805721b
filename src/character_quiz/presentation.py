"""
Presentation layer

Turns controller state into terminal screens and routes player input back
to the controller. Four screens: loading, error, question and summary.

The question card hides its options until the character image has
loaded, so the choices never show up ahead of the picture.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .controller import QuizController, QuizStatus
from .quiz.schema import Question
from .theme import Theme, ThemeStore
from .config import config

logger = logging.getLogger(__name__)

BOX_WIDTH = 62
RESET = "\033[0m"

# ANSI colours per concrete theme
PALETTES: dict[Theme, dict[str, str]] = {
    Theme.DARK: {
        "title": "\033[96m",    # Bright cyan
        "text": "\033[97m",     # Bright white
        "muted": "\033[90m",    # Grey
        "option": "\033[93m",   # Yellow
        "error": "\033[91m",    # Red
        "success": "\033[92m",  # Green
    },
    Theme.LIGHT: {
        "title": "\033[34m",    # Blue
        "text": "\033[30m",     # Black
        "muted": "\033[37m",    # Light grey
        "option": "\033[35m",   # Magenta
        "error": "\033[31m",    # Red
        "success": "\033[32m",  # Green
    },
}

Line = tuple[str, str]  # (text, colour role)


def _box(lines: list[Line], palette: Optional[dict[str, str]] = None) -> str:
    """Draw lines inside a box, colouring each after padding.

    Lines are never cut. A line wider than BOX_WIDTH widens the whole box.
    """
    inner = max([BOX_WIDTH - 4] + [len(text) for text, _ in lines])

    out = ["┌" + "─" * (inner + 2) + "┐"]
    for text, role in lines:
        padded = text.ljust(inner)
        if palette and text:
            padded = f"{palette[role]}{padded}{RESET}"
        out.append(f"│ {padded} │")
    out.append("└" + "─" * (inner + 2) + "┘")
    return "\n".join(out)


@dataclass
class QuestionCard:
    """A question on screen plus whether its image has finished loading."""
    question: Question
    image_loaded: bool = False

    def mark_image_loaded(self):
        self.image_loaded = True

    @property
    def visible_options(self) -> tuple[str, ...]:
        """Options to draw; empty until the image is in."""
        return self.question.options if self.image_loaded else ()


def render_loading(palette: Optional[dict[str, str]] = None) -> str:
    return _box([("", "text"), ("Loading quiz...", "title"), ("", "text")], palette)


def render_error(message: str, palette: Optional[dict[str, str]] = None) -> str:
    return _box([
        ("", "text"),
        (f"Error: {message}", "error"),
        ("", "text"),
        ("[r] try again   [q] quit", "muted"),
    ], palette)


def render_question(
    card: QuestionCard,
    score: int,
    index: int,
    total: int,
    palette: Optional[dict[str, str]] = None,
) -> str:
    """
    Draw the active question.

    Args:
        card: Question card (options hidden until image_loaded)
        score: Points so far
        index: 0-based question index
        total: Questions in the round
        palette: ANSI colours, None for plain text
    """
    lines: list[Line] = [
        ("CHARACTER QUIZ", "title"),
        (f"Score: {score}", "text"),
        ("─" * (BOX_WIDTH - 4), "muted"),
        (f"Image: {card.question.image}", "text"),
        ("", "text"),
    ]

    if card.image_loaded:
        for number, option in enumerate(card.visible_options, start=1):
            lines.append((f"  [{number}] {option}", "option"))
    else:
        lines.append(("Loading image...", "muted"))

    lines.extend([
        ("─" * (BOX_WIDTH - 4), "muted"),
        (f"Question {index + 1} of {total}", "muted"),
    ])
    return _box(lines, palette)


def render_summary(score: int, total: int, palette: Optional[dict[str, str]] = None) -> str:
    return _box([
        ("", "text"),
        ("Quiz Completed!", "success"),
        (f"Your score: {score} / {total}", "text"),
        ("", "text"),
        ("[r] play again   [q] quit", "muted"),
    ], palette)


class QuizView:
    """
    Binds a controller to the screens.

    Tracks the card for the current question and forwards choices to
    the controller once the card's options are visible.
    """

    def __init__(
        self,
        controller: QuizController,
        theme_store: Optional[ThemeStore] = None,
        color: Optional[bool] = None,
        prefers_dark: bool = True,
    ):
        self.controller = controller
        self.theme_store = theme_store or ThemeStore()
        self.color = config.ui.color if color is None else color
        self.prefers_dark = prefers_dark
        self.card: Optional[QuestionCard] = None
        self._card_key: Optional[tuple[int, int]] = None

    @property
    def palette(self) -> Optional[dict[str, str]]:
        if not self.color:
            return None
        return PALETTES[self.theme_store.resolve(self.prefers_dark)]

    def _sync_card(self) -> Optional[QuestionCard]:
        """New card whenever the question on screen changes."""
        question = self.controller.current_question
        if question is None:
            self.card = None
            self._card_key = None
            return None

        key = (self.controller.generation, self.controller.session.current_index)
        if key != self._card_key:
            self.card = QuestionCard(question)
            self._card_key = key
        return self.card

    def render(self) -> str:
        controller = self.controller
        palette = self.palette

        if controller.status.is_loading or controller.status is QuizStatus.IDLE:
            return render_loading(palette)

        if controller.error:
            return render_error(controller.error, palette)

        session = controller.session
        if controller.status is QuizStatus.COMPLETED and session is not None:
            return render_summary(session.score, session.total, palette)

        card = self._sync_card()
        if card is None or session is None:
            return render_loading(palette)
        return render_question(card, session.score, session.current_index, session.total, palette)

    def on_image_loaded(self) -> bool:
        """Image-load event for the current card. Returns False if there is no card."""
        card = self._sync_card()
        if card is None:
            return False
        card.mark_image_loaded()
        return True

    def choose(self, index: int) -> Optional[bool]:
        """
        Pick option number index (0-based) on the current card.

        Returns:
            Controller's verdict, or None when the option isn't on screen
        """
        card = self._sync_card()
        if card is None or not card.image_loaded:
            logger.debug("Choice ignored: options not shown yet")
            return None

        options = card.visible_options
        if not 0 <= index < len(options):
            logger.debug(f"Choice {index} out of range")
            return None

        return self.controller.answer(options[index])

    async def play_again(self) -> QuizStatus:
        self.card = None
        self._card_key = None
        return await self.controller.restart()

    def toggle_theme(self) -> Theme:
        return self.theme_store.toggle(self.prefers_dark)
