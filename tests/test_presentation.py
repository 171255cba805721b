"""
Tests for screens and the quiz view.
"""

import random

import pytest

from character_quiz.catalog import MockCatalogClient
from character_quiz.controller import QuizController, QuizStatus
from character_quiz.presentation import (
    PALETTES,
    QuestionCard,
    QuizView,
    render_error,
    render_loading,
    render_question,
    render_summary,
)
from character_quiz.quiz import Question, QuestionGenerator
from character_quiz.theme import Theme, ThemeStore

QUESTION = Question(
    image="https://example.invalid/avatar/1.jpeg",
    correct_name="Rick Sanchez",
    options=("Morty Smith", "Rick Sanchez", "Summer Smith", "Beth Smith", "Jerry Smith"),
)


def make_view(client: MockCatalogClient = None, **kwargs) -> QuizView:
    client = client or MockCatalogClient(total_count=826)
    controller = QuizController(client, generator=QuestionGenerator(client, rng=random.Random(2)))
    return QuizView(controller, color=False, **kwargs)


class TestScreens:
    """Tests for the render functions."""

    def test_loading(self):
        assert "Loading quiz..." in render_loading()

    def test_error_verbatim(self):
        screen = render_error("Failed to fetch total character count.")

        assert "Error: Failed to fetch total character count." in screen

    def test_question_hides_options_until_image_loads(self):
        card = QuestionCard(QUESTION)

        before = render_question(card, score=2, index=1, total=5)
        card.mark_image_loaded()
        after = render_question(card, score=2, index=1, total=5)

        assert "Loading image..." in before
        assert "Morty Smith" not in before
        assert "Loading image..." not in after
        for number, option in enumerate(QUESTION.options, start=1):
            assert f"[{number}] {option}" in after
        assert "Score: 2" in after
        assert "Question 2 of 5" in after
        assert QUESTION.image in after

    def test_summary(self):
        screen = render_summary(3, 5)

        assert "Quiz Completed!" in screen
        assert "Your score: 3 / 5" in screen

    def test_box_lines_same_width(self):
        card = QuestionCard(QUESTION, image_loaded=True)
        lines = render_question(card, 0, 0, 5).splitlines()

        assert len({len(line) for line in lines}) == 1

    def test_long_error_widens_box(self):
        message = (
            "Failed to fetch total character count. (ConnectError) "
            "[Errno 111] Connection refused while contacting rickandmortyapi.com"
        )
        lines = render_error(message).splitlines()

        assert any(f"Error: {message}" in line for line in lines)
        assert len({len(line) for line in lines}) == 1
        assert len(lines[0]) > 62

    def test_error_with_exception_name_verbatim(self):
        screen = render_error("Failed to fetch total character count. (ConnectError)")

        assert "Error: Failed to fetch total character count. (ConnectError)" in screen

    def test_live_image_url_kept_whole(self):
        url = "https://rickandmortyapi.com/api/character/avatar/361.jpeg"
        question = Question(image=url, correct_name=QUESTION.correct_name, options=QUESTION.options)
        card = QuestionCard(question, image_loaded=True)

        lines = render_question(card, 0, 0, 5).splitlines()

        assert any(f"Image: {url}" in line for line in lines)
        assert len({len(line) for line in lines}) == 1

    def test_palette_colours(self):
        screen = render_summary(5, 5, PALETTES[Theme.DARK])

        assert PALETTES[Theme.DARK]["success"] in screen
        assert "\033[0m" in screen


class TestQuestionCard:
    """Tests for the image-load gate."""

    def test_visible_options(self):
        card = QuestionCard(QUESTION)

        assert card.visible_options == ()
        card.mark_image_loaded()
        assert card.visible_options == QUESTION.options


class TestQuizView:
    """Tests for QuizView."""

    def test_idle_renders_loading(self):
        view = make_view()

        assert "Loading quiz..." in view.render()

    @pytest.mark.asyncio
    async def test_choice_ignored_before_image_load(self):
        view = make_view()
        await view.controller.start()

        assert view.choose(0) is None
        assert view.controller.session.current_index == 0

    @pytest.mark.asyncio
    async def test_choose_correct_option(self):
        view = make_view()
        await view.controller.start()
        question = view.controller.current_question

        view.on_image_loaded()
        result = view.choose(question.options.index(question.correct_name))

        assert result is True
        assert view.controller.session.score == 1
        assert view.controller.session.current_index == 1

    @pytest.mark.asyncio
    async def test_new_question_needs_new_image_load(self):
        view = make_view()
        await view.controller.start()

        view.on_image_loaded()
        view.choose(0)

        assert "Loading image..." in view.render()
        assert view.choose(0) is None

    @pytest.mark.asyncio
    async def test_out_of_range_choice(self):
        view = make_view()
        await view.controller.start()
        view.on_image_loaded()

        assert view.choose(5) is None
        assert view.choose(-1) is None
        assert view.controller.session.current_index == 0

    @pytest.mark.asyncio
    async def test_summary_and_play_again(self):
        view = make_view()
        await view.controller.start()
        for _ in range(5):
            view.on_image_loaded()
            view.choose(0)

        assert view.controller.status == QuizStatus.COMPLETED
        assert "Quiz Completed!" in view.render()
        assert view.on_image_loaded() is False

        status = await view.play_again()

        assert status == QuizStatus.IN_PROGRESS
        assert "Question 1 of 5" in view.render()

    @pytest.mark.asyncio
    async def test_error_screen(self):
        view = make_view(MockCatalogClient(total_count_status=500))
        await view.controller.start()

        assert "Error: Failed to fetch total character count." in view.render()

    def test_toggle_theme_changes_palette(self):
        client = MockCatalogClient()
        store = ThemeStore(default_theme="dark")
        view = QuizView(QuizController(client), theme_store=store, color=True)

        assert view.palette is PALETTES[Theme.DARK]
        view.toggle_theme()
        assert view.palette is PALETTES[Theme.LIGHT]

    def test_no_colour(self):
        view = make_view()

        assert view.palette is None
        assert "\033[" not in view.render()
