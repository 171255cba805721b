"""
Tests for the command-line interface.
"""

import json
import random

import pytest

from character_quiz import cli
from character_quiz.catalog import MockCatalogClient
from character_quiz.controller import QuizController, QuizStatus
from character_quiz.presentation import QuizView
from character_quiz.quiz import QuestionGenerator
from character_quiz.theme import Theme, ThemeStore


class ScriptedInput:
    """Feeds canned answers to play(); quits when the script runs out."""

    def __init__(self, lines):
        self.lines = list(lines)

    async def __call__(self, prompt: str) -> str:
        return self.lines.pop(0) if self.lines else "q"


def make_view(client: MockCatalogClient = None) -> QuizView:
    client = client or MockCatalogClient(total_count=826)
    controller = QuizController(client, generator=QuestionGenerator(client, rng=random.Random(4)))
    return QuizView(controller, theme_store=ThemeStore(default_theme="dark"), color=False)


class TestPlay:
    """Tests for the interactive loop."""

    @pytest.mark.asyncio
    async def test_quit_immediately(self):
        view = make_view()
        output = []

        code = await cli.play(view, ScriptedInput(["q"]), output.append)

        assert code == 0
        assert view.controller.status == QuizStatus.IN_PROGRESS
        assert "Loading quiz..." in output[0]

    @pytest.mark.asyncio
    async def test_full_round(self):
        view = make_view()
        output = []

        await cli.play(view, ScriptedInput(["1", "2", "3", "4", "5"]), output.append)

        assert view.controller.status == QuizStatus.COMPLETED
        assert "Quiz Completed!" in output[-1]
        assert sum(1 for line in output if line in ("Correct!",) or line.startswith("Wrong!")) == 5

    @pytest.mark.asyncio
    async def test_restart_after_round(self):
        view = make_view()
        output = []

        await cli.play(view, ScriptedInput(["1"] * 5 + ["r"]), output.append)

        assert view.controller.status == QuizStatus.IN_PROGRESS
        assert view.controller.generation == 1
        assert "Question 1 of 5" in output[-1]

    @pytest.mark.asyncio
    async def test_bad_input(self):
        view = make_view()
        output = []

        await cli.play(view, ScriptedInput(["9", "hello", "r"]), output.append)

        assert "Pick a number from 1 to 5" in output
        assert output.count("Unknown command") == 2
        assert view.controller.session.current_index == 0

    @pytest.mark.asyncio
    async def test_toggle_theme(self):
        view = make_view()
        output = []

        await cli.play(view, ScriptedInput(["t"]), output.append)

        assert "Theme: light" in output
        assert view.theme_store.theme == Theme.LIGHT

    @pytest.mark.asyncio
    async def test_error_then_retry(self):
        client = MockCatalogClient(total_count_status=500)
        view = make_view(client)
        output = []

        async def read(prompt):
            # Catalog recovers before the player retries
            client.total_count_status = None
            return "r" if view.controller.status == QuizStatus.FAILED else "q"

        await cli.play(view, read, output.append)

        assert any("Error: Failed to fetch total character count." in screen for screen in output)
        assert view.controller.status == QuizStatus.IN_PROGRESS


class TestMain:
    """Tests for the argparse entry point."""

    def test_no_command(self, capsys):
        assert cli.main([]) == 1

    def test_questions_json(self, capsys):
        code = cli.main(["questions", "--mock", "--json"])

        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert len(data) == 5
        for question in data:
            assert question["correct_name"] in question["options"]
            assert len(set(question["options"])) == 5

    def test_questions_text(self, capsys):
        code = cli.main(["questions", "--mock"])

        out = capsys.readouterr().out
        assert code == 0
        assert "5 questions from 826 characters" in out
        assert out.count("✓") == 5

    def test_questions_fetch_error(self, capsys, monkeypatch):
        monkeypatch.setattr(cli, "make_client", lambda use_mock: MockCatalogClient(total_count_status=500))

        code = cli.main(["questions", "--mock"])

        assert code == 1
        assert "Failed to fetch total character count." in capsys.readouterr().err

    def test_play_quits_on_eof(self, monkeypatch):
        def raise_eof(prompt):
            raise EOFError

        monkeypatch.setattr("builtins.input", raise_eof)

        assert cli.main(["play", "--mock", "--no-color", "--theme", "light"]) == 0
