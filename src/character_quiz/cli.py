"""
Command-line interface for character-quiz

Plays a round in the terminal, or prints a generated batch of questions.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Awaitable, Callable, List, Optional

from .catalog import get_client, CatalogClient, CatalogError
from .config import config
from .controller import QuizController, QuizStatus
from .presentation import QuizView
from .quiz.generator import QuestionGenerator
from .quiz.schema import Question, QuizError
from .theme import Theme, ThemeStore

ReadLine = Callable[[str], Awaitable[str]]
Write = Callable[[str], None]


def setup_logging(verbose: bool = False):
    """Configure the root logger once for the CLI process."""
    level = logging.DEBUG if verbose else getattr(logging, config.logging.level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=config.logging.format, stream=sys.stderr)


async def read_line(prompt: str) -> str:
    """input() off the event loop thread. EOF reads as quit."""
    try:
        return await asyncio.to_thread(input, prompt)
    except EOFError:
        return "q"


def make_client(use_mock: bool) -> CatalogClient:
    return get_client("mock" if use_mock else "http")


def format_question(question: Question, number: int) -> str:
    """Format a question for plain terminal output."""
    lines = [f"{number}. {question.image}"]
    for option in question.options:
        marker = "✓" if option == question.correct_name else " "
        lines.append(f"   {marker} {option}")
    return "\n".join(lines)


async def play(view: QuizView, read: ReadLine = read_line, write: Write = print) -> int:
    """
    Run the interactive loop until the player quits.

    Commands: 1-5 answer, t toggle theme, r restart (after the round or an
    error), q quit.
    """
    controller = view.controller

    if controller.status is QuizStatus.IDLE:
        write(view.render())
        await controller.start()

    while True:
        status = controller.status

        if status is QuizStatus.IN_PROGRESS:
            # The URL is printed as-is, nothing to wait for
            view.on_image_loaded()
        write(view.render())

        choice = (await read("> ")).strip().lower()

        if choice == "q":
            return 0

        if choice == "t":
            theme = view.toggle_theme()
            write(f"Theme: {theme.value}")
            continue

        if choice == "r" and status in (QuizStatus.COMPLETED, QuizStatus.FAILED):
            await view.play_again()
            continue

        if status is QuizStatus.IN_PROGRESS and choice.isdigit():
            question = controller.current_question
            result = view.choose(int(choice) - 1)
            if result is None:
                write(f"Pick a number from 1 to {len(question.options)}")
            elif result:
                write("Correct!")
            else:
                write(f"Wrong! It was {question.correct_name}.")
            continue

        write("Unknown command")


async def run_play(args) -> int:
    store = ThemeStore()
    if args.theme:
        store.set_theme(args.theme)

    async with make_client(args.mock) as client:
        controller = QuizController(client)
        view = QuizView(controller, theme_store=store, color=not args.no_color)
        return await play(view)


async def run_questions(args) -> int:
    async with make_client(args.mock) as client:
        try:
            total = await client.fetch_total_count()
            questions = await QuestionGenerator(client).generate_questions(total)
        except (CatalogError, QuizError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if args.json:
        print(json.dumps([q.to_dict() for q in questions], indent=2))
    else:
        print(f"\n{len(questions)} questions from {total} characters\n")
        for number, question in enumerate(questions, start=1):
            print(format_question(question, number))
        print()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="character-quiz",
        description="Guess the character from their picture",
        epilog="Example: character-quiz play --theme light"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging to stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a five-question round")
    play_parser.add_argument(
        "--mock",
        action="store_true",
        help="Use a built-in fake catalog (no network)"
    )
    play_parser.add_argument(
        "--theme",
        choices=[t.value for t in Theme],
        help=f"Colour theme (default: {config.ui.default_theme})"
    )
    play_parser.add_argument(
        "--no-color",
        action="store_true",
        default=not config.ui.color,
        help="Plain output without ANSI colours"
    )

    # Questions command
    questions_parser = subparsers.add_parser("questions", help="Generate one batch and print it")
    questions_parser.add_argument(
        "--mock",
        action="store_true",
        help="Use a built-in fake catalog (no network)"
    )
    questions_parser.add_argument(
        "--json",
        action="store_true",
        help="Output questions as JSON"
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)

    if args.command == "play":
        return asyncio.run(run_play(args))
    return asyncio.run(run_questions(args))


if __name__ == "__main__":
    sys.exit(main())
