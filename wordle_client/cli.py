"""
Wordle Client CLI - Command-line interface.

Usage:
    wordle-client play      Play in the terminal
    wordle-client serve     Run the HTTP backend for a browser front end

In `play`, every line you enter is a run of key presses followed by Enter:
letters type, "-" is backspace. ":new" starts a new game, ":quit" exits.
"""

import argparse
import logging
import sys

from .config import Settings


logger = logging.getLogger(__name__)

BACKSPACE_CHAR = "-"


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Wordle Client - play against a remote evaluator",
        prog="wordle-client",
    )
    parser.add_argument("--api-url", help="Evaluator base URL (overrides WORDLE_API_URL)")
    parser.add_argument("--log-level", help="Logging level (overrides WORDLE_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("play", help="Play in the terminal")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP backend")
    serve_parser.add_argument("--host", help="Bind host (overrides WORDLE_HOST)")
    serve_parser.add_argument("--port", type=int, help="Bind port (overrides WORDLE_PORT)")

    args = parser.parse_args(argv)

    try:
        settings = load_settings(args)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    logging.basicConfig(
        level=settings.log_level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(settings)
    elif args.command == "serve":
        cmd_serve(settings)
    else:
        parser.print_help()
        sys.exit(1)


def load_settings(args) -> Settings:
    """Environment settings with command-line overrides applied."""
    settings = Settings.from_env()
    overrides = {}
    if args.api_url:
        overrides["api_url"] = args.api_url.rstrip("/")
    if args.log_level:
        overrides["log_level"] = args.log_level
    if getattr(args, "host", None):
        overrides["host"] = args.host
    if getattr(args, "port", None):
        overrides["port"] = args.port
    if not overrides:
        return settings

    from dataclasses import replace
    return replace(settings, **overrides)


def line_to_keys(line: str) -> list[str]:
    """Turn one line of terminal input into physical key names."""
    keys = ["Backspace" if ch == BACKSPACE_CHAR else ch for ch in line.strip()]
    keys.append("Enter")
    return keys


def cmd_play(settings: Settings):
    """Interactive terminal game."""
    from rich.console import Console
    from .evaluator import HttpEvaluatorClient
    from .session import Session, InputDispatcher
    from .presentation import render_game

    console = Console()
    session = Session(
        HttpEvaluatorClient(settings.api_url, timeout=settings.request_timeout)
    )
    dispatcher = InputDispatcher(session)

    logger.info("Using evaluator at %s", settings.api_url)
    session.start()

    while True:
        state = session.snapshot()
        console.print(render_game(state))
        if state.status.is_over or state.halted:
            console.print("Type :new to play again or :quit to exit.")

        try:
            line = console.input("> ")
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        command = line.strip().lower()
        if command == ":quit":
            break
        if command == ":new":
            session.restart()
            continue

        for key in line_to_keys(line):
            dispatcher.key_down(key)


def cmd_serve(settings: Settings):
    """Run the HTTP backend with uvicorn."""
    import uvicorn
    from .api import create_app

    app = create_app(settings=settings)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
