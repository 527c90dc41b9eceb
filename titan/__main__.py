"""
Interactive Gemini client for the terminal.

Usage: titan [URL]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import dirs
from .app import App
from .client import constants, exceptions, tofu
from .command import CommandError, gemini_url
from .terminal import Terminal, TerminalError

LOG_FILE_NAME = "titan.log"

logger = logging.getLogger(constants.LOGGER_NAME)


def _url_from_cli(argv: Optional[List[str]]) -> str:
    """
    Parse CLI arguments as the URL to open.
    :return: absolute URL.
    """

    parser = argparse.ArgumentParser(prog="titan")
    parser.add_argument(
        "url",
        nargs="?",
        default=constants.DEFAULT_URL,
        help="Gemini URL to open; gemini:// is assumed when no scheme is given",
    )
    args = parser.parse_args(argv)
    try:
        return gemini_url(args.url)
    except CommandError as command_error:
        parser.error(str(command_error))
        raise


def _configure_logger(log_path: Path, logger: logging.Logger):
    """
    Configure a logger to write to a file and use our desired output format.

    The terminal belongs to the viewport, so nothing is logged to the console.
    """
    # pylint: disable=redefined-outer-name
    logger.setLevel(logging.INFO)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the client.
    :return: exit code
    """
    url = _url_from_cli(argv)

    try:
        data_dir = dirs.ensure_data_dir()
        _configure_logger(data_dir / LOG_FILE_NAME, logger)
        store = tofu.SQLiteTrustStore.in_directory(data_dir)
    except (OSError, exceptions.StoreError) as startup_error:
        print(f"titan: {startup_error}", file=sys.stderr)
        return 1

    try:
        with Terminal() as terminal:
            App(tofu.TofuVerifier(store), terminal).run(url)
    except TerminalError as terminal_error:
        print(f"titan: {terminal_error}", file=sys.stderr)
        return 1
    finally:
        store.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
