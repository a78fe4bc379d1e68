"""
Main Entry Point

Command-line front end for the posts demo:

1. Set up logging
2. Fetch posts from the API on an asyncio event loop
3. Print the rendered screen (posts, or the error message)

Exits with 0 when posts were fetched, 1 on any failure and 130 when
interrupted.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config import config
from .api import APIClient
from .ui import PostsScreen


# Configure logging
def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Set up logging for the application."""
    # Ensure log directory exists
    config.log.log_directory.mkdir(parents=True, exist_ok=True)

    # Create logger
    logger = logging.getLogger("api_calling_methods")
    logger.setLevel(getattr(logging, log_level.upper()))

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    level = getattr(logging, log_level.upper())
    console_handler.setLevel(level)
    console_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S"
    )
    console_handler.setFormatter(console_format)

    # File handler
    file_handler = logging.FileHandler(
        config.log.log_file_path,
        mode='w',
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_format = logging.Formatter(config.log.log_format)
    file_handler.setFormatter(file_format)

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    return logger


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater, got {number}")
    return number


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch and list posts from JSONPlaceholder")
    parser.add_argument("--url", default=None,
                        help=f"Posts endpoint (default: {config.api.posts_url})")
    parser.add_argument("--limit", type=non_negative_int, default=None,
                        help="Only show the first N posts")
    parser.add_argument("--mode", choices=config.display.modes,
                        default=config.display.modes[0], help="Mode label to display")
    parser.add_argument("--log-level", default=config.log.log_level,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Console log level")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> PostsScreen:
    """Fetch once and return the screen holding the outcome."""
    screen = PostsScreen(client=APIClient(url=args.url), mode=args.mode)
    await screen.refresh()
    return screen


def main(argv: Optional[List[str]] = None):
    """Main entry point for the posts demo."""
    args = parse_args(argv)

    # Set up logging
    logger = setup_logging(args.log_level)

    try:
        screen = asyncio.run(run(args))
        print(screen.render(max_posts=args.limit))

        # Exit with appropriate code
        if screen.state.error_message is None:
            logger.info("Fetch completed successfully")
            sys.exit(0)
        else:
            logger.error("Fetch failed")
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)

    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
