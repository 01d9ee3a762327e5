"""
Smoke-run a browser session: open a target, print its title and URL, quit.

    python -m webdriver_facade --browser firefox --headless qa
"""

import argparse
import logging
import sys
from typing import List, Optional

from .core.browser_manager import BrowserManager
from .core.config_loader import ConfigLoader
from .exceptions import SessionError
from .utils.logger import setup_logger

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webdriver-facade",
        description="Open a URL or environment (qa, staging, prod) in a configured browser session.",
    )
    parser.add_argument("target", help="URL or symbolic environment name")
    parser.add_argument("--browser", choices=["chrome", "firefox", "edge"], default=None,
                        help="Browser kind (default from settings / $BROWSER)")
    parser.add_argument("--headless", action="store_true", default=None, help="Run the browser headless")
    parser.add_argument("--remote", metavar="URL", default=None, help="Run on a remote grid at URL")
    parser.add_argument("--settings", metavar="PATH", default=None, help="Path to settings.json")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    loader = ConfigLoader(settings_file=args.settings)
    setup_logger(loader)

    manager = BrowserManager(config_loader=loader)
    try:
        manager.initialize(
            args.browser,
            headless=args.headless,
            remote=True if args.remote else None,
            remote_url=args.remote,
        )
        url = manager.navigate_to(args.target)
        print(f"Opened: {url}")
        print(f"Title: {manager.get_page_title()}")
        print(f"Current URL: {manager.get_current_url()}")
    except SessionError as e:
        logger.error(str(e))
        return 2
    finally:
        manager.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
