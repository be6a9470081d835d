from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional

from pydantic import ValidationError

from .config import Settings
from .services.update_service import update_page
from .services.validation_service import validate_file

logger = logging.getLogger("pagefeeds")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run_update(settings: Settings) -> int:
    try:
        asyncio.run(update_page(settings))
    except Exception:
        logger.exception("Fatal error during page update")
        return 1
    return 0


def run_check(settings: Settings) -> int:
    report = validate_file(settings.page_path)
    print(report.render(), end="")
    return 0 if report.ok else 1


def _load_settings() -> Optional[Settings]:
    try:
        return Settings.from_env()
    except ValidationError as exc:
        print(f"Invalid configuration:\n{exc}", file=sys.stderr)
        return None


def update_main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Refresh the feed-driven sections of the page and stamp the update time"
    )
    parser.parse_args(argv)
    settings = _load_settings()
    if settings is None:
        return 1
    configure_logging(settings.log_level)
    return run_update(settings)


def check_main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Check that the page still has all required content")
    parser.parse_args(argv)
    settings = _load_settings()
    if settings is None:
        return 1
    return run_check(settings)


if __name__ == "__main__":
    raise SystemExit(update_main())
