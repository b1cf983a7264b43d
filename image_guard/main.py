"""Command-line entry point: secure every unprotected Cloudflare image."""
from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Sequence

from image_guard.config import Settings, get_settings
from image_guard.models import RemediationReport
from image_guard.services.directory import ImageDirectoryClient
from image_guard.services.remediation import (
    RemediationError,
    RemediationOrchestrator,
    VerificationError,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-guard",
        description="Require signed URLs on every Cloudflare image that lacks them",
    )
    parser.add_argument("--cf-acct-id", default="", help="cloudflare account id")
    parser.add_argument("--cf-api-key", default="", help="cloudflare api key")
    return parser


async def remediate(account_id: str, api_key: str, settings: Settings) -> RemediationReport:
    async with ImageDirectoryClient(
        account_id=account_id,
        api_key=api_key,
        base_url=settings.api_base_url,
        timeout=settings.request_timeout,
    ) as directory:
        return await RemediationOrchestrator(directory).run()


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.cf_acct_id or not args.cf_api_key:
        parser.print_help()
        return 0

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)

    try:
        report = asyncio.run(remediate(args.cf_acct_id, args.cf_api_key, settings))
    except VerificationError as exc:
        failed = sum(1 for o in exc.outcomes if not o.secured)
        logger.critical("%s (%d secured, %d failed)", exc, len(exc.outcomes) - failed, failed)
        return 1
    except RemediationError as exc:
        logger.critical("%s", exc)
        return 1
    except Exception as exc:
        logger.critical("remediation run failed: %s", exc, exc_info=True)
        return 1

    logger.info(
        "secured %d images, %d failed, %d left unprotected",
        len(report.secured),
        len(report.failed),
        report.remaining_count,
    )
    logger.info("done")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
