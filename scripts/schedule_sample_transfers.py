#!/usr/bin/env python3
"""Schedule generated sample transfers.

This script generates random, valid transfer requests and schedules them
through the transfer use cases, either against the transfer API
(``--api-url``) or against an in-memory repository, then prints a JSON
report: the formatted transfer and fee quote for each scheduled request, the
error for each rejected one.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from transfer_scheduler.config import ApiConfig, SchedulerConfig
from transfer_scheduler.exceptions import BusinessRuleError, RepositoryError, ValidationError
from transfer_scheduler.generators import TransferRequestGenerator
from transfer_scheduler.logging import get_logger, setup_logging
from transfer_scheduler.repositories import HttpTransferRepository, InMemoryTransferRepository
from transfer_scheduler.repositories.base import TransferRepository
from transfer_scheduler.serialization import rejection_report, schedule_report
from transfer_scheduler.service import TransferSchedulerService

logger = get_logger(__name__)


async def schedule_samples(repository: TransferRepository, count: int, seed: int | None) -> list[dict]:
    """Schedule ``count`` generated requests and return one report entry per request."""
    service = TransferSchedulerService(repository)
    generator = TransferRequestGenerator(seed=seed)
    reports = []

    for request in generator.generate_batch(count):
        quote = service.preview_fee(request.amount, request.transfer_date)
        logger.info(
            "Scheduling R$ %s in %d days (%s), expected fee R$ %s",
            request.amount,
            quote.days,
            quote.tier.describe(),
            quote.fee,
        )
        try:
            transfer = await service.schedule_transfer(request)
        except (ValidationError, BusinessRuleError) as exc:
            logger.warning("Transfer rejected: %s", exc)
            reports.append(rejection_report(request, exc))
            continue
        reports.append(schedule_report(transfer, quote, service.clock()))

    return reports


async def run(args: argparse.Namespace, config: SchedulerConfig) -> list[dict]:
    if args.api_url:
        api = ApiConfig(base_url=args.api_url, timeout_seconds=config.api.timeout_seconds)
        async with HttpTransferRepository(api) as repository:
            if args.clear:
                await repository.clear_all_transfers()
            return await schedule_samples(repository, args.count, args.seed)

    return await schedule_samples(InMemoryTransferRepository(), args.count, args.seed)


def main() -> None:
    """Main entry point."""
    config = SchedulerConfig.from_env()

    parser = argparse.ArgumentParser(description="Schedule generated sample transfers")
    parser.add_argument(
        "--count",
        type=int,
        default=10,
        help="Number of transfers to schedule (default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--api-url",
        type=str,
        default=None,
        help="Transfer API base URL (default: in-memory repository)",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete existing transfers on the API before scheduling",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help="Log level (default: INFO)",
    )
    args = parser.parse_args()

    setup_logging(level=args.log_level, format_type=config.log_format)

    try:
        reports = asyncio.run(run(args, config))
    except RepositoryError as exc:
        logger.error("Transfer service unavailable: %s", exc)
        sys.exit(1)

    print(json.dumps(reports, indent=2, ensure_ascii=False))
    scheduled = sum(1 for report in reports if report["status"] == "scheduled")
    logger.info("Scheduled %d of %d transfers", scheduled, args.count)


if __name__ == "__main__":
    main()
