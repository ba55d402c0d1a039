#!/usr/bin/env python3
"""Compare exported Workshop listings from the command line.

Reads local HTML exports, prints the same JSON the /modlist/compare endpoint
returns, and optionally enriches every found id through the batched
Workshop lookup.

Usage:
    python -m scripts.compare_modlists --before old.html --after new.html
    python -m scripts.compare_modlists --before a.html b.html --details
    python -m scripts.compare_modlists --after collection.html --output diff.json
"""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import structlog

structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    # stdout carries the JSON result
    logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
)

from workshop_diff.core.exceptions import ClientInputError, UpstreamCallError  # noqa: E402
from workshop_diff.modules.modlist.schemas import FileContent  # noqa: E402
from workshop_diff.modules.modlist.service import compare_groups  # noqa: E402
from workshop_diff.modules.workshop.client import WorkshopClient  # noqa: E402
from workshop_diff.modules.workshop.service import lookup_details  # noqa: E402

logger = structlog.get_logger()


def load_files(paths: list[Path]) -> list[FileContent]:
    return [FileContent(filename=p.name, content=p.read_bytes()) for p in paths]


async def run_compare(
    before: list[Path],
    after: list[Path],
    with_details: bool = False,
) -> dict[str, Any]:
    """Run group-compare and, if asked, the detail lookup for all found ids."""
    result = compare_groups(load_files(before), load_files(after)).model_dump(by_alias=True)

    if with_details:
        ids = list(dict.fromkeys(m["id"] for m in result["before"] + result["after"]))
        async with WorkshopClient() as client:
            result["details"] = await lookup_details(client, ids)

    return result


def main() -> None:
    parser = argparse.ArgumentParser(description="Compare exported Workshop mod lists")
    parser.add_argument("--before", nargs="*", type=Path, default=[], help="Listing files before the change")
    parser.add_argument("--after", nargs="*", type=Path, default=[], help="Listing files after the change")
    parser.add_argument(
        "--details",
        action="store_true",
        help="Also fetch catalog details for every found mod",
    )
    parser.add_argument("--output", type=Path, help="Write JSON here instead of stdout")
    args = parser.parse_args()

    try:
        result = asyncio.run(run_compare(args.before, args.after, with_details=args.details))
    except ClientInputError as exc:
        parser.error(exc.message)
    except UpstreamCallError as exc:
        logger.error("workshop_lookup_failed", error=exc.message, batch_index=exc.batch_index)
        sys.exit(1)

    text = json.dumps(result, indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(text, encoding="utf-8")
        logger.info("result_written", path=str(args.output))
    else:
        print(text)


if __name__ == "__main__":
    main()
