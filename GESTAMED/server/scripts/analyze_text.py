from __future__ import annotations

import argparse
import json
import sys
import time
from typing import Any

from GESTAMED.server.utils.exceptions import InvalidTrimesterError
from GESTAMED.server.utils.logger import logger
from GESTAMED.server.utils.services.analysis import (
    CompatibilityService,
    get_compatibility_service,
)


# -----------------------------------------------------------------------------
def parse_arguments() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check pregnancy compatibility of the drugs mentioned in a text"
    )
    parser.add_argument(
        "source",
        nargs="?",
        default=None,
        help="Plain-text file to analyze (reads standard input when omitted)",
    )
    parser.add_argument(
        "--trimester",
        "-t",
        default=None,
        help="Pregnancy trimester: first, second or third",
    )
    return parser.parse_args()


# -----------------------------------------------------------------------------
def analyze_source(
    service: CompatibilityService, source: str | None, trimester: str | None
) -> dict[str, Any]:
    if source is None:
        return service.serialize(service.analyze_text(sys.stdin.read(), trimester))
    with open(source, "r", encoding="utf-8") as handle:
        text = handle.read()
    return service.serialize(service.analyze_text(text, trimester))


###############################################################################
if __name__ == "__main__":
    args = parse_arguments()
    start = time.perf_counter()
    service = get_compatibility_service()
    try:
        payload = analyze_source(service, args.source, args.trimester)
    except InvalidTrimesterError as exc:
        logger.error("%s", exc)
        sys.exit(2)

    print(json.dumps(payload, ensure_ascii=False, indent=2))
    elapsed = time.perf_counter() - start
    logger.info("Analysis completed in %.2f seconds", elapsed)
