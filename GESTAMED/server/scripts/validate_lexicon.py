from __future__ import annotations

import argparse
import sys
import time

from GESTAMED.server.utils.configurations import server_settings
from GESTAMED.server.utils.constants import TRIMESTERS
from GESTAMED.server.utils.exceptions import LexiconError
from GESTAMED.server.utils.logger import logger
from GESTAMED.server.utils.services.clinical.compatibility import classify_status
from GESTAMED.server.utils.services.clinical.lexicon import load_drug_lexicon


# -----------------------------------------------------------------------------
def parse_arguments() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate the drug lexicon file")
    parser.add_argument(
        "--path",
        type=str,
        default=None,
        help="Lexicon JSON file (defaults to the configured lexicon path)",
    )
    return parser.parse_args()


###############################################################################
if __name__ == "__main__":
    args = parse_arguments()
    path = args.path or server_settings.lexicon.path
    start = time.perf_counter()
    logger.info("Validating drug lexicon at %s", path)
    try:
        lexicon = load_drug_lexicon(path)
    except LexiconError as exc:
        logger.error("Drug lexicon is invalid: %s", exc)
        sys.exit(1)

    for record in lexicon:
        levels = [
            classify_status(record.status_for(trimester)).value
            for trimester in TRIMESTERS
        ]
        logger.info(
            "%s: %s (%d synonyms)",
            record.key,
            ", ".join(levels),
            len(record.synonyms),
        )

    elapsed = time.perf_counter() - start
    logger.info(
        "Lexicon validated: %d drugs, %d synonyms in %.2f seconds",
        len(lexicon),
        lexicon.synonym_count(),
        elapsed,
    )
