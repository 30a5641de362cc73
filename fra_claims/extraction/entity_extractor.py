"""Label-anchored entity extraction over recognized claim text.

Recovers village names, claimant names, areas, and claim identifiers
from raw FORM-A text using one regular expression per entity kind.
"""

import asyncio
import re
from collections.abc import Awaitable, Callable

from fra_claims.ocr.models import EntityCandidates
from fra_claims.utils.config import ExtractionConfig
from fra_claims.utils.logger import get_logger

logger = get_logger(__name__)

SleepFn = Callable[[float], Awaitable[None]]

# Values stop at the end of the line so adjacent labels are not swallowed.
_ENTITY_PATTERNS: dict[str, re.Pattern[str]] = {
    "villages": re.compile(r"Village:[ \t]*([A-Za-z][A-Za-z \t]*)", re.IGNORECASE),
    "names": re.compile(
        r"(?:Claimant|Name):[ \t]*([A-Za-z][A-Za-z \t]*)", re.IGNORECASE
    ),
    "areas": re.compile(r"Area:[ \t]*([\d.]+)", re.IGNORECASE),
    "ids": re.compile(r"(?:Claim ID|ID):[ \t]*([A-Z0-9\-]+)", re.IGNORECASE),
}


def extract_matches(text: str) -> EntityCandidates:
    """Collect every entity match in left-to-right order.

    Args:
        text: Raw text to scan.

    Returns:
        Candidates per entity kind; empty lists when nothing matches.
    """
    found: dict[str, list[str]] = {}
    for kind, pattern in _ENTITY_PATTERNS.items():
        found[kind] = [m.group(1).strip() for m in pattern.finditer(text)]
    return EntityCandidates(**found)


class EntityExtractor:
    """Mock NLP entity extractor with simulated processing latency.

    Args:
        config: Extraction configuration holding the artificial delay.
        sleep: Coroutine function used for the delay.
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self.config = config or ExtractionConfig()
        self._sleep = sleep

    async def extract(self, text: str) -> EntityCandidates:
        """Extract entity candidates from text after the configured delay."""
        await self._sleep(self.config.delay_s)
        candidates = extract_matches(text)
        logger.debug(
            "Entity extraction found %d villages, %d names, %d areas, %d ids",
            len(candidates.villages),
            len(candidates.names),
            len(candidates.areas),
            len(candidates.ids),
        )
        return candidates
