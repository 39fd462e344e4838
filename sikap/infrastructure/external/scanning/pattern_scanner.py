"""Placeholder malicious-content scanner based on fixed byte patterns.

Not an antivirus engine. It only recognises the EICAR test string and a few
script-injection markers; production deployments need a real engine behind
IContentScanner.
"""

import asyncio
import logging

from sikap.application.dtos.upload import ScanResult
from sikap.shared.telemetry.tracing import traced
from sikap.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

THREAT_DETECTED = "Malicious content detected"

# Matching is case-sensitive, so EICAR is listed in its canonical upper-case
# form as well as lower-case.
DEFAULT_PATTERNS: tuple[str, ...] = (
    "X5O!P%@AP[4\\PZX54(P^)7CC)7}$EICAR-STANDARD-ANTIVIRUS-TEST-FILE!$H+H*",
    "x5o!p%@ap[4\\pzx54(p^)7cc)7}$eicar-standard-antivirus-test-file!$h+h*",
    "javascript:",
    "<script",
    "eval(",
)


class PatternContentScanner:
    """Hex-encodes the buffer and looks for the hex of each known pattern."""

    def __init__(
        self,
        simulated_delay_seconds: float = 0.1,
        patterns: tuple[str, ...] = DEFAULT_PATTERNS,
    ) -> None:
        self.simulated_delay_seconds = simulated_delay_seconds
        self._hex_patterns = tuple(
            (pattern, pattern.encode().hex()) for pattern in patterns
        )
        logger.warning(
            "PatternContentScanner is a placeholder heuristic, not an antivirus "
            "engine; configure a real scanner before production use"
        )

    @traced("content_scan")
    async def scan(self, data: bytes) -> ScanResult:
        """Return a dirty result on the first matching pattern, else clean."""
        if self.simulated_delay_seconds > 0:
            await asyncio.sleep(self.simulated_delay_seconds)
        content = data.hex()
        for pattern, hex_pattern in self._hex_patterns:
            if hex_pattern in content:
                # Matched pattern stays server-side.
                logger.warning("Content scan matched pattern %r", pattern)
                return ScanResult(
                    is_clean=False, scan_time=utc_now(), threat=THREAT_DETECTED
                )
        return ScanResult(is_clean=True, scan_time=utc_now())
