from __future__ import annotations

import glob
import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)

DEFAULT_EDID_GLOB = "/sys/class/drm/card*-{output}/edid"

DEFAULT_RESOLUTIONS = [
    "1920x1080@60",
    "1280x720@60",
    "1024x768@60",
    "1600x900@60",
    "1366x768@60",
]

# Matches timing lines in edid-decode output, e.g.
#   "DMT 0x52:  1920x1080   60.000000 Hz  16:9 ..."
#   "DTD 1:     1280x720    59.94 Hz ..."
_MODE_LINE = re.compile(r"(\d+)x(\d+)\s+(\d+(?:\.\d+)?) Hz")

_CANDIDATE = re.compile(r"^(\d+)x(\d+)(?:@(\d+(?:\.\d+)?)(?:Hz)?)?$")


@dataclass(frozen=True)
class Resolution:
    """A display mode chosen by the operator.

    `refresh` keeps the rate as written (e.g. "60", "59.94", "60.000000") so the
    candidate string the operator saw can be reproduced exactly.
    """

    width: int
    height: int
    refresh: Optional[str] = None

    @classmethod
    def parse(cls, candidate: str) -> "Resolution":
        m = _CANDIDATE.match(candidate.strip())
        if not m:
            raise ValueError(f"Not a resolution (expected WIDTHxHEIGHT[@RATE[Hz]]): {candidate!r}")
        width, height = int(m.group(1)), int(m.group(2))
        if width <= 0 or height <= 0:
            raise ValueError(f"Resolution must have positive dimensions: {candidate!r}")
        return cls(width=width, height=height, refresh=m.group(3))

    @property
    def size(self) -> str:
        return f"{self.width}x{self.height}"

    @property
    def refresh_hz(self) -> Optional[float]:
        return float(self.refresh) if self.refresh is not None else None

    def kernel_mode(self) -> str:
        """Mode for the kernel `video=` parameter (integer refresh only)."""
        if self.refresh_hz is None:
            return self.size
        return f"{self.size}@{round(self.refresh_hz)}"

    def wayfire_mode(self) -> str:
        """Mode for a Wayfire [output:*] section.

        Wayfire reads small rates as Hz and large ones as mHz, so fractional
        rates are written in mHz.
        """
        hz = self.refresh_hz
        if hz is None:
            return self.size
        if hz == int(hz):
            return f"{self.size}@{int(hz)}"
        return f"{self.size}@{round(hz * 1000)}"

    def randr_mode(self) -> str:
        """Mode for `wlr-randr --mode`."""
        if self.refresh is None:
            return self.size
        return f"{self.size}@{self.refresh}Hz"

    def __str__(self) -> str:
        return self.kernel_mode()


def parse_edid_modes(decoded: str) -> List[str]:
    """Extract `WIDTHxHEIGHT@RATEHz` candidates from decoded EDID text.

    Every matching line yields one candidate, in input order. Timing classes
    (established/standard/detailed) are not distinguished and duplicates are kept.
    """

    modes: List[str] = []
    for line in decoded.splitlines():
        m = _MODE_LINE.search(line)
        if m:
            modes.append(f"{m.group(1)}x{m.group(2)}@{m.group(3)}Hz")
    return modes


def resolution_candidates(decoded: Optional[str]) -> List[str]:
    """Candidates from decoded EDID text, or the default list if there are none."""

    modes = parse_edid_modes(decoded or "")
    if modes:
        return modes
    return list(DEFAULT_RESOLUTIONS)


def find_edid_nodes(output: str, *, edid_glob: str = DEFAULT_EDID_GLOB) -> List[str]:
    return sorted(glob.glob(edid_glob.format(output=output)))


def discover_resolutions(
    output: str,
    *,
    edid_glob: str = DEFAULT_EDID_GLOB,
    runner: Callable[..., CmdResult] = run_cmd,
) -> List[str]:
    """Decode the output's EDID and return candidate modes (never empty)."""

    nodes = find_edid_nodes(output, edid_glob=edid_glob)
    if not nodes:
        logger.warning("No EDID node found for output %s; using default resolutions", output)
        return list(DEFAULT_RESOLUTIONS)

    for node in nodes:
        r = runner(["edid-decode", node], check=False)
        if not r.ok:
            logger.warning("edid-decode failed for %s (exit %s)", node, r.returncode)
            continue
        modes = parse_edid_modes(r.stdout)
        if modes:
            logger.info("Discovered %d modes from %s", len(modes), node)
            return modes
        logger.info("No timings found in EDID from %s", node)

    logger.warning("EDID discovery yielded nothing for %s; using default resolutions", output)
    return list(DEFAULT_RESOLUTIONS)
