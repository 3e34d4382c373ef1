"""Lineage bookkeeping carried on genomes.

Lineage is informational only: a short tail of mutation and crossover records
used for display and export, never for correctness.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

MAX_LINEAGE_ENTRIES = 3
PARENT_SIGNATURE_LENGTH = 20


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class LineageRecord:
    """One lineage entry.

    Attributes:
        kind: "mutation" or "crossover"
        generation: Generation number of the genome the record produced
        timestamp: Milliseconds since epoch
        rate: Mutation rate (mutation records only)
        parents: Truncated parent signatures (crossover records only)
    """

    kind: str
    generation: int
    timestamp: int
    rate: Optional[float] = None
    parents: Optional[Tuple[str, str]] = None

    @classmethod
    def mutation(cls, generation: int, rate: float, timestamp: Optional[int] = None) -> "LineageRecord":
        return cls(
            kind="mutation",
            generation=generation,
            timestamp=now_ms() if timestamp is None else timestamp,
            rate=rate,
        )

    @classmethod
    def crossover(
        cls,
        generation: int,
        parent_signatures: Tuple[str, str],
        timestamp: Optional[int] = None,
    ) -> "LineageRecord":
        """Crossover record keeping only the tail of each parent signature."""
        a, b = parent_signatures
        return cls(
            kind="crossover",
            generation=generation,
            timestamp=now_ms() if timestamp is None else timestamp,
            parents=(a[-PARENT_SIGNATURE_LENGTH:], b[-PARENT_SIGNATURE_LENGTH:]),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.kind, "generation": self.generation}
        if self.rate is not None:
            data["rate"] = self.rate
        if self.parents is not None:
            data["parents"] = list(self.parents)
        data["timestamp"] = self.timestamp
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LineageRecord":
        """Raises KeyError, TypeError or ValueError on malformed input."""
        kind = data["type"]
        if kind not in ("mutation", "crossover"):
            raise ValueError(f"unknown lineage type: {kind!r}")
        rate = data.get("rate")
        parents = data.get("parents")
        if parents is not None:
            if len(parents) != 2:
                raise ValueError("crossover lineage needs exactly two parents")
            parents = (str(parents[0]), str(parents[1]))
        return cls(
            kind=kind,
            generation=int(data["generation"]),
            timestamp=int(data["timestamp"]),
            rate=float(rate) if rate is not None else None,
            parents=parents,
        )


def extend_lineage(lineage: List[LineageRecord], record: LineageRecord) -> List[LineageRecord]:
    """Keep the last two entries and append ``record``."""
    return list(lineage[-(MAX_LINEAGE_ENTRIES - 1):]) + [record]
