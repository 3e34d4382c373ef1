"""Multi-source entropy collection.

An ``EntropySource`` folds several independent signals into one scalar chaos
seed plus an immutable ``EntropyRecord``:

- wall clock (milliseconds) and its sub-second component
- a uniform random draw
- pointer movement statistics (random fallback when no history exists)
- coarse host characteristics
- a synthesized table of "quantum" superposition states

The live inputs are inherently non-reproducible. For tests and replays build
an ``EntropyRecord`` directly with ``EntropyRecord.from_sources``; the seed
derivation itself is a pure function of its inputs.
"""

from __future__ import annotations

import logging
import math
import os
import platform
import socket
import time
import zlib
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, Optional, Tuple

from visual_dna.util.rng import RandomSource, require_rng_param

logger = logging.getLogger(__name__)

QUANTUM_STATE_COUNT = 10
CHAOS_SEED_MODULUS = 1_000_000
GOLDEN_RATIO = 1.618
POINTER_HISTORY_SIZE = 100
POINTER_VELOCITY_WINDOW = 10

# Per-source multipliers for the chaos seed
_W_TIMESTAMP = 37
_W_RANDOM = 73
_W_MICROSECONDS = 97
_W_POINTER_X = 13
_W_POINTER_Y = 19
_W_POINTER_VELOCITY = 29
_W_HOST_PERFORMANCE = 23
_W_HOST_MEMORY = 31
_W_HOST_SCREEN = 41
_W_HOST_AGENT = 43
_W_QUANTUM_PHASE = 17


@dataclass(frozen=True)
class PointerSample:
    """Summary of recent pointer movement."""

    x: float
    y: float
    velocity: float
    chaos: float = 0.0


@dataclass(frozen=True)
class HostSample:
    """Coarse host characteristics.

    Attributes:
        performance: Sub-second performance counter reading (0-1000).
        memory: Memory/CPU capability number.
        screen: Host-derived number in [0, 10000).
        agent: Platform descriptor length modulo 100.
    """

    performance: float
    memory: float
    screen: float
    agent: float


@dataclass(frozen=True)
class QuantumState:
    superposition: bool
    phase: float


@dataclass(frozen=True)
class QuantumEntropy:
    """Simulated superposition table plus coherence/entanglement draws."""

    states: Tuple[QuantumState, ...]
    coherence: float
    entanglement: float


def derive_chaos_seed(
    *,
    timestamp: float,
    microseconds: float,
    random_value: float,
    pointer: PointerSample,
    host: HostSample,
    quantum: QuantumEntropy,
) -> float:
    """Fold every entropy field into one scalar in ``[0, 1_000_000)``.

    Each source contributes with its own multiplier. Every quantum state adds
    its weighted phase, and each state in superposition multiplies the running
    seed by the golden ratio.
    """
    seed = 0.0
    seed += timestamp * _W_TIMESTAMP
    seed += random_value * _W_RANDOM
    seed += microseconds * _W_MICROSECONDS
    seed += pointer.x * _W_POINTER_X
    seed += pointer.y * _W_POINTER_Y
    seed += pointer.velocity * _W_POINTER_VELOCITY
    seed += host.performance * _W_HOST_PERFORMANCE
    seed += host.memory * _W_HOST_MEMORY
    seed += host.screen * _W_HOST_SCREEN
    seed += host.agent * _W_HOST_AGENT

    for i, state in enumerate(quantum.states):
        seed += state.phase * (i + 1) * _W_QUANTUM_PHASE
        if state.superposition:
            seed *= GOLDEN_RATIO

    if not math.isfinite(seed):
        return 0.0
    return math.fmod(abs(seed), CHAOS_SEED_MODULUS)


@dataclass(frozen=True)
class EntropyRecord:
    """Immutable snapshot of the entropy a genome was seeded from."""

    timestamp: int
    microseconds: int
    random: float
    pointer: PointerSample
    host: HostSample
    quantum: QuantumEntropy
    chaos_seed: float

    @classmethod
    def from_sources(
        cls,
        *,
        timestamp: int,
        random_value: float,
        pointer: PointerSample,
        host: HostSample,
        quantum: QuantumEntropy,
        microseconds: Optional[int] = None,
    ) -> "EntropyRecord":
        """Build a record from explicit inputs, deriving the chaos seed."""
        micro = timestamp % 1000 if microseconds is None else microseconds
        seed = derive_chaos_seed(
            timestamp=timestamp,
            microseconds=micro,
            random_value=random_value,
            pointer=pointer,
            host=host,
            quantum=quantum,
        )
        return cls(
            timestamp=int(timestamp),
            microseconds=int(micro),
            random=float(random_value),
            pointer=pointer,
            host=host,
            quantum=quantum,
            chaos_seed=seed,
        )

    @property
    def coherence(self) -> float:
        return self.quantum.coherence

    def to_dict(self) -> Dict[str, Any]:
        """Serialize into JSON-compatible primitives."""
        return {
            "timestamp": self.timestamp,
            "microseconds": self.microseconds,
            "random": self.random,
            "pointer": {
                "x": self.pointer.x,
                "y": self.pointer.y,
                "velocity": self.pointer.velocity,
                "chaos": self.pointer.chaos,
            },
            "host": {
                "performance": self.host.performance,
                "memory": self.host.memory,
                "screen": self.host.screen,
                "agent": self.host.agent,
            },
            "quantum": {
                "states": [
                    {"superposition": s.superposition, "phase": s.phase}
                    for s in self.quantum.states
                ],
                "coherence": self.quantum.coherence,
                "entanglement": self.quantum.entanglement,
            },
            "chaos_seed": self.chaos_seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EntropyRecord":
        """Deserialize a record produced by ``to_dict``.

        Raises:
            KeyError, TypeError, ValueError: if the data is malformed.
        """
        pointer = data["pointer"]
        host = data["host"]
        quantum = data["quantum"]
        states = tuple(
            QuantumState(superposition=bool(s["superposition"]), phase=float(s["phase"]))
            for s in quantum["states"]
        )
        return cls(
            timestamp=int(data["timestamp"]),
            microseconds=int(data["microseconds"]),
            random=float(data["random"]),
            pointer=PointerSample(
                x=float(pointer["x"]),
                y=float(pointer["y"]),
                velocity=float(pointer["velocity"]),
                chaos=float(pointer.get("chaos", 0.0)),
            ),
            host=HostSample(
                performance=float(host["performance"]),
                memory=float(host["memory"]),
                screen=float(host["screen"]),
                agent=float(host["agent"]),
            ),
            quantum=QuantumEntropy(
                states=states,
                coherence=float(quantum["coherence"]),
                entanglement=float(quantum["entanglement"]),
            ),
            chaos_seed=float(data["chaos_seed"]),
        )


@dataclass
class _PointerPosition:
    x: float
    y: float
    time: float
    velocity: float


class PointerTracker:
    """Bounded pointer trajectory used as an entropy source.

    Input plumbing is external: callers feed positions via ``record``.
    """

    def __init__(self, max_history: int = POINTER_HISTORY_SIZE) -> None:
        self._positions: Deque[_PointerPosition] = deque(maxlen=max_history)

    def __len__(self) -> int:
        return len(self._positions)

    def record(self, x: float, y: float, time_ms: float) -> None:
        """Append a pointer position observed at ``time_ms``."""
        velocity = 0.0
        if self._positions:
            last = self._positions[-1]
            dt = (time_ms - last.time) or 1.0
            velocity = math.hypot(x - last.x, y - last.y) / dt
        self._positions.append(_PointerPosition(x, y, time_ms, velocity))

    def chaos_level(self) -> float:
        """Irregularity of the trajectory from successive heading changes (0-1)."""
        if len(self._positions) < 5:
            return 0.0
        points = list(self._positions)
        chaos = 0.0
        for p1, p2, p3 in zip(points, points[1:], points[2:]):
            angle1 = math.atan2(p2.y - p1.y, p2.x - p1.x)
            angle2 = math.atan2(p3.y - p2.y, p3.x - p2.x)
            diff = abs(angle2 - angle1)
            chaos += min(diff, math.pi - diff)
        return min(chaos / len(points), 1.0)

    def sample(self, rng: RandomSource) -> PointerSample:
        """Summarize recent movement, or fall back to random coordinates."""
        if not self._positions:
            return PointerSample(
                x=rng.random() * 1000,
                y=rng.random() * 1000,
                velocity=rng.random() * 100,
            )
        recent = list(self._positions)[-POINTER_VELOCITY_WINDOW:]
        avg_velocity = sum(p.velocity for p in recent) / len(recent)
        last = self._positions[-1]
        return PointerSample(x=last.x, y=last.y, velocity=avg_velocity, chaos=self.chaos_level())


def _host_screen_number() -> float:
    try:
        hostname = socket.gethostname()
    except OSError:
        hostname = ""
    return float(zlib.crc32(hostname.encode("utf-8")) % 10000)


@dataclass
class EntropySource:
    """Collects live entropy and produces ``EntropyRecord`` instances.

    Attributes:
        rng: Source of the uniform draws and quantum table.
        pointer_tracker: Optional pointer history; random fallback when empty.
        clock: Returns wall-clock seconds (``time.time`` by default).
        perf_counter: Returns a high-resolution counter in seconds.
        quantum_state_count: Number of simulated superposition states.
    """

    rng: Optional[RandomSource] = None
    pointer_tracker: PointerTracker = field(default_factory=PointerTracker)
    clock: Callable[[], float] = time.time
    perf_counter: Callable[[], float] = time.perf_counter
    quantum_state_count: int = QUANTUM_STATE_COUNT

    def host_sample(self) -> HostSample:
        rng = require_rng_param(self.rng, "EntropySource.host_sample")
        cpus = os.cpu_count()
        return HostSample(
            performance=(self.perf_counter() * 1000) % 1000,
            memory=float(cpus) if cpus else rng.random() * 8,
            screen=_host_screen_number(),
            agent=float(len(platform.platform()) % 100),
        )

    def quantum_sample(self) -> QuantumEntropy:
        rng = require_rng_param(self.rng, "EntropySource.quantum_sample")
        states = tuple(
            QuantumState(superposition=rng.random() > 0.5, phase=rng.random() * math.pi * 2)
            for _ in range(self.quantum_state_count)
        )
        return QuantumEntropy(
            states=states,
            coherence=rng.random(),
            entanglement=rng.random() * rng.random(),
        )

    def generate(self) -> EntropyRecord:
        """Sample every source and derive a fresh chaos seed."""
        rng = require_rng_param(self.rng, "EntropySource.generate")
        now_ms = int(self.clock() * 1000)
        record = EntropyRecord.from_sources(
            timestamp=now_ms,
            random_value=rng.random(),
            pointer=self.pointer_tracker.sample(rng),
            host=self.host_sample(),
            quantum=self.quantum_sample(),
        )
        logger.debug("Entropy collected: chaos_seed=%.3f", record.chaos_seed)
        return record
