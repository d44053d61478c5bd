"""
Clap Detector
=============
Hysteresis state machine over the normalized two-hand distance.

States:
    IDLE      -> Hands apart (or not both visible); nothing pending.
    DWELLING  -> Hands closer than the trigger threshold; waiting for the
                 minimum dwell time before firing.
    IN_ZONE   -> Clap fired; waits for the hands to separate past the wider
                 exit threshold before another clap can start.

A cooldown deadline is set on every trigger. While it is active the machine
is frozen and no trigger can fire.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Optional

from config import (
    CLAP_COOLDOWN_MS,
    CLAP_HYSTERESIS_FACTOR,
    CLAP_MIN_DURATION_MS,
    CLAP_THRESHOLD_REL,
)

logger = logging.getLogger(__name__)


class ClapPhase(Enum):
    IDLE = auto()
    DWELLING = auto()
    IN_ZONE = auto()


class ClapDetector:
    """Emits a single trigger per clap, timed against a monotonic ms clock."""

    def __init__(
        self,
        threshold_rel: float = CLAP_THRESHOLD_REL,
        min_duration_ms: float = CLAP_MIN_DURATION_MS,
        cooldown_ms: float = CLAP_COOLDOWN_MS,
        hysteresis_factor: float = CLAP_HYSTERESIS_FACTOR,
    ):
        self.threshold_rel = threshold_rel
        self.hysteresis_up = threshold_rel * hysteresis_factor
        self.min_duration_ms = min_duration_ms
        self.cooldown_ms = cooldown_ms

        self._phase = ClapPhase.IDLE
        self._dwell_start: Optional[float] = None  # only set while DWELLING
        self.cooldown_until = 0.0

    # ── Read-only view ────────────────────────────────────────────────────

    @property
    def phase(self) -> ClapPhase:
        return self._phase

    @property
    def in_zone(self) -> bool:
        return self._phase is ClapPhase.IN_ZONE

    @property
    def below_since(self) -> Optional[float]:
        return self._dwell_start

    # ── Public API ────────────────────────────────────────────────────────

    def update(self, distance: float, both_hands: bool, now: float) -> bool:
        """
        Feed one distance sample. Returns True exactly when a clap fires.

        Args:
            distance: Inter-palm distance / min(frame width, frame height)
            both_hands: False when either hand is missing this frame
            now: Monotonic timestamp in milliseconds
        """
        if not both_hands:
            self._go(ClapPhase.IDLE)
            return False

        if now < self.cooldown_until:
            return False

        if self._phase is not ClapPhase.IN_ZONE and distance < self.threshold_rel:
            if self._phase is ClapPhase.IDLE:
                self._go(ClapPhase.DWELLING, now)
            if now - self._dwell_start >= self.min_duration_ms:
                self._go(ClapPhase.IN_ZONE)
                self.cooldown_until = now + self.cooldown_ms
                logger.debug("[CLAP] fired at %.0f ms (d=%.3f)", now, distance)
                return True
        elif self._phase is ClapPhase.IN_ZONE and distance > self.hysteresis_up:
            self._go(ClapPhase.IDLE)
        elif self._phase is not ClapPhase.IN_ZONE and distance >= self.threshold_rel:
            # Hands parted before the dwell completed
            self._go(ClapPhase.IDLE)

        return False

    def reset(self):
        """Force-reset to IDLE and clear the cooldown."""
        self._go(ClapPhase.IDLE)
        self.cooldown_until = 0.0

    def _go(self, phase: ClapPhase, dwell_start: Optional[float] = None):
        self._phase = phase
        self._dwell_start = dwell_start if phase is ClapPhase.DWELLING else None

    def __repr__(self) -> str:
        return f"ClapDetector(phase={self._phase.name}, cooldown_until={self.cooldown_until:.0f})"
