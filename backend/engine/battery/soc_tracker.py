"""
Battery level tracker driven by the advisor's recommendation.

Holds the plant's single persistent battery level (percent) and evolves it
once per tick from the instantaneous energy balance, the advisor's target
level and its recommended action.  Rates are expressed in percent per tick
and the level is always clamped to [5, 100].
"""

from __future__ import annotations

import threading

import numpy as np

MIN_LEVEL = 5.0
MAX_LEVEL = 100.0
DEFAULT_INITIAL_LEVEL = 60.0

# Maximum level change per tick (%).
CHARGE_RATE = 2.0
DISCHARGE_RATE = 1.5

_ACTIONS = ("charge_now", "discharge_now", "maintain", "prepare_for_peak")


class BatteryLevelTracker:
    """Single-writer battery level state machine.

    Every mutation goes through :meth:`advance`, which holds an internal
    lock so concurrent callers (for example a background ticker and an
    on-demand API request) serialise.

    Rules per action
    ----------------
    * ``charge_now`` -- balance > 0 and level < optimal:
      ``+min(2, balance * 0.1)``.
    * ``discharge_now`` -- balance < 0 and level > 20:
      ``-min(1.5, |balance| * 0.05)``.
    * ``prepare_for_peak`` -- balance > 10 and level < 90:
      ``+min(3, balance * 0.08)``.
    * ``maintain`` -- balance > 20 and level < 80: ``+min(1, balance * 0.03)``;
      balance < -20 and level > 30: ``-min(1, |balance| * 0.02)``.

    Parameters
    ----------
    initial_level : float
        Starting level in %.  Default 60.  Clamped to [5, 100].
    """

    def __init__(self, initial_level: float = DEFAULT_INITIAL_LEVEL) -> None:
        self._level: float = float(np.clip(initial_level, MIN_LEVEL, MAX_LEVEL))
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def level(self) -> float:
        """Current battery level in %."""
        return self._level

    def advance(
        self, energy_balance_kw: float, optimal_level: float, recommendation: str
    ) -> float:
        """Apply one tick of the update rule and return the new level.

        Parameters
        ----------
        energy_balance_kw : float
            Generation minus demand in kW (positive = surplus).
        optimal_level : float
            Advisor's target level in %.
        recommendation : str
            Advisor action.

        Returns
        -------
        float
            New level in [5, 100].

        Raises
        ------
        ValueError
            If *recommendation* is not a known action.
        """
        if recommendation not in _ACTIONS:
            raise ValueError(
                f"Unknown recommendation '{recommendation}'. "
                f"Choose from: {sorted(_ACTIONS)}"
            )

        with self._lock:
            delta = self._delta(
                self._level, energy_balance_kw, optimal_level, recommendation
            )
            self._level = float(np.clip(self._level + delta, MIN_LEVEL, MAX_LEVEL))
            return self._level

    def copy(self) -> "BatteryLevelTracker":
        """Independent tracker starting from the current level."""
        return BatteryLevelTracker(initial_level=self._level)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _delta(
        level: float, balance: float, optimal: float, recommendation: str
    ) -> float:
        if recommendation == "charge_now":
            if balance > 0 and level < optimal:
                return min(CHARGE_RATE, balance * 0.1)
        elif recommendation == "discharge_now":
            if balance < 0 and level > 20:
                return -min(DISCHARGE_RATE, abs(balance) * 0.05)
        elif recommendation == "prepare_for_peak":
            if balance > 10 and level < 90:
                return min(CHARGE_RATE * 1.5, balance * 0.08)
        else:
            if balance > 20 and level < 80:
                return min(1.0, balance * 0.03)
            if balance < -20 and level > 30:
                return -min(1.0, abs(balance) * 0.02)
        return 0.0

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return f"BatteryLevelTracker(level={self._level:.2f})"
