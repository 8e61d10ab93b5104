"""Periodic tick loop driven from the application lifespan.

One tick runs at a time: the loop awaits each tick (on a worker thread)
before sleeping for the interval, so ticks never overlap.  Cancelling the
task stops future ticks; no tick holds resources that need cleanup.
"""

from __future__ import annotations

import asyncio
import logging

from app.services.simulation_service import SimulationService

logger = logging.getLogger(__name__)


async def run_ticker(service: SimulationService, interval_seconds: float) -> None:
    """Tick *service* every *interval_seconds* until cancelled."""
    if interval_seconds <= 0:
        raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")

    logger.info("Ticker started (interval %.1fs)", interval_seconds)
    try:
        while True:
            try:
                await asyncio.to_thread(service.tick)
            except Exception:
                # tick() already falls back internally; this guards the loop.
                logger.exception("Ticker iteration failed")
            await asyncio.sleep(interval_seconds)
    finally:
        logger.info("Ticker stopped after %d ticks", service.tick_count)
