"""
Fan-out / fan-in: run independent strategies concurrently and join them.

Each strategy callable runs in a worker thread (asyncio.to_thread) against
immutable snapshots, so strategies never share mutable state. A failing or
timed-out strategy becomes a degraded StrategyResult; siblings are unaffected.
"""

import asyncio
import logging
from typing import Callable, Mapping, Optional

from ..models.scoring import RecommendationBundle, StrategyResult

logger = logging.getLogger(__name__)

TIMEOUT_ERROR = "timeout"


async def _run_strategy(
    name: str,
    run: Callable[[], StrategyResult],
    timeout: Optional[float],
) -> StrategyResult:
    try:
        return await asyncio.wait_for(asyncio.to_thread(run), timeout)
    except asyncio.TimeoutError:
        logger.warning("[fanout] TIMEOUT strategy=%s timeout=%ss", name, timeout)
        return StrategyResult.degraded(name, TIMEOUT_ERROR)
    except Exception as e:
        logger.warning("[fanout] STRATEGY_FAILED strategy=%s error=%s: %s", name, type(e).__name__, e)
        return StrategyResult.degraded(name, f"{type(e).__name__}: {e}")


async def fan_out(
    strategies: Mapping[str, Callable[[], StrategyResult]],
    timeout: Optional[float] = None,
) -> RecommendationBundle:
    """
    Run every strategy concurrently and collect results keyed by name, in
    the order given. timeout=None waits for all of them.
    """
    names = list(strategies)
    results = await asyncio.gather(
        *(_run_strategy(name, strategies[name], timeout) for name in names)
    )
    bundle = RecommendationBundle(results=dict(zip(names, results)))
    if bundle.degraded:
        logger.info("[fanout] DONE strategies=%s degraded=%s", names, bundle.degraded)
    return bundle
