"""
Per-question scoring with timeout decay.

A timed question earns full credit up to its timeout. Between one and two
multiples of the timeout the credit falls linearly to zero; beyond that it
is zero. Timeouts are advisory: nothing here interrupts the user.
"""

from __future__ import annotations

from datetime import timedelta


def decay(base: float, timeout: int | None, elapsed: timedelta) -> tuple[float, bool]:
    """
    Apply timeout decay to a base score.

    Args:
        base: Score earned before timing is considered (0.0-1.0)
        timeout: Seconds allowed for full credit, or None if untimed
        elapsed: How long the user took to answer

    Returns:
        (score, timed_out). `timed_out` is set whenever the timeout was
        exceeded, even if some credit remains.
    """
    if timeout is None:
        return base, False

    t = timeout * 1000
    e = elapsed.total_seconds() * 1000
    if e <= t:
        return base, False
    if e < 2 * t:
        return base * (2 * t - e) / t, True
    return 0.0, True
