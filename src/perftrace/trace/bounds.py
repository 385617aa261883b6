"""Bounds resolution: validate and clamp a caller window to a trace's extent."""

from __future__ import annotations

import math

from perftrace.core.errors import InvalidBoundsError
from perftrace.trace.models import Bounds, RecordedTrace


def _is_nan(value: float | None) -> bool:
    return value is not None and math.isnan(value)


def resolve_bounds(
    trace: RecordedTrace,
    min_us: float | None,
    max_us: float | None,
) -> Bounds:
    """Clamp ``[min_us, max_us]`` to ``[trace.trace_min, trace.trace_max]``.

    A missing min is treated as 0 and a missing max as +inf. Clamping is
    silent: callers are not told their window was narrowed.

    Raises:
        InvalidBoundsError: Either value is NaN, ``min_us > max_us`` as
            supplied, or the window does not intersect the trace.
    """
    # NaN compares false against everything and would slip through clamping
    if _is_nan(min_us) or _is_nan(max_us):
        raise InvalidBoundsError.create(min_us, max_us)
    if min_us is not None and max_us is not None and min_us > max_us:
        raise InvalidBoundsError.create(min_us, max_us)

    extent = trace.extent
    clamped_min = max(min_us or 0, extent.min)
    clamped_max = min(math.inf if max_us is None else max_us, extent.max)
    if clamped_min > clamped_max:
        raise InvalidBoundsError.create(min_us, max_us)

    return Bounds(min=clamped_min, max=clamped_max)
