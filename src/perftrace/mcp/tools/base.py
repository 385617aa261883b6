"""Base classes for tool parameters and text results."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from perftrace.core.errors import PerfTraceError


class BaseParams(BaseModel):
    """Base class for all tool parameters.

    Uses extra="forbid" to reject unknown fields with clear errors. Fields
    are exposed under their camelCase aliases; snake_case is also accepted.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


def text_result(lines: list[str], error: PerfTraceError | None = None) -> dict[str, Any]:
    """Build a handler result whose body is ``lines`` in order."""
    result: dict[str, Any] = {
        "lines": lines,
        "text": "\n".join(lines),
        "summary": lines[0].splitlines()[0] if lines and lines[0] else "",
    }
    if error is not None:
        result["error"] = error.to_dict()
    return result
