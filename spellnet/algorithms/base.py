"""Base constants and enums for the flow algorithms."""

from __future__ import annotations

from enum import IntEnum

#: Capacity threshold below which residual capacity is treated as exhausted.
MIN_CAP = 2**-12


class CutBias(IntEnum):
    """Which side of a minimum cut absorbs nodes that could go either way.

    After max flow, nodes that are neither reachable from the source nor able
    to reach the sink in the residual graph may sit on either side without
    changing the cut value.
    """

    #: Ambiguous nodes stay with the source (largest source side).
    SOURCE_WEIGHTED = 1
    #: Ambiguous nodes go to the sink (smallest source side).
    SINK_WEIGHTED = 2

    @classmethod
    def from_string(cls, value: str) -> "CutBias":
        """Parse a case-insensitive name such as ``"sink_weighted"``.

        Raises:
            ValueError: If the string doesn't match any member.
        """
        try:
            return cls[value.upper().replace("-", "_")]
        except KeyError:
            valid = ", ".join(e.name for e in cls)
            raise ValueError(
                f"Invalid cut bias '{value}'. Valid values are: {valid}"
            ) from None
