from __future__ import annotations
from typing import Optional, Tuple

import numpy as np

INT32_MAX = np.iinfo(np.int32).max


def find_offsets_violation(
    offsets: np.ndarray, length: int, child_length: int
) -> Optional[Tuple[str, str]]:
    """Check list offsets against their structural invariants.

    Offsets must have ``length + 1`` entries, start at 0, never decrease and
    end at or below ``child_length``.

    :param offsets: Offsets array of a list column.
    :param length: Number of list rows.
    :param child_length: Number of values in the child array.
    :returns: ``(invariant tag, message)`` for the first violation found, or
        ``None`` when the offsets are well formed.
    """
    if len(offsets) != length + 1:
        return "offsets-length", f"expected {length + 1} offsets, got {len(offsets)}"
    if offsets[0] != 0:
        return "offsets-start", f"first offset must be 0, got {offsets[0]}"
    if length > 0 and bool(np.any(np.diff(offsets) < 0)):
        bad = int(np.argmax(np.diff(offsets) < 0))
        return (
            "offsets-monotonic",
            f"offsets decrease at row {bad}: {offsets[bad]} > {offsets[bad + 1]}",
        )
    if offsets[-1] > child_length:
        return (
            "offsets-bound",
            f"last offset {offsets[-1]} exceeds child length {child_length}",
        )
    return None
