import numpy as np
import pytest

from pqcorpus.utils.offsets import find_offsets_violation


def test_well_formed():
    assert find_offsets_violation(np.array([0, 0, 3, 5]), 3, 5) is None
    assert find_offsets_violation(np.array([0, 2]), 1, 10) is None
    assert find_offsets_violation(np.array([0]), 0, 0) is None


@pytest.mark.parametrize("offsets,length,child,tag", [
    ([0, 1], 2, 5, "offsets-length"),
    ([1, 2, 3], 2, 5, "offsets-start"),
    ([0, 4, 2], 2, 5, "offsets-monotonic"),
    ([0, 2, 6], 2, 5, "offsets-bound"),
])
def test_violations(offsets, length, child, tag):
    found = find_offsets_violation(np.array(offsets), length, child)
    assert found is not None and found[0] == tag
