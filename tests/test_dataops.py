import pytest

from naza.dataops import limit_indices, min_max, slice_limit, unique_count

ITEMS = ["a", "b", "c", "d", "e"]


def test_no_limit_keeps_everything():
    assert slice_limit(ITEMS, -1, -1) == ITEMS


def test_none_means_no_limit():
    assert slice_limit(ITEMS, None, None) == ITEMS


def test_prefix_only():
    assert slice_limit(ITEMS, 2, -1) == ITEMS[:2]


def test_suffix_only():
    assert slice_limit(ITEMS, -1, 2) == ITEMS[-2:]


def test_prefix_and_suffix():
    assert slice_limit(ITEMS, 1, 1) == ITEMS[:1] + ITEMS[-1:]


@pytest.mark.parametrize("prefix,suffix", [(3, 3), (5, -1), (-1, 5), (10, 10), (2, 3)])
def test_limits_covering_everything_keep_all(prefix, suffix):
    assert slice_limit(ITEMS, prefix, suffix) == ITEMS


def test_limit_indices_agree_with_slice_limit():
    indices = limit_indices(len(ITEMS), 1, 2)
    assert [ITEMS[i] for i in indices] == slice_limit(ITEMS, 1, 2)


def test_limit_indices_pinned():
    assert limit_indices(5, 1, 1) == [0, 4]


def test_limit_indices_are_unique_and_sorted():
    for prefix in range(-1, 7):
        for suffix in range(-1, 7):
            indices = limit_indices(5, prefix, suffix)
            assert indices == sorted(set(indices))


def test_unique_count_pinned():
    assert unique_count(["a", "b", "a"]) == {"a": 2, "b": 1}


def test_unique_count_with_key_sums_to_length():
    words = ["Go", "go", "Py", "GO", "py"]
    counts = unique_count(words, key=str.lower)
    assert sum(counts.values()) == len(words)
    assert counts["go"] == 3


def test_min_max_ties_take_first():
    first = {"v": 1}
    second = {"v": 1}
    low, high = min_max([first, second], key=lambda d: d["v"])
    assert low is first
    assert high is first


def test_min_max_values():
    low, high = min_max([5, -3, 9, 0])
    assert (low, high) == (-3, 9)


def test_min_max_single():
    assert min_max(["x"]) == ("x", "x")


def test_min_max_empty_raises():
    with pytest.raises(ValueError):
        min_max([])