import pytest

from originkit.randutil import rand_group, rand_interval, rand_interval_n


def test_rand_group_requires_arguments():
    with pytest.raises(ValueError, match="args not found"):
        rand_group()


def test_rand_group_rejects_negative_weight():
    with pytest.raises(ValueError):
        rand_group(1, -1)


def test_rand_group_all_zero_returns_first():
    assert all(rand_group(0, 0, 0) == 0 for _ in range(20))


def test_rand_group_only_nonzero_weight_is_chosen():
    assert all(rand_group(0, 5, 0) == 1 for _ in range(200))


def test_rand_group_never_picks_zero_weight():
    picks = {rand_group(3, 0, 7) for _ in range(500)}
    assert picks <= {0, 2}
    assert 1 not in picks


def test_rand_group_results_in_range():
    weights = (1, 2, 3, 4)
    picks = {rand_group(*weights) for _ in range(1000)}
    assert picks <= set(range(len(weights)))
    assert len(picks) == len(weights)


def test_rand_interval_equal_bounds():
    assert rand_interval(7, 7) == 7


@pytest.mark.parametrize("b1,b2", [(1, 10), (10, 1), (-5, 5)])
def test_rand_interval_within_bounds(b1, b2):
    low, high = min(b1, b2), max(b1, b2)
    values = {rand_interval(b1, b2) for _ in range(500)}
    assert all(low <= v <= high for v in values)
    assert low in values and high in values


def test_rand_interval_n_equal_bounds():
    assert rand_interval_n(4, 4, 10) == [4]


def test_rand_interval_n_distinct_and_in_range():
    values = rand_interval_n(20, 1, 8)
    assert len(values) == 8
    assert len(set(values)) == 8
    assert all(1 <= v <= 20 for v in values)


def test_rand_interval_n_clipped_to_range_size():
    values = rand_interval_n(-3, 3, 100)
    assert sorted(values) == list(range(-3, 4))


def test_rand_interval_n_zero_count():
    assert rand_interval_n(1, 100, 0) == []