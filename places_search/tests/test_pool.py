from places_search.requery.config import RequeryConfig
from places_search.requery.models import PoolStats
from places_search.requery.pool import is_pool_exhausted


def _pool(after: int, limit: int = 10, total: int = 20) -> PoolStats:
    return PoolStats(total_candidates=total, after_soft_filters=after, requested_limit=limit)


def test_four_of_ten_is_exhausted():
    assert is_pool_exhausted(_pool(4)) is True


def test_five_of_ten_is_not_exhausted():
    assert is_pool_exhausted(_pool(5)) is False


def test_zero_is_exhausted_regardless_of_limit():
    assert is_pool_exhausted(_pool(0, limit=0)) is True
    assert is_pool_exhausted(_pool(0, limit=1)) is True
    assert is_pool_exhausted(_pool(0, limit=50)) is True


def test_small_pool_that_fills_the_page_is_not_exhausted():
    assert is_pool_exhausted(_pool(3, limit=3)) is False


def test_filtered_pool_with_enough_left_is_not_exhausted():
    assert is_pool_exhausted(_pool(12, limit=10, total=40)) is False


def test_min_pool_size_is_configurable():
    config = RequeryConfig(min_pool_size=2)
    assert is_pool_exhausted(_pool(2), config) is False
    assert is_pool_exhausted(_pool(1), config) is True
