import random

import pytest

from bakerysim.common import Bakery, Ingredient
from bakerysim.config import Config
from bakerysim.supplier import (
    ingredient_limits,
    random_between,
    run_supplier,
    supply_once,
)


class _FixedRandom:
    """Hands out queued values from randrange."""

    def __init__(self, *values):
        self._values = list(values)

    def randrange(self, n):
        value = self._values.pop(0)
        assert 0 <= value < n
        return value


def _config():
    return Config(
        wheat_min=4,
        wheat_max=9,
        yeast_min=3,
        yeast_max=8,
        cheese_salami_min=6,
        cheese_salami_max=12,
    )


def test_random_between_stays_in_range():
    rng = random.Random(7)
    values = {random_between(3, 6, rng) for _ in range(500)}
    assert values <= {3, 4, 5, 6}
    assert min(values) == 3
    assert max(values) == 6


def test_random_between_single_value():
    assert random_between(5, 5, random.Random(1)) == 5


def test_random_between_empty_range_raises():
    with pytest.raises(ValueError):
        random_between(4, 2, random.Random(1))


def test_ingredient_limits_follow_config():
    config = _config()
    assert ingredient_limits(Ingredient.WHEAT, config) == (config.wheat_min, config.wheat_max)
    assert ingredient_limits(Ingredient.YEAST, config) == (config.yeast_min, config.yeast_max)


def test_cheese_and_salami_share_limits():
    config = _config()
    expected = (config.cheese_salami_min, config.cheese_salami_max)
    assert ingredient_limits(Ingredient.CHEESE, config) == expected
    assert ingredient_limits(Ingredient.SALAMI, config) == expected


def test_supply_once_refills_low_ingredient_within_maximum():
    config = _config()
    for seed in range(50):
        bakery = Bakery()
        bakery.ingredients[Ingredient.WHEAT] = 1
        rng = random.Random(seed)
        result = None
        while result is None:
            result = supply_once(bakery, config, rng)
            if result is not None and result[0] is not Ingredient.WHEAT:
                result = None
                bakery.ingredients = {i: 0 for i in Ingredient}
                bakery.ingredients[Ingredient.WHEAT] = 1
        ingredient, refill = result
        assert ingredient is Ingredient.WHEAT
        assert refill >= 1
        assert bakery.ingredients[Ingredient.WHEAT] == 1 + refill
        assert bakery.ingredients[Ingredient.WHEAT] <= config.wheat_max


def test_supply_once_smallest_refill_with_fixed_random():
    config = _config()
    bakery = Bakery()
    result = supply_once(bakery, config, _FixedRandom(Ingredient.YEAST, 0))
    assert result == (Ingredient.YEAST, 1)
    assert bakery.ingredients[Ingredient.YEAST] == 1


def test_supply_once_largest_refill_reaches_maximum():
    config = _config()
    bakery = Bakery()
    top = config.yeast_max - 1
    result = supply_once(bakery, config, _FixedRandom(Ingredient.YEAST, top))
    assert result == (Ingredient.YEAST, config.yeast_max)
    assert bakery.ingredients[Ingredient.YEAST] == config.yeast_max


def test_supply_once_leaves_stocked_ingredient_alone():
    config = _config()
    bakery = Bakery()
    bakery.ingredients[Ingredient.WHEAT] = config.wheat_min
    assert supply_once(bakery, config, _FixedRandom(Ingredient.WHEAT)) is None
    assert bakery.ingredients[Ingredient.WHEAT] == config.wheat_min


def test_run_supplier_stops_on_shutdown():
    config = _config()
    bakery = Bakery()
    sleeps = []

    def fake_sleep(seconds):
        sleeps.append(seconds)
        if len(sleeps) == 3:
            bakery.request_shutdown()

    run_supplier(bakery, config, random.Random(3), fake_sleep)
    assert sleeps == [2, 2, 2]
    assert all(
        bakery.ingredients[i] <= ingredient_limits(i, config)[1] for i in Ingredient
    )


def test_run_supplier_exits_at_once_when_already_shut_down():
    bakery = Bakery()
    bakery.request_shutdown()
    sleeps = []
    run_supplier(bakery, _config(), random.Random(3), sleeps.append)
    assert sleeps == []
    assert all(count == 0 for count in bakery.ingredients.values())