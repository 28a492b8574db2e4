"""Suppliers keep the ingredient store topped up."""

from __future__ import annotations

import logging
import random
import threading
import time
from typing import Callable, Optional

from .common import Bakery, Ingredient
from .config import Config

log = logging.getLogger(__name__)

SUPPLY_INTERVAL = 2

_LIMITS: dict[Ingredient, Callable[[Config], tuple[int, int]]] = {
    Ingredient.WHEAT: lambda c: (c.wheat_min, c.wheat_max),
    Ingredient.YEAST: lambda c: (c.yeast_min, c.yeast_max),
    Ingredient.BUTTER: lambda c: (c.butter_min, c.butter_max),
    Ingredient.MILK: lambda c: (c.milk_min, c.milk_max),
    Ingredient.SUGAR_SALT: lambda c: (c.sugar_salt_min, c.sugar_salt_max),
    Ingredient.SWEET_ITEMS: lambda c: (c.sweet_items_min, c.sweet_items_max),
    Ingredient.CHEESE: lambda c: (c.cheese_salami_min, c.cheese_salami_max),
    Ingredient.SALAMI: lambda c: (c.cheese_salami_min, c.cheese_salami_max),
}


def random_between(low: int, high: int, rng: Optional[random.Random] = None) -> int:
    """A random integer in ``[low, high]``; ValueError if the range is empty."""
    if high < low:
        raise ValueError(f"empty range [{low}, {high}]")
    rng = rng if rng is not None else random.Random()
    return low + rng.randrange(high - low + 1)


def ingredient_limits(ingredient: Ingredient, config: Config) -> tuple[int, int]:
    """The (minimum, maximum) stock levels configured for ``ingredient``."""
    return _LIMITS[Ingredient(ingredient)](config)


def supply_once(
    bakery: Bakery, config: Config, rng: Optional[random.Random] = None
) -> Optional[tuple[Ingredient, int]]:
    """Pick a random ingredient and refill it if it is below its minimum.

    Returns the ingredient and the amount added, or None if nothing was added.
    """
    rng = rng if rng is not None else random.Random()
    with bakery.ingredients_lock:
        ingredient = Ingredient(rng.randrange(len(Ingredient)))
        current = bakery.ingredients[ingredient]
        minimum, maximum = ingredient_limits(ingredient, config)
        if current >= minimum:
            return None
        refill = random_between(1, maximum - current, rng)
        bakery.ingredients[ingredient] += refill
        log.info(
            "[Supplier %s] Added %d units of %s (now %d)",
            threading.current_thread().name,
            refill,
            ingredient.label,
            bakery.ingredients[ingredient],
        )
        return ingredient, refill


def run_supplier(
    bakery: Bakery,
    config: Config,
    rng: Optional[random.Random] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Refill ingredients every couple of seconds until shutdown is requested."""
    rng = rng if rng is not None else random.Random()
    name = threading.current_thread().name
    log.info("[Supplier %s] Started successfully.", name)
    while not bakery.shutdown_requested():
        supply_once(bakery, config, rng)
        sleep(SUPPLY_INTERVAL)
    log.info("[Supplier %s] Shutdown detected. Exiting.", name)