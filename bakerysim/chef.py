"""Chefs turn ingredients into paste, ready-to-bake goods and sandwiches."""

from __future__ import annotations

import logging
import random
import threading
import time
from contextlib import ExitStack
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from .common import PASTE_NAME, Bakery, FinalProduct, Ingredient, ReadyProduct
from .config import Config

log = logging.getLogger(__name__)

REST_MIN = 2
REST_MAX = 5


class ChefTeam(Enum):
    PASTE = "paste"
    RAW_BREAD = "rawbread"
    CAKE = "cake"
    SWEET = "sweet"
    SWEET_PATISSERIE = "sweetp"
    SAVORY_PATISSERIE = "savoryp"
    SANDWICH = "sandwich"


def parse_chef_team(name: str) -> ChefTeam:
    """Team for a command-line name; an unrecognised name means the paste team."""
    try:
        return ChefTeam(name)
    except ValueError:
        return ChefTeam.PASTE


@dataclass(frozen=True)
class _Recipe:
    ingredients: tuple[Ingredient, ...]
    output: Union[ReadyProduct, FinalProduct, str]
    limit: Callable[[Config], int]
    uses_paste: bool = False
    uses_bread: bool = False

    @property
    def label(self) -> str:
        return self.output if isinstance(self.output, str) else self.output.label


_DOUGH = (Ingredient.WHEAT, Ingredient.YEAST, Ingredient.MILK)

_RECIPES: dict[ChefTeam, _Recipe] = {
    ChefTeam.PASTE: _Recipe(_DOUGH, PASTE_NAME, lambda c: c.max_paste),
    ChefTeam.RAW_BREAD: _Recipe(_DOUGH, ReadyProduct.RAW_BREAD, lambda c: c.max_raw_bread),
    ChefTeam.CAKE: _Recipe(
        (Ingredient.WHEAT, Ingredient.BUTTER, Ingredient.MILK, Ingredient.SUGAR_SALT),
        ReadyProduct.RAW_CAKE,
        lambda c: c.max_raw_cake,
    ),
    ChefTeam.SWEET: _Recipe(
        (Ingredient.SWEET_ITEMS, Ingredient.SUGAR_SALT),
        ReadyProduct.RAW_SWEET,
        lambda c: c.max_raw_sweet,
    ),
    ChefTeam.SWEET_PATISSERIE: _Recipe(
        (Ingredient.SWEET_ITEMS,),
        ReadyProduct.RAW_SWEET_PATISSERIE,
        lambda c: c.max_raw_sweet_patisserie,
        uses_paste=True,
    ),
    ChefTeam.SAVORY_PATISSERIE: _Recipe(
        (Ingredient.CHEESE,),
        ReadyProduct.RAW_SAVORY_PATISSERIE,
        lambda c: c.max_raw_savory_patisserie,
        uses_paste=True,
    ),
    ChefTeam.SANDWICH: _Recipe(
        (Ingredient.CHEESE, Ingredient.SALAMI),
        FinalProduct.SANDWICH,
        lambda c: c.max_sandwich,
        uses_bread=True,
    ),
}


def _take_inputs(bakery: Bakery, recipe: _Recipe) -> bool:
    with ExitStack() as stack:
        if recipe.uses_paste:
            stack.enter_context(bakery.paste_lock)
        if recipe.uses_bread:
            stack.enter_context(bakery.bread_lock)
        stack.enter_context(bakery.ingredients_lock)

        available = (
            all(bakery.ingredients[i] > 0 for i in recipe.ingredients)
            and (not recipe.uses_paste or bakery.paste > 0)
            and (not recipe.uses_bread or bakery.bread > 0)
        )
        if not available:
            return False
        for ingredient in recipe.ingredients:
            bakery.ingredients[ingredient] -= 1
        if recipe.uses_paste:
            bakery.paste -= 1
        if recipe.uses_bread:
            bakery.bread -= 1
        return True


def _deliver(bakery: Bakery, recipe: _Recipe, config: Config) -> None:
    name = threading.current_thread().name
    limit = recipe.limit(config)
    output = recipe.output
    if isinstance(output, ReadyProduct):
        lock, store = bakery.ready_lock, bakery.ready
    elif isinstance(output, FinalProduct):
        lock, store = bakery.final_lock, bakery.final
    else:
        with bakery.paste_lock:
            if bakery.paste < limit:
                bakery.paste += 1
                log.info("[Chef %s] Produced Paste. Total: %d", name, bakery.paste)
            else:
                log.info("[Chef %s] Max Paste limit reached. Skipping.", name)
        return
    with lock:
        if store[output] < limit:
            store[output] += 1
            log.info("[Chef %s] Made %s. Total: %d", name, recipe.label, store[output])
        else:
            log.info("[Chef %s] Max %s limit reached. Skipping.", name, recipe.label)


def chef_step(bakery: Bakery, config: Config, team: ChefTeam) -> bool:
    """Make one item for ``team``.

    Returns True when the inputs were consumed (the item is kept only if its
    store is below its limit), False when the inputs were not all available.
    """
    recipe = _RECIPES[team]
    if not _take_inputs(bakery, recipe):
        log.info(
            "[Chef %s] Not enough ingredients for %s.",
            threading.current_thread().name,
            recipe.label,
        )
        return False
    _deliver(bakery, recipe, config)
    return True


def run_chef(
    bakery: Bakery,
    config: Config,
    team: ChefTeam,
    rng: Optional[random.Random] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Work for ``team`` with short random rests until shutdown is requested."""
    rng = rng if rng is not None else random.Random()
    name = threading.current_thread().name
    log.info("[Chef %s] Started as team: %s", name, team.value)
    while not bakery.shutdown_requested():
        chef_step(bakery, config, team)
        sleep(rng.randint(REST_MIN, REST_MAX))
    log.info("[Chef %s] Shutdown detected. Exiting.", name)