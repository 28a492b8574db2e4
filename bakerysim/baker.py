"""Bakers turn ready-to-bake goods into bread and finished products."""

from __future__ import annotations

import logging
import threading
import time
from enum import Enum
from typing import Callable, Union

from .common import BREAD_NAME, Bakery, FinalProduct, ReadyProduct
from .config import Config

log = logging.getLogger(__name__)

DEFAULT_BAKE_TIME = 3
IDLE_WAIT = 2

Baked = Union[FinalProduct, str]


class BakerTeam(Enum):
    BREAD = "bread"
    CAKESWEETS = "cakesweets"
    PATISSERIES = "patisseries"


def parse_baker_team(name: str) -> BakerTeam:
    """Team for a command-line name; ValueError for an unknown one."""
    try:
        return BakerTeam(name)
    except ValueError:
        raise ValueError(f"Unknown team type: {name}") from None


_BAKE_TIMES: dict[Baked, Callable[[Config], int]] = {
    BREAD_NAME: lambda c: c.bread_baking_time,
    FinalProduct.CAKE: lambda c: c.cake_baking_time,
    FinalProduct.SWEET: lambda c: c.sweet_baking_time,
    FinalProduct.SWEET_PATISSERIE: lambda c: c.sweet_patisserie_baking_time,
    FinalProduct.SAVORY_PATISSERIE: lambda c: c.savory_patisserie_baking_time,
}

_LIMITS: dict[Baked, Callable[[Config], int]] = {
    BREAD_NAME: lambda c: c.max_bread,
    FinalProduct.CAKE: lambda c: c.max_cake,
    FinalProduct.SWEET: lambda c: c.max_sweet,
    FinalProduct.SWEET_PATISSERIE: lambda c: c.max_sweet_patisserie,
    FinalProduct.SAVORY_PATISSERIE: lambda c: c.max_savory_patisserie,
}

_TEAM_WORK: dict[BakerTeam, tuple[tuple[ReadyProduct, Baked], ...]] = {
    BakerTeam.BREAD: ((ReadyProduct.RAW_BREAD, BREAD_NAME),),
    BakerTeam.CAKESWEETS: (
        (ReadyProduct.RAW_CAKE, FinalProduct.CAKE),
        (ReadyProduct.RAW_SWEET, FinalProduct.SWEET),
    ),
    BakerTeam.PATISSERIES: (
        (ReadyProduct.RAW_SWEET_PATISSERIE, FinalProduct.SWEET_PATISSERIE),
        (ReadyProduct.RAW_SAVORY_PATISSERIE, FinalProduct.SAVORY_PATISSERIE),
    ),
}


def bake_time_for(product: Baked, config: Config) -> int:
    """Seconds it takes to bake ``product``; 3 for anything without a setting."""
    getter = _BAKE_TIMES.get(product)
    return getter(config) if getter is not None else DEFAULT_BAKE_TIME


def _label(product: Baked) -> str:
    return product.label if isinstance(product, FinalProduct) else product


def baker_step(
    bakery: Bakery,
    config: Config,
    team: BakerTeam,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Bake one item for ``team``; True if it went into stock.

    The raw item is used up even when its finished store is already full.
    """
    name = threading.current_thread().name
    with bakery.ready_lock:
        choice = next(
            ((raw, product) for raw, product in _TEAM_WORK[team] if bakery.ready[raw] > 0),
            None,
        )
        if choice is not None:
            bakery.ready[choice[0]] -= 1
    if choice is None:
        log.info("[Baker %s] Nothing ready to bake for team %s.", name, team.value)
        return False

    _, product = choice
    sleep(bake_time_for(product, config))
    limit = _LIMITS[product](config)
    label = _label(product)

    if isinstance(product, FinalProduct):
        with bakery.final_lock:
            if bakery.final[product] < limit:
                bakery.final[product] += 1
                log.info("[Baker %s] Baked %s. Total: %d", name, label, bakery.final[product])
                return True
    else:
        with bakery.bread_lock:
            if bakery.bread < limit:
                bakery.bread += 1
                log.info("[Baker %s] Baked %s. Total: %d", name, label, bakery.bread)
                return True
    log.info("[Baker %s] Max %s limit reached. Skipping.", name, label)
    return False


def run_baker(
    bakery: Bakery,
    config: Config,
    team: BakerTeam,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Bake for ``team`` until shutdown, pausing whenever nothing was baked."""
    name = threading.current_thread().name
    log.info("[Baker %s] Starting as team: %s", name, team.value)
    while not bakery.shutdown_requested():
        if not baker_step(bakery, config, team, sleep):
            sleep(IDLE_WAIT)
    log.info("[Baker %s] Shutdown flag detected. Exiting.", name)