"""Loading of the bakery's ``KEY=value`` configuration file."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from os import PathLike
from typing import Union

_LINE = re.compile(r"([^=]+)=\s*([+-]?\d+)")


class ConfigError(Exception):
    """Raised when the configuration file cannot be read."""


@dataclass
class Config:
    """Every tunable of the simulation; settings not in the file stay at 0."""

    num_suppliers: int = 0

    num_chefs_paste: int = 0
    num_chefs_cakes: int = 0
    num_chefs_sandwiches: int = 0
    num_chefs_sweets: int = 0
    num_chefs_sweet_patisseries: int = 0
    num_chefs_savory_patisseries: int = 0
    num_chefs_rawbread: int = 0
    num_bakers_cakesweets: int = 0
    num_bakers_patisseries: int = 0
    num_bakers_bread: int = 0

    wheat_min: int = 0
    wheat_max: int = 0
    yeast_min: int = 0
    yeast_max: int = 0
    butter_min: int = 0
    butter_max: int = 0
    milk_min: int = 0
    milk_max: int = 0
    sugar_salt_min: int = 0
    sugar_salt_max: int = 0
    sweet_items_min: int = 0
    sweet_items_max: int = 0
    cheese_salami_min: int = 0
    cheese_salami_max: int = 0

    max_raw_bread: int = 0
    max_raw_cake: int = 0
    max_raw_sweet: int = 0
    max_raw_sweet_patisserie: int = 0
    max_raw_savory_patisserie: int = 0

    max_bread: int = 0
    max_cake: int = 0
    max_sweet: int = 0
    max_sweet_patisserie: int = 0
    max_savory_patisserie: int = 0
    max_sandwich: int = 0
    max_paste: int = 0

    price_sandwich: int = 0
    price_cake: int = 0
    price_sweet: int = 0
    price_sweet_patisserie: int = 0
    price_savory_patisserie: int = 0

    max_frustrated_customers: int = 0
    max_customer_complaints: int = 0
    max_profit: int = 0
    max_runtime_minutes: int = 0

    num_sellers: int = 0
    complaint_probability: int = 0
    customer_wait_time: int = 0
    customer_every_seconds: int = 0
    customer_arrive_time: int = 0

    bread_baking_time: int = 0
    cake_baking_time: int = 0
    sweet_baking_time: int = 0
    sweet_patisserie_baking_time: int = 0
    savory_patisserie_baking_time: int = 0


_KEYS = {f.name.upper(): f.name for f in fields(Config)}


def parse_config(text: str) -> Config:
    """Build a Config from ``KEY=integer`` lines.

    The key is everything before the first ``=``, matched exactly (case and
    surrounding spaces included). Lines that do not parse and unknown keys
    are ignored; a later line overrides an earlier one.
    """
    values: dict[str, int] = {}
    for line in text.split("\n"):
        match = _LINE.match(line)
        if not match:
            continue
        name = _KEYS.get(match.group(1))
        if name is not None:
            values[name] = int(match.group(2))
    return Config(**values)


def load_config(path: Union[str, "PathLike[str]"]) -> Config:
    """Read and parse the configuration file at ``path``."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            text = handle.read()
    except OSError as exc:
        raise ConfigError(f"Failed to open config file {path!s}: {exc}") from exc
    return parse_config(text)