# bakerysim

A simulation of a busy bakery. Suppliers keep the ingredient shelves stocked,
chefs turn ingredients into paste and ready-to-bake goods, bakers bake them
into bread, cakes, sweets and patisseries, sellers sell them, and customers
arrive at a steady pace, buy what they came for, complain now and then, or
leave frustrated when they wait too long.

Every worker runs as a thread inside one Python process, sharing a single
`Bakery` object whose stores are each guarded by their own lock.

The run ends when the bakery reaches its profit target, collects too many
complaints, frustrates too many customers, or runs past its time limit.

## Installing

```
pip install .
```

## Running

The simulation reads its settings from `config/config.txt` in the current
directory and logs what every worker does to standard error:

```
bakerysim
```

A different configuration file can be given with `--config`:

```
bakerysim --config path/to/config.txt
```

If the file cannot be opened, the command prints an error and exits with
status 1.

## Configuration

The configuration file holds one `KEY=VALUE` setting per line, with integer
values. The key is everything before the first `=` and must match exactly
(upper case, no surrounding spaces). Lines that do not have that shape are
ignored, as are unknown keys; a later line overrides an earlier one, and a
setting that is missing stays at 0. The settings are:

- team sizes: `NUM_SUPPLIERS`, `NUM_CHEFS_PASTE`, `NUM_CHEFS_CAKES`,
  `NUM_CHEFS_SANDWICHES`, `NUM_CHEFS_SWEETS`, `NUM_CHEFS_SWEET_PATISSERIES`,
  `NUM_CHEFS_SAVORY_PATISSERIES`, `NUM_CHEFS_RAWBREAD`,
  `NUM_BAKERS_CAKESWEETS`, `NUM_BAKERS_PATISSERIES`, `NUM_BAKERS_BREAD`,
  `NUM_SELLERS`
- ingredient restocking bounds: `WHEAT_MIN`/`WHEAT_MAX`, `YEAST_MIN`/`YEAST_MAX`,
  `BUTTER_MIN`/`BUTTER_MAX`, `MILK_MIN`/`MILK_MAX`,
  `SUGAR_SALT_MIN`/`SUGAR_SALT_MAX`, `SWEET_ITEMS_MIN`/`SWEET_ITEMS_MAX`,
  `CHEESE_SALAMI_MIN`/`CHEESE_SALAMI_MAX` (cheese and salami share one pair)
- stock limits: `MAX_PASTE`, `MAX_RAW_BREAD`, `MAX_RAW_CAKE`, `MAX_RAW_SWEET`,
  `MAX_RAW_SWEET_PATISSERIE`, `MAX_RAW_SAVORY_PATISSERIE`, `MAX_BREAD`,
  `MAX_CAKE`, `MAX_SWEET`, `MAX_SWEET_PATISSERIE`, `MAX_SAVORY_PATISSERIE`,
  `MAX_SANDWICH`
- prices: `PRICE_SANDWICH`, `PRICE_CAKE`, `PRICE_SWEET`,
  `PRICE_SWEET_PATISSERIE`, `PRICE_SAVORY_PATISSERIE`
- baking times in seconds: `BREAD_BAKING_TIME`, `CAKE_BAKING_TIME`,
  `SWEET_BAKING_TIME`, `SWEET_PATISSERIE_BAKING_TIME`,
  `SAVORY_PATISSERIE_BAKING_TIME`
- customers: `CUSTOMER_ARRIVE_TIME`, `CUSTOMER_EVERY_SECONDS`,
  `CUSTOMER_WAIT_TIME`, `COMPLAINT_PROBABILITY` (percent)
- stopping conditions: `MAX_PROFIT`, `MAX_CUSTOMER_COMPLAINTS`,
  `MAX_FRUSTRATED_CUSTOMERS`, `MAX_RUNTIME_MINUTES`

In Python the settings are the fields of `bakerysim.config.Config`, named in
lower case (`num_suppliers`, `max_profit`, ...).

## Using it from Python

```python
import logging

from bakerysim.config import load_config
from bakerysim.simulation import Simulation

logging.basicConfig(level=logging.INFO, format="%(message)s")

config = load_config("config/config.txt")
Simulation(config).run()
```

`load_config` raises `bakerysim.config.ConfigError` when the file cannot be
read; `parse_config` builds a `Config` from text directly.

`Simulation(config, rng, sleep)` takes an optional `random.Random` and an
optional sleep function, so a run can be made repeatable or sped up.
`start()` launches the workers, `check_once(now)` raises the shutdown flag
when a limit is reached, and `stop()` raises the flag and waits for every
worker thread. `shutdown_condition_met(stats, config, now)` holds the
stopping rule on its own.

The parts can also be driven one step at a time, which is handy for
experiments and tests: `bakerysim.common.Bakery` holds the shared stock, the
run's `Stats` and the customer/seller message channel, and
`supply_once` (in `bakerysim.supplier`), `chef_step` (in `bakerysim.chef`),
`baker_step` (in `bakerysim.baker`) and `serve_request` (in
`bakerysim.seller`) each perform a single unit of work against it.
`run_customer` (in `bakerysim.customer`) plays one customer from order to
departure and returns a `CustomerOutcome`.

## What it does not do

The simulation keeps all of its state in memory for the length of one run.
It does not save results or statistics anywhere, and it offers no screen or
report beyond the log lines its workers write.