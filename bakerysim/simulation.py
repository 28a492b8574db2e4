"""The controller: sets up the bakery, starts every worker and watches limits."""

from __future__ import annotations

import argparse
import itertools
import logging
import random
import sys
import threading
import time
from typing import Callable, Optional

from .baker import BakerTeam, run_baker
from .chef import ChefTeam, run_chef
from .common import Bakery, Ingredient, Stats
from .config import Config, ConfigError, load_config
from .customer import run_customer
from .seller import run_seller
from .supplier import run_supplier

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/config.txt"
INITIAL_STOCK = 5
MONITOR_INTERVAL = 2

_CHEF_ORDER: tuple[tuple[ChefTeam, Callable[[Config], int]], ...] = (
    (ChefTeam.RAW_BREAD, lambda c: c.num_chefs_rawbread),
    (ChefTeam.PASTE, lambda c: c.num_chefs_paste),
    (ChefTeam.CAKE, lambda c: c.num_chefs_cakes),
    (ChefTeam.SWEET, lambda c: c.num_chefs_sweets),
    (ChefTeam.SWEET_PATISSERIE, lambda c: c.num_chefs_sweet_patisseries),
    (ChefTeam.SAVORY_PATISSERIE, lambda c: c.num_chefs_savory_patisseries),
    (ChefTeam.SANDWICH, lambda c: c.num_chefs_sandwiches),
)

_BAKER_ORDER: tuple[tuple[BakerTeam, Callable[[Config], int]], ...] = (
    (BakerTeam.BREAD, lambda c: c.num_bakers_bread),
    (BakerTeam.CAKESWEETS, lambda c: c.num_bakers_cakesweets),
    (BakerTeam.PATISSERIES, lambda c: c.num_bakers_patisseries),
)


def shutdown_condition_met(stats: Stats, config: Config, now: float) -> bool:
    """Whether the run must end: flag set, or a profit, complaint,
    frustration or runtime limit reached."""
    runtime_minutes = int((now - stats.start_time) // 60)
    return (
        stats.shutdown_flag
        or stats.total_profit >= config.max_profit
        or stats.complaints >= config.max_customer_complaints
        or stats.frustrated_customers >= config.max_frustrated_customers
        or runtime_minutes >= config.max_runtime_minutes
    )


class Simulation:
    """One run of the bakery with all its workers as threads."""

    def __init__(
        self,
        config: Config,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config
        self.bakery = Bakery()
        self._rng = rng if rng is not None else random.Random()
        self._sleep = sleep
        self._workers: list[threading.Thread] = []
        self._workers_lock = threading.Lock()
        self._spawner: Optional[threading.Thread] = None
        self._customer_ids = itertools.count(1)

    @property
    def workers(self) -> tuple[threading.Thread, ...]:
        """Every worker thread started so far, customers included."""
        with self._workers_lock:
            return tuple(self._workers)

    def _child_rng(self) -> random.Random:
        return random.Random(self._rng.getrandbits(64))

    def _launch(self, name: str, target: Callable[..., object], *args: object) -> threading.Thread:
        thread = threading.Thread(target=target, args=args, name=name, daemon=True)
        with self._workers_lock:
            self._workers.append(thread)
        thread.start()
        return thread

    def _reset_stock(self) -> None:
        bakery = self.bakery
        with bakery.stats_lock:
            bakery.stats = Stats(start_time=time.time())
        with bakery.ingredients_lock:
            for ingredient in Ingredient:
                bakery.ingredients[ingredient] = INITIAL_STOCK
        with bakery.paste_lock:
            bakery.paste = INITIAL_STOCK
        with bakery.bread_lock:
            bakery.bread = INITIAL_STOCK
        with bakery.ready_lock:
            for product in bakery.ready:
                bakery.ready[product] = 0
        with bakery.final_lock:
            for product in bakery.final:
                bakery.final[product] = 0

    def _spawn_customers(self) -> None:
        while not self.bakery.shutdown_requested():
            customer_id = next(self._customer_ids)
            self._launch(
                f"customer-{customer_id}",
                run_customer,
                self.bakery,
                self.config,
                customer_id,
                self._child_rng(),
                self._sleep,
            )
            self._sleep(self.config.customer_every_seconds)

    def start(self) -> None:
        """Stock the bakery and start suppliers, chefs, bakers, customers and sellers."""
        config = self.config
        self._reset_stock()
        log.info("[Main] Message queue and stats initialized.")

        for n in range(config.num_suppliers):
            self._launch(
                f"supplier-{n + 1}", run_supplier, self.bakery, config, self._child_rng(), self._sleep
            )
        self._sleep(2)

        for team, count in _CHEF_ORDER:
            for n in range(count(config)):
                self._launch(
                    f"chef-{team.value}-{n + 1}",
                    run_chef,
                    self.bakery,
                    config,
                    team,
                    self._child_rng(),
                    self._sleep,
                )
        log.info("[Main] Chefs started.")
        self._sleep(1)

        for team, count in _BAKER_ORDER:
            for n in range(count(config)):
                self._launch(
                    f"baker-{team.value}-{n + 1}", run_baker, self.bakery, config, team, self._sleep
                )
        log.info("[Main] Bakers started.")
        self._sleep(1)

        for remaining in range(config.customer_arrive_time, 0, -1):
            log.info("[Main] Customers arrive in %d seconds...", remaining)
            self._sleep(1)

        self._spawner = threading.Thread(
            target=self._spawn_customers, name="customer-spawner", daemon=True
        )
        self._spawner.start()
        log.info("[Main] Customers are arriving!")

        for n in range(config.num_sellers):
            self._launch(f"seller-{n + 1}", run_seller, self.bakery, config, self._child_rng())
        log.info("[Main] Sellers started.")

    def check_once(self, now: float) -> bool:
        """Raise the shutdown flag if a limit is reached; True if the run must end."""
        with self.bakery.stats_lock:
            if not shutdown_condition_met(self.bakery.stats, self.config, now):
                return False
            self.bakery.stats.shutdown_flag = True
        log.info("[Main] Shutdown condition met. Terminating...")
        return True

    def run(self) -> None:
        """Start everything and watch the limits until the run ends."""
        self.start()
        try:
            while True:
                self._sleep(MONITOR_INTERVAL)
                if self.check_once(time.time()):
                    break
        finally:
            self.stop()

    def stop(self) -> None:
        """Raise the shutdown flag and wait for every worker to finish."""
        self.bakery.request_shutdown()
        if self._spawner is not None:
            self._spawner.join()
        for thread in self.workers:
            thread.join()
        log.info("[Main] Simulation finished.")


def main(argv: Optional[list[str]] = None) -> int:
    """Run the bakery simulation from the command line."""
    parser = argparse.ArgumentParser(prog="bakerysim", description="Bakery simulation.")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="configuration file")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"Failed to load config: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    Simulation(config).run()
    return 0