"""Customers place one order and wait a limited time for it."""

from __future__ import annotations

import logging
import random
import time
from enum import Enum
from typing import Callable, Optional

from .common import Bakery, CustomerRequest, FinalProduct
from .config import Config

log = logging.getLogger(__name__)

ORDER_DELAY = 2
WAIT_STEP = 1
PANIC_PERCENT = 50


class CustomerOutcome(Enum):
    SHUTDOWN = "shutdown"
    BOUGHT = "bought"
    FRUSTRATED = "frustrated"
    PANICKED = "panicked"


def choose_item(rng: Optional[random.Random] = None) -> FinalProduct:
    """A product picked uniformly at random."""
    rng = rng if rng is not None else random.Random()
    return FinalProduct(rng.randrange(len(FinalProduct)))


def run_customer(
    bakery: Bakery,
    config: Config,
    customer_id: int,
    rng: Optional[random.Random] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> CustomerOutcome:
    """Order one item and wait up to the configured time for a seller's reply."""
    rng = rng if rng is not None else random.Random()
    if bakery.shutdown_requested():
        return CustomerOutcome.SHUTDOWN

    item = choose_item(rng)
    sleep(ORDER_DELAY)
    bakery.send_request(CustomerRequest(item.label, customer_id))

    for _ in range(config.customer_wait_time):
        with bakery.stats_lock:
            stats = bakery.stats
            if stats.shutdown_flag:
                return CustomerOutcome.SHUTDOWN
            if stats.complain_flag:
                if rng.randrange(100) < PANIC_PERCENT:
                    log.info("[Customer %d] Panicked due to complaint and left.", customer_id)
                    return CustomerOutcome.PANICKED
                stats.complain_flag = False

        reply = bakery.take_reply(customer_id)
        if reply is not None:
            log.info("[Customer %d] Bought %s for $%d", customer_id, item.label, reply.price)
            return CustomerOutcome.BOUGHT
        sleep(WAIT_STEP)

    with bakery.stats_lock:
        bakery.stats.frustrated_customers += 1
        log.info(
            "[Customer %d] Got frustrated waiting for %s. Total frustrated: %d",
            customer_id,
            item.label,
            bakery.stats.frustrated_customers,
        )
    return CustomerOutcome.FRUSTRATED