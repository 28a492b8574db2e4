"""Sellers take customer orders and sell finished products."""

from __future__ import annotations

import logging
import random
import threading
from typing import Callable, Optional

from .common import Bakery, CustomerRequest, FinalProduct, SellerReply
from .config import Config

log = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.5

_BY_LABEL: dict[str, FinalProduct] = {p.label: p for p in FinalProduct}

_PRICES: dict[FinalProduct, Callable[[Config], int]] = {
    FinalProduct.SANDWICH: lambda c: c.price_sandwich,
    FinalProduct.CAKE: lambda c: c.price_cake,
    FinalProduct.SWEET: lambda c: c.price_sweet,
    FinalProduct.SWEET_PATISSERIE: lambda c: c.price_sweet_patisserie,
    FinalProduct.SAVORY_PATISSERIE: lambda c: c.price_savory_patisserie,
}


def get_item_index(item: str) -> Optional[FinalProduct]:
    """The product named ``item``, or None if no product has that name."""
    return _BY_LABEL.get(item)


def get_item_price(item: str, config: Config) -> int:
    """The configured price of ``item``; 0 for an unknown item."""
    product = get_item_index(item)
    return _PRICES[product](config) if product is not None else 0


def serve_request(
    bakery: Bakery,
    config: Config,
    request: CustomerRequest,
    rng: Optional[random.Random] = None,
) -> Optional[SellerReply]:
    """Sell the requested item if it is in stock.

    Returns the reply sent to the customer, or None when the item is unknown
    or out of stock (the customer then gets no answer).
    """
    rng = rng if rng is not None else random.Random()
    name = threading.current_thread().name
    product = get_item_index(request.item)
    if product is None:
        log.info("[Seller %s] Invalid item requested: %s", name, request.item)
        return None
    price = get_item_price(request.item, config)

    with bakery.final_lock:
        if bakery.final[product] <= 0:
            log.info(
                "[Seller %s] Item out of stock: %s (Requested by %d)",
                name,
                request.item,
                request.customer_id,
            )
            return None
        bakery.final[product] -= 1
        log.info(
            "[Seller %s] Sold %s to customer %d for $%d (Remaining: %d)",
            name,
            request.item,
            request.customer_id,
            price,
            bakery.final[product],
        )

    reply = SellerReply(customer_id=request.customer_id, success=True, price=price)
    bakery.send_reply(reply)

    with bakery.stats_lock:
        stats = bakery.stats
        stats.total_profit += price
        log.info("[Seller %s] Current total profit: $%d", name, stats.total_profit)

        if rng.randrange(100) < config.complaint_probability:
            stats.complaints += 1
            stats.total_profit -= price
            stats.complain_flag = True
            log.info(
                "[Seller %s] Customer %d complained. Refunded $%d. "
                "Total complaints: %d. Profit now: $%d",
                name,
                request.customer_id,
                price,
                stats.complaints,
                stats.total_profit,
            )

        if (
            stats.total_profit >= config.max_profit
            or stats.complaints >= config.max_customer_complaints
            or stats.frustrated_customers >= config.max_frustrated_customers
        ):
            stats.shutdown_flag = True
            log.info("[Seller %s] Shutdown condition met. Shutting down.", name)
    return reply


def run_seller(
    bakery: Bakery,
    config: Config,
    rng: Optional[random.Random] = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> None:
    """Serve orders until shutdown is requested."""
    rng = rng if rng is not None else random.Random()
    name = threading.current_thread().name
    log.info("[Seller %s] Ready to serve customers.", name)
    while True:
        request = bakery.next_request(timeout=poll_interval)
        if bakery.shutdown_requested():
            log.info("[Seller %s] Shutdown signal received. Exiting.", name)
            return
        if request is not None:
            serve_request(bakery, config, request, rng)