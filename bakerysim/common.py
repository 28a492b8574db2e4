"""Products, shared stock and the customer/seller message channel."""

from __future__ import annotations

import queue
import threading
import time
from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

MAX_ITEM_NAME = 32


class _Labelled(IntEnum):
    @property
    def label(self) -> str:
        return _LABELS[self]


class Ingredient(_Labelled):
    WHEAT = 0
    YEAST = 1
    BUTTER = 2
    MILK = 3
    SUGAR_SALT = 4
    SWEET_ITEMS = 5
    CHEESE = 6
    SALAMI = 7


class ReadyProduct(_Labelled):
    RAW_CAKE = 0
    RAW_SWEET = 1
    RAW_SWEET_PATISSERIE = 2
    RAW_SAVORY_PATISSERIE = 3
    RAW_BREAD = 4


class FinalProduct(_Labelled):
    SANDWICH = 0
    CAKE = 1
    SWEET = 2
    SWEET_PATISSERIE = 3
    SAVORY_PATISSERIE = 4


_LABELS = {
    Ingredient.WHEAT: "Wheat",
    Ingredient.YEAST: "Yeast",
    Ingredient.BUTTER: "Butter",
    Ingredient.MILK: "Milk",
    Ingredient.SUGAR_SALT: "Sugar/Salt",
    Ingredient.SWEET_ITEMS: "Sweet Items",
    Ingredient.CHEESE: "Cheese",
    Ingredient.SALAMI: "Salami",
    ReadyProduct.RAW_CAKE: "Raw Cake",
    ReadyProduct.RAW_SWEET: "Raw Sweet",
    ReadyProduct.RAW_SWEET_PATISSERIE: "Raw Sweet Patisserie",
    ReadyProduct.RAW_SAVORY_PATISSERIE: "Raw Savory Patisserie",
    ReadyProduct.RAW_BREAD: "Raw Bread",
    FinalProduct.SANDWICH: "Sandwich",
    FinalProduct.CAKE: "Cake",
    FinalProduct.SWEET: "Sweet",
    FinalProduct.SWEET_PATISSERIE: "Sweet Patisserie",
    FinalProduct.SAVORY_PATISSERIE: "Savory Patisserie",
}

PASTE_NAME = "Paste"
BREAD_NAME = "Bread"


@dataclass
class Stats:
    """Run-wide counters shared by every worker."""

    total_profit: int = 0
    complaints: int = 0
    frustrated_customers: int = 0
    start_time: float = field(default_factory=time.time)
    shutdown_flag: bool = False
    complain_flag: bool = False


@dataclass(frozen=True)
class CustomerRequest:
    """A customer's order, sent to whichever seller picks it up."""

    item: str
    customer_id: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "item", self.item[:MAX_ITEM_NAME])


@dataclass(frozen=True)
class SellerReply:
    """A seller's answer addressed to one customer."""

    customer_id: int
    success: bool
    price: int


class Bakery:
    """All shared stock, each store guarded by its own lock.

    Workers must hold the matching lock while reading or changing a store.
    """

    def __init__(self) -> None:
        self.ingredients: dict[Ingredient, int] = {i: 0 for i in Ingredient}
        self.paste = 0
        self.bread = 0
        self.ready: dict[ReadyProduct, int] = {p: 0 for p in ReadyProduct}
        self.final: dict[FinalProduct, int] = {p: 0 for p in FinalProduct}
        self.stats = Stats()

        self.ingredients_lock = threading.Lock()
        self.paste_lock = threading.Lock()
        self.bread_lock = threading.Lock()
        self.ready_lock = threading.Lock()
        self.final_lock = threading.Lock()
        self.stats_lock = threading.Lock()

        self._requests: "queue.Queue[CustomerRequest]" = queue.Queue()
        self._replies: dict[int, deque[SellerReply]] = defaultdict(deque)
        self._replies_lock = threading.Lock()

    def shutdown_requested(self) -> bool:
        """Whether the shutdown flag has been raised."""
        with self.stats_lock:
            return self.stats.shutdown_flag

    def request_shutdown(self) -> None:
        """Raise the shutdown flag."""
        with self.stats_lock:
            self.stats.shutdown_flag = True

    def send_request(self, request: CustomerRequest) -> None:
        """Queue a customer's order for the sellers."""
        self._requests.put(request)

    def next_request(self, timeout: Optional[float] = None) -> Optional[CustomerRequest]:
        """Take the oldest order, waiting up to ``timeout``; None if none came."""
        try:
            return self._requests.get(timeout=timeout)
        except queue.Empty:
            return None

    def send_reply(self, reply: SellerReply) -> None:
        """Deliver a reply to its customer's mailbox."""
        with self._replies_lock:
            self._replies[reply.customer_id].append(reply)

    def take_reply(self, customer_id: int) -> Optional[SellerReply]:
        """Take the customer's oldest reply without waiting; None if there is none."""
        with self._replies_lock:
            box = self._replies.get(customer_id)
            if not box:
                return None
            reply = box.popleft()
            if not box:
                del self._replies[customer_id]
            return reply