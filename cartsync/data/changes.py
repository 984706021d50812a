# cartsync/data/changes.py
import queue
import threading
from collections import defaultdict
from typing import Dict, List, Optional

import anyio

from cartsync.utils import settings

PRODUCTS = "products"
CART = "cart"


class Subscription:
    """Powiadomienia jednego obserwatora dla jednego tematu."""

    def __init__(self, feed: "ChangeFeed", topic: str):
        self._feed = feed
        self.topic = topic
        # max 1 - kilka zmian naraz = jeden snapshot
        self._queue: queue.Queue = queue.Queue(maxsize=1)
        self.closed = False

    def notify(self):
        try:
            self._queue.put_nowait(None)
        except queue.Full:
            pass

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Czeka na zmiane. False gdy minal timeout."""
        try:
            self._queue.get(timeout=timeout)
        except queue.Empty:
            return False
        return True

    async def wait_async(self, timeout: Optional[float] = None) -> bool:
        """wait() w watku z osobnego limitera feedu, nie z domyslnej puli anyio."""
        return await anyio.to_thread.run_sync(
            self.wait,
            timeout,
            abandon_on_cancel=True,
            limiter=self._feed.limiter(),
        )

    def close(self):
        if not self.closed:
            self.closed = True
            self._feed.unsubscribe(self)
            # budzi watek ktory jeszcze czeka w wait()
            self.notify()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class ChangeFeed:
    """
    Powiadomienia o zmianach w lokalnym store (in-process pub/sub).
    Publikacja zawsze po commit, wiec obserwator widzi pelny efekt operacji.
    """

    def __init__(self, max_waiters: int = settings.STREAM_MAX_OBSERVERS):
        self._lock = threading.Lock()
        self._subscriptions: Dict[str, List[Subscription]] = defaultdict(list)
        self._max_waiters = max_waiters
        self._limiter: Optional[anyio.CapacityLimiter] = None

    def limiter(self) -> anyio.CapacityLimiter:
        # tworzony leniwie, bo wymaga dzialajacej petli zdarzen
        if self._limiter is None:
            self._limiter = anyio.CapacityLimiter(self._max_waiters)
        return self._limiter

    def subscribe(self, topic: str) -> Subscription:
        subscription = Subscription(self, topic)
        with self._lock:
            self._subscriptions[topic].append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription):
        with self._lock:
            subs = self._subscriptions.get(subscription.topic, [])
            if subscription in subs:
                subs.remove(subscription)

    def publish(self, topic: str):
        with self._lock:
            subs = list(self._subscriptions.get(topic, []))
        for subscription in subs:
            subscription.notify()

    def subscriber_count(self, topic: str) -> int:
        with self._lock:
            return len(self._subscriptions.get(topic, []))
