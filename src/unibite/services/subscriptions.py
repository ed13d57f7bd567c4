"""Per-user change feed that pushes ordered snapshots to subscribers."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

SnapshotCallback = Callable[[list[T]], None]
ErrorCallback = Callable[[Exception], None]


@dataclass(eq=False)
class _Listener(Generic[T]):
    user_id: str
    on_items: SnapshotCallback
    on_error: ErrorCallback


@dataclass(eq=False)
class Subscription:
    """Cancellation handle for a live subscription."""

    feed: "ChangeFeed"
    listener: _Listener
    active: bool = True

    def cancel(self) -> bool:
        """Stop receiving updates. Returns False if already cancelled."""
        if not self.active:
            return False
        self.active = False
        self.feed.remove(self.listener)
        return True

    def __call__(self) -> bool:
        return self.cancel()


@dataclass
class ChangeFeed(Generic[T]):
    """Re-reads a user's collection from the store and fans it out.

    Ordering is whatever ``loader`` returns; snapshots are never re-sorted here.
    """

    loader: Callable[[str], list[T]]
    listeners: dict[str, list[_Listener]] = field(default_factory=dict)

    def subscribe(
        self, user_id: str, on_items: SnapshotCallback, on_error: ErrorCallback
    ) -> Subscription:
        """Register callbacks and deliver the current snapshot immediately."""
        listener = _Listener(user_id=user_id, on_items=on_items, on_error=on_error)
        self.listeners.setdefault(user_id, []).append(listener)
        self._deliver([listener], user_id)
        return Subscription(feed=self, listener=listener)

    def publish(self, user_id: str) -> None:
        """Push a fresh snapshot to every listener of ``user_id``."""
        listeners = list(self.listeners.get(user_id, []))
        if listeners:
            self._deliver(listeners, user_id)

    def remove(self, listener: _Listener) -> None:
        """Drop a listener; used by ``Subscription.cancel``."""
        remaining = [
            item for item in self.listeners.get(listener.user_id, []) if item is not listener
        ]
        if remaining:
            self.listeners[listener.user_id] = remaining
        else:
            self.listeners.pop(listener.user_id, None)

    def listener_count(self, user_id: str) -> int:
        """Return the number of live listeners for a user."""
        return len(self.listeners.get(user_id, []))

    def _deliver(self, listeners: list[_Listener], user_id: str) -> None:
        try:
            snapshot = self.loader(user_id)
        except Exception as exc:  # noqa: BLE001
            for listener in listeners:
                _safe_call(listener.on_error, exc)
            return
        for listener in listeners:
            _safe_call(listener.on_items, list(snapshot))


def _safe_call(callback: Callable[[object], None], value: object) -> None:
    try:
        callback(value)
    except Exception:
        logger.exception("Subscriber callback failed")


@dataclass
class SubscriptionScope:
    """Holds at most one subscription per collection for a single client.

    Subscribing again to the same collection cancels the previous handle, and
    binding a different user tears down everything.
    """

    user_id: str | None = None
    active: dict[str, Subscription] = field(default_factory=dict)

    def bind(self, user_id: str) -> None:
        """Switch the scope to ``user_id``, closing subscriptions of another user."""
        if self.user_id is not None and self.user_id != user_id:
            self.close()
        self.user_id = user_id

    def attach(self, collection: str, subscription: Subscription) -> None:
        """Track ``subscription`` as the only live one for ``collection``."""
        previous = self.active.pop(collection, None)
        if previous is not None:
            previous.cancel()
        self.active[collection] = subscription

    def detach(self, collection: str) -> bool:
        """Cancel the subscription for ``collection`` if there is one."""
        subscription = self.active.pop(collection, None)
        return subscription.cancel() if subscription is not None else False

    def close(self) -> None:
        """Cancel every tracked subscription."""
        for subscription in self.active.values():
            subscription.cancel()
        self.active.clear()
