"""Tests for the change feed and subscription scope."""

from unibite.services.subscriptions import ChangeFeed, SubscriptionScope


def _feed(data: dict[str, list[str]]) -> ChangeFeed[str]:
    return ChangeFeed(lambda user_id: data.get(user_id, []))


def test_subscribe_delivers_current_snapshot() -> None:
    feed = _feed({"user-1": ["b", "a"]})
    received: list[list[str]] = []

    feed.subscribe("user-1", received.append, lambda error: None)

    assert received == [["b", "a"]]


def test_cancel_stops_delivery_and_is_idempotent() -> None:
    data = {"user-1": ["a"]}
    feed = _feed(data)
    received: list[list[str]] = []
    subscription = feed.subscribe("user-1", received.append, lambda error: None)

    assert subscription.cancel() is True
    assert subscription() is False
    data["user-1"] = ["b", "a"]
    feed.publish("user-1")

    assert received == [["a"]]
    assert feed.listener_count("user-1") == 0


def test_publish_only_reaches_matching_user() -> None:
    feed = _feed({"user-1": ["a"], "user-2": ["z"]})
    first: list[list[str]] = []
    second: list[list[str]] = []
    feed.subscribe("user-1", first.append, lambda error: None)
    feed.subscribe("user-2", second.append, lambda error: None)

    feed.publish("user-2")

    assert first == [["a"]]
    assert second == [["z"], ["z"]]


def test_failing_callback_does_not_block_other_listeners() -> None:
    feed = _feed({"user-1": ["a"]})
    received: list[list[str]] = []

    def broken(_items: list[str]) -> None:
        raise ValueError("boom")

    feed.subscribe("user-1", broken, lambda error: None)
    feed.subscribe("user-1", received.append, lambda error: None)
    feed.publish("user-1")

    assert received == [["a"], ["a"]]


def test_loader_errors_go_to_error_callback() -> None:
    def loader(_user_id: str) -> list[str]:
        raise RuntimeError("store offline")

    feed: ChangeFeed[str] = ChangeFeed(loader)
    errors: list[Exception] = []

    feed.subscribe("user-1", lambda items: None, errors.append)

    assert len(errors) == 1
    assert str(errors[0]) == "store offline"


def test_scope_keeps_one_subscription_per_collection() -> None:
    feed = _feed({"user-1": ["a"]})
    scope = SubscriptionScope()
    scope.bind("user-1")

    first = feed.subscribe("user-1", lambda items: None, lambda error: None)
    scope.attach("inventory", first)
    second = feed.subscribe("user-1", lambda items: None, lambda error: None)
    scope.attach("inventory", second)

    assert first.active is False
    assert second.active is True
    assert feed.listener_count("user-1") == 1


def test_scope_tears_down_on_user_change() -> None:
    feed = _feed({})
    scope = SubscriptionScope()
    scope.bind("user-1")
    subscription = feed.subscribe("user-1", lambda items: None, lambda error: None)
    scope.attach("inventory", subscription)

    scope.bind("user-2")

    assert subscription.active is False
    assert scope.active == {}
    assert scope.user_id == "user-2"


def test_scope_detach_and_close() -> None:
    feed = _feed({})
    scope = SubscriptionScope()
    scope.bind("user-1")
    inventory = feed.subscribe("user-1", lambda items: None, lambda error: None)
    saved = feed.subscribe("user-1", lambda items: None, lambda error: None)
    scope.attach("inventory", inventory)
    scope.attach("saved_recipes", saved)

    assert scope.detach("inventory") is True
    assert scope.detach("inventory") is False
    scope.close()

    assert saved.active is False
    assert feed.listener_count("user-1") == 0
