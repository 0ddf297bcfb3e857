from canopy.events import Event


def test_listeners_called_in_subscription_order():
    calls = []
    event = Event()
    event.subscribe(lambda x: calls.append(("a", x)))
    event += lambda x: calls.append(("b", x))

    event.emit(1)

    assert calls == [("a", 1), ("b", 1)]
    assert len(event) == 2


def test_unsubscribe_unknown_listener_is_ignored():
    event = Event()

    event -= print

    assert len(event) == 0


def test_listener_removed_during_emit_still_sees_current_emit():
    calls = []
    event = Event()

    def once(value):
        calls.append(value)
        event.unsubscribe(once)

    event += once
    event.emit(1)
    event.emit(2)

    assert calls == [1]
