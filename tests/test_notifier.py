import pytest

from canopy.notifier import Notifier


@pytest.fixture
def changes():
    return []


@pytest.fixture
def notifier(changes):
    return Notifier("v", lambda value, previous: changes.append((value, previous)))


def test_construction_emits_initial_value(notifier, changes):
    assert changes == [("v", None)]
    assert notifier.value == "v"
    assert notifier.previous is None


def test_setting_equal_value_emits_nothing(notifier, changes):
    assert not notifier.set("v")
    assert changes == [("v", None)]


def test_setting_new_value_emits_change(notifier, changes):
    assert notifier.set("w")

    assert changes[-1] == ("w", "v")
    assert notifier.previous == "v"


def test_value_setter(notifier, changes):
    notifier.value = "w"
    notifier.value = "w"

    assert changes == [("v", None), ("w", "v")]


def test_equality_is_by_value():
    changes = []
    notifier = Notifier([1, 2], lambda value, previous: changes.append(value))

    notifier.set([1, 2])

    assert len(changes) == 1


def test_unsubscribed_listener_is_not_called(notifier, changes):
    other = []
    listener = notifier.on_change.subscribe(lambda value, previous: other.append(value))
    notifier.on_change.unsubscribe(listener)

    notifier.set("w")

    assert other == []
    assert len(notifier.on_change) == 1


def test_none_is_rejected(notifier):
    with pytest.raises(ValueError):
        Notifier(None)
    with pytest.raises(ValueError):
        notifier.set(None)
