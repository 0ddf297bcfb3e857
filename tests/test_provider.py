import logging

import pytest

from canopy.errors import ProviderNotReadyError

from nodes import (
    Config,
    ConfigConsumer,
    ConfigProvider,
    ExplodingConsumer,
    GameProvider,
    Scores,
    ScoresConsumer,
)


def test_capabilities_follow_declaration_order():
    game = GameProvider()

    assert game.provided_types() == [Config, Scores]
    assert game.capability(Config).owner is game
    assert not game.is_provided


def test_capabilities_are_per_node():
    a, b = ConfigProvider("a"), ConfigProvider("b")
    a.config = Config(name="a")

    assert a.capability(Config) is not b.capability(Config)
    assert not b.capability(Config).has_value


def test_unknown_capability_raises_key_error():
    with pytest.raises(KeyError, match="does not provide"):
        ConfigProvider().capability(Scores)


def test_provision_readable_by_provider_before_provide():
    provider = ConfigProvider()

    with pytest.raises(AttributeError, match="has not assigned"):
        provider.config

    provider.config = Config(name="x")
    assert provider.config == Config(name="x")
    with pytest.raises(ProviderNotReadyError):
        provider.capability(Config).value


def test_provide_is_idempotent():
    provider = ConfigProvider()
    provider.config = Config(name="x")
    fired = []
    provider.capability(Config).signal.subscribe(lambda: fired.append(True))

    provider.provide()
    provider.provide()

    assert fired == [True]
    assert provider.capability(Config).ready
    assert provider.is_provided


def test_provide_marks_every_capability_ready():
    game = GameProvider()
    game.config = Config(name="x")
    game.scores = Scores((3,))

    game.provide()

    assert all(capability.ready for capability in game.capabilities.values())
    assert game.capability(Scores).value == Scores((3,))


def test_top_level_provider_registers_globally(registry):
    root = ConfigProvider("root")
    child = root.add_child(ConfigProvider("child"))
    root.config = child.config = Config(name="x")

    child.provide()
    root.provide()

    assert root in registry
    assert child not in registry


def test_consumers_see_reassigned_values():
    root = ConfigProvider("root")
    consumer = root.add_child(ConfigConsumer())
    root.config = Config(name="before")
    root.provide()
    consumer.depend()

    root.config = Config(name="after")

    assert consumer.config == Config(name="after")


def test_provide_without_value_logs_warning(caplog):
    provider = ConfigProvider("empty")

    with caplog.at_level(logging.WARNING, logger="canopy.provider"):
        provider.provide()

    assert "before assigning a value" in caplog.text
    assert provider.capability(Config).ready


def test_remaining_capabilities_marked_ready_when_a_dependent_raises():
    game = GameProvider("game")
    game.add_child(ExplodingConsumer()).depend()
    scores_consumer = game.add_child(ScoresConsumer())
    scores_consumer.depend()
    game.config = Config(name="x")
    game.scores = Scores()

    with pytest.raises(RuntimeError, match="boom"):
        game.provide()

    assert game.is_provided
    assert scores_consumer.loaded_calls == 1
