import pytest

from action_dispatch.contracts.errors import (
    AmbiguousActionReceiver,
    ClassNotFound,
    IllegalAction,
    IllegalCallable,
    IllegalClass,
    NoAcceptedActionDefined,
    NoReceiverDefined,
)
from action_dispatch.registry.receivers import ReceiverFactory, ReceiverInstance, ReceiverRegistry
from action_dispatch.resolution.resolver import ActionResolver
from conftest import PingReceiver, SpyReceiver


def receivers_of(entries):
    return [e.receiver for e in entries]


def test_resolve_returns_declaring_receivers_in_order(spy):
    a = spy(["create", "delete"])
    b = spy(["update"])
    resolver = ActionResolver([a, b])

    assert receivers_of(resolver.resolve("create")) == [a]
    assert receivers_of(resolver.resolve("delete")) == [a]
    assert receivers_of(resolver.resolve("update")) == [b]
    assert resolver.actions == ("create", "delete", "update")


@pytest.mark.parametrize("receivers", [[], None, ()])
def test_empty_receivers(receivers):
    with pytest.raises(NoReceiverDefined):
        ActionResolver(receivers)


def test_receiver_without_actions(spy):
    with pytest.raises(NoAcceptedActionDefined) as exc:
        ActionResolver([spy(["x"]), ReceiverInstance(spy([]), name="empty")])
    assert "SpyReceiver#empty" in str(exc.value)


def test_ambiguity_forbidden_by_default(spy):
    first = ReceiverInstance(spy(["x"]), name="first")
    second = ReceiverInstance(spy(["x", "y"]), name="second")

    with pytest.raises(AmbiguousActionReceiver) as exc:
        ActionResolver([first, second])

    err = exc.value
    assert err.action == "x"
    assert err.existing == "SpyReceiver#first"
    assert err.conflicting == "SpyReceiver#second"


def test_ambiguity_permitted(spy):
    a, b = spy(["x"]), spy(["x"])
    resolver = ActionResolver([a, b], permit_ambiguous_receivers=True)

    assert receivers_of(resolver.resolve("x")) == [a, b]


def test_unknown_action(spy):
    resolver = ActionResolver([spy(["x"])])
    with pytest.raises(IllegalAction) as exc:
        resolver.resolve("nope")
    assert exc.value.action == "nope"


def test_resolve_is_idempotent(spy):
    resolver = ActionResolver([spy(["x"]), spy(["x"])], permit_ambiguous_receivers=True)
    assert resolver.resolve("x") is resolver.resolve("x")


def test_action_map_is_read_only(spy):
    resolver = ActionResolver([spy(["x"])])
    with pytest.raises(TypeError):
        resolver.action_map["y"] = ()  # type: ignore[index]


def test_duplicate_descriptors_collapse(spy):
    a = spy(["x"])
    resolver = ActionResolver([a, a])
    assert receivers_of(resolver.resolve("x")) == [a]
    assert len(resolver.receivers) == 1


def test_same_action_twice_in_one_receiver(spy):
    resolver = ActionResolver([spy(["x", "x"])])
    assert len(resolver.resolve("x")) == 1


def test_distinct_instances_of_same_type_are_kept(spy):
    resolver = ActionResolver([spy(["x"]), spy(["y"])])
    assert len(resolver.receivers) == 2


def test_identities_are_unique_per_instance(spy):
    resolver = ActionResolver([spy(["x"]), spy(["y"])])
    first, second = resolver.receivers
    assert first.name.startswith("SpyReceiver#")
    assert first.name != second.name


def test_factory_class_is_instantiated():
    resolver = ActionResolver([PingReceiver])
    (entry,) = resolver.resolve("ping")
    assert isinstance(entry.receiver, PingReceiver)
    assert PingReceiver.created == 1


def test_factory_descriptor(spy):
    made = spy(["x"])
    resolver = ActionResolver([ReceiverFactory(lambda: made, name="lazy")])
    (entry,) = resolver.resolve("x")
    assert entry.receiver is made
    assert entry.name == "SpyReceiver#lazy"


def test_registry_name():
    registry = ReceiverRegistry()
    registry.register_factory("ping", PingReceiver)
    resolver = ActionResolver(["ping"], registry=registry)
    (entry,) = resolver.resolve("ping")
    assert entry.name == "PingReceiver#ping"


def test_unregistered_name():
    with pytest.raises(ClassNotFound):
        ActionResolver(["missing"], registry=ReceiverRegistry())


def test_name_without_registry():
    with pytest.raises(ClassNotFound):
        ActionResolver(["missing"])


def test_registered_name_with_non_callable_factory():
    registry = ReceiverRegistry()
    registry.register_factory("bad", "not a factory")  # type: ignore[arg-type]
    with pytest.raises(IllegalClass):
        ActionResolver(["bad"], registry=registry)


def test_class_without_static_factory():
    with pytest.raises(IllegalClass):
        ActionResolver([SpyReceiver])


def test_object_without_receiver_capability():
    with pytest.raises(IllegalClass):
        ActionResolver([object()])


def test_factory_producing_non_receiver():
    with pytest.raises(IllegalClass):
        ActionResolver([ReceiverFactory(object)])


@pytest.mark.parametrize("descriptor", [None, 42, 1.5, b"bytes", ["x"]])
def test_descriptor_neither_object_nor_name(descriptor):
    with pytest.raises(IllegalCallable):
        ActionResolver([descriptor])


def test_non_callable_factory():
    with pytest.raises(IllegalCallable):
        ActionResolver([ReceiverFactory("nope")])


def test_validation_runs_before_instantiation(spy):
    # invalid descriptor after a factory: nothing must be built
    with pytest.raises(IllegalCallable):
        ActionResolver([PingReceiver, None])
    assert PingReceiver.created == 0


def test_empty_actions_checked_after_instantiation():
    empty = SpyReceiver([])
    with pytest.raises(NoAcceptedActionDefined):
        ActionResolver([empty, PingReceiver])
    assert PingReceiver.created == 1


class FixedActions:
    def __init__(self, declared):
        self.declared = declared

    def accepted_actions(self):
        return self.declared

    def receive_action(self, action, payload):
        return True


def test_bare_string_actions_rejected():
    with pytest.raises(IllegalClass):
        ActionResolver([FixedActions("ping")])


@pytest.mark.parametrize("declared", [[1, "x"], [None], [["x"]]])
def test_non_string_actions_rejected(declared):
    with pytest.raises(IllegalClass):
        ActionResolver([FixedActions(declared)])


@pytest.mark.parametrize("declared", [None, (), set()])
def test_missing_actions(declared):
    with pytest.raises(NoAcceptedActionDefined):
        ActionResolver([FixedActions(declared)])


def test_generator_actions_accepted():
    resolver = ActionResolver([FixedActions(a for a in ("x", "y"))])
    assert resolver.actions == ("x", "y")


def test_receiver_supplied_name_is_used():
    receiver = FixedActions(["x"])
    receiver.receiver_name = "own"
    resolver = ActionResolver([receiver])
    assert resolver.receivers[0].name == "FixedActions#own"


def test_registration_name_wins_over_receiver_name():
    receiver = FixedActions(["x"])
    receiver.receiver_name = "own"
    resolver = ActionResolver([ReceiverInstance(receiver, name="given")])
    assert resolver.receivers[0].name == "FixedActions#given"
