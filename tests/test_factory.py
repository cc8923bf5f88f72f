import pytest

from lightwire.analysis import ConstructionPlan
from lightwire.builders import make_instances, make_plan
from lightwire.component_builder import ComponentBuilder
from lightwire.errors import ConfigurationError, ConstructionError, GraphError
from lightwire.factory import ObjectFactory
from lightwire.graph import make_component_graph
from lightwire.instances import InstanceRegistry
from lightwire.registry import TypeRegistry


class Node:
    built = []

    def __init__(self, *args):
        self.args = args
        Node.built.append(self)


@pytest.fixture(autouse=True)
def reset_built():
    Node.built = []


@pytest.fixture
def types():
    types = TypeRegistry(allow_imports=False)
    types.register("node", Node)

    @types.provides("broken")
    def make_broken(*_args):
        raise RuntimeError("disk on fire")

    return types


@pytest.fixture
def factory(types):
    return ObjectFactory(ComponentBuilder(types))


def test_references_are_injected_and_literals_passed_as_is(factory):
    graph = make_component_graph(
        {
            "A": {"class": "node", "inject": ["@B", "text", 42, False, None, {"k": [1]}]},
            "B": {"class": "node"},
        }
    )

    instances = factory.build(graph, make_plan(graph, "A"))

    a, b = instances["A"], instances["B"]
    assert a.args == (b, "text", 42, False, None, {"k": [1]})
    assert b.args == ()
    assert instances.names() == ["B", "A"]


def test_diamond_dependency_is_constructed_once(factory):
    graph = make_component_graph(
        {
            "R": {"class": "node", "inject": ["@X", "@Y"]},
            "X": {"class": "node", "inject": ["@Z"]},
            "Y": {"class": "node", "inject": ["@Z"]},
            "Z": {"class": "node"},
        }
    )

    instances = factory.build(graph, make_plan(graph, "R"))

    z = instances["Z"]
    assert instances["X"].args == (z,)
    assert instances["Y"].args == (z,)
    assert len(Node.built) == 4


def test_already_constructed_components_are_reused(factory):
    graph = make_component_graph(
        {"A": {"class": "node", "inject": ["@shared"]}, "shared": {"class": "node"}}
    )
    shared = object()
    instances = InstanceRegistry({"shared": shared})

    result = factory.build(graph, make_plan(graph, "A"), instances)

    assert result is instances
    assert result["A"].args == (shared,)
    assert len(Node.built) == 1


def test_building_a_second_root_keeps_earlier_instances(factory):
    graph = make_component_graph(
        {
            "first": {"class": "node", "inject": ["@shared"]},
            "second": {"class": "node", "inject": ["@shared"]},
            "shared": {"class": "node"},
        }
    )

    instances = factory.build(graph, make_plan(graph, "first"))
    factory.build(graph, make_plan(graph, "second"), instances)

    assert instances["first"].args[0] is instances["second"].args[0]
    assert len(Node.built) == 3


def test_reference_missing_from_registry_is_an_internal_error(factory):
    graph = make_component_graph(
        {"A": {"class": "node", "inject": ["@B"]}, "B": {"class": "node"}}
    )

    with pytest.raises(GraphError, match="references 'B', which has not been constructed"):
        factory.build(graph, ConstructionPlan("A", ("A",)))


def test_plan_naming_unknown_component_raises(factory):
    graph = make_component_graph({"A": {"class": "node"}})

    with pytest.raises(GraphError, match="unknown component 'ghost'"):
        factory.build(graph, ConstructionPlan("ghost", ("ghost",)))


def test_constructor_failure_is_wrapped(factory):
    graph = make_component_graph({"A": {"class": "broken", "inject": [1]}})

    with pytest.raises(ConstructionError, match="Construction of 'A'.*disk on fire") as info:
        factory.build(graph, make_plan(graph, "A"))

    assert info.value.component_name == "A"
    assert isinstance(info.value.__cause__, RuntimeError)


def test_unknown_type_raises(factory):
    graph = make_component_graph({"A": {"class": "unknown"}})

    with pytest.raises(ConfigurationError, match="Unknown type identifier 'unknown'"):
        factory.build(graph, make_plan(graph, "A"))


def test_registered_instance_is_what_the_constructor_returned(factory):
    graph = make_component_graph({"A": {"class": "node", "inject": ["x"]}})

    instances = factory.build(graph, make_plan(graph, "A"))

    assert Node.built == [instances["A"]]
    assert instances["A"].args == ("x",)


def test_make_instances_imports_dotted_type_ids():
    graph = make_component_graph(
        {
            "counts": {"class": "collections:Counter", "inject": ["@letters"]},
            "letters": {"class": "builtins.str", "inject": ["banana"]},
        }
    )

    instances = make_instances(graph, "counts")

    assert instances["counts"]["a"] == 3


def test_instance_registry_is_write_once():
    instances = InstanceRegistry()
    instances.register("db", 1)

    with pytest.raises(GraphError, match="'db' has already been constructed"):
        instances.register("db", 2)
    assert instances["db"] == 1
