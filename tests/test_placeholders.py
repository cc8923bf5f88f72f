import pytest

from lightwire.domain import Literal, Reference
from lightwire.errors import ConfigurationError
from lightwire.graph import make_component_graph
from lightwire.placeholders import PlaceholderSubstitutor, RoutedTarget


@pytest.fixture
def substitutor():
    return PlaceholderSubstitutor()


@pytest.fixture
def graph():
    return make_component_graph(
        {
            "app": {"class": "app", "inject": ["%routedController%", "%routedAction%", "%environment%"]},
            "db": {"class": "db", "inject": ["%dsn%", "%poolSize%", "%debug%", "%logger%"]},
            "log": {"class": "log", "inject": ["%unknown%", "prefix-%dsn%", 7]},
        }
    )


PARAMETERS = {
    "environment": "prod",
    "dsn": "sqlite://",
    "poolSize": 5,
    "debug": False,
    "logger": "@log",
}


def test_parameters_replace_exact_tokens(substitutor, graph):
    result = substitutor.substitute(graph, PARAMETERS)

    assert result["db"].arguments == (
        Literal("sqlite://"),
        Literal(5),
        Literal(False),
        Reference("log"),
    )


def test_unknown_and_embedded_tokens_are_left_untouched(substitutor, graph):
    result = substitutor.substitute(graph, PARAMETERS)

    assert result["log"].arguments == (Literal("%unknown%"), Literal("prefix-%dsn%"), Literal(7))


def test_routed_controller_becomes_reference(substitutor, graph):
    result = substitutor.substitute(graph, PARAMETERS, RoutedTarget("home", "index"))

    assert result["app"].arguments == (Reference("home"), Literal("index"), Literal("prod"))
    assert result["app"].references == ["home"]


def test_routing_tokens_stay_without_routing(substitutor, graph):
    result = substitutor.substitute(graph, PARAMETERS)

    assert result["app"].arguments[:2] == (Literal("%routedController%"), Literal("%routedAction%"))


def test_substitution_returns_new_graph(substitutor, graph):
    before = graph["db"].arguments

    result = substitutor.substitute(graph, PARAMETERS)

    assert result is not graph
    assert graph["db"].arguments == before
    assert graph["db"].arguments[0] == Literal("%dsn%")


def test_substitution_is_idempotent(substitutor, graph):
    routed = RoutedTarget("home", "index")

    first = substitutor.substitute(graph, PARAMETERS, routed)
    second = substitutor.substitute(graph, PARAMETERS, routed)

    assert first == second
    assert substitutor.substitute(first, PARAMETERS, routed) == first


def test_existing_references_are_not_rewritten(substitutor):
    graph = make_component_graph({"a": {"class": "a", "inject": ["@%dsn%"]}})

    result = substitutor.substitute(graph, PARAMETERS)

    assert result["a"].arguments == (Reference("%dsn%"),)


def test_required_placeholders_present(substitutor):
    substitutor.check_required_placeholders(
        '{"app": {"class": "x", "inject": ["%routedController%", "%routedAction%"]}}', "app"
    )


@pytest.mark.parametrize(
    "raw_text",
    [
        '{"app": {"class": "x", "inject": ["%routedAction%"]}}',
        '{"app": {"class": "x", "inject": ["%routedController%"]}}',
        "{}",
    ],
)
def test_missing_routing_tokens_raise(substitutor, raw_text):
    with pytest.raises(ConfigurationError, match="Could not find %routedController% placeholder"):
        substitutor.check_required_placeholders(raw_text, "app")


def test_missing_entry_point_raises(substitutor):
    with pytest.raises(ConfigurationError, match="entry point 'main'"):
        substitutor.check_required_placeholders(
            '{"app": {"class": "x", "inject": ["%routedController%", "%routedAction%"]}}', "main"
        )
