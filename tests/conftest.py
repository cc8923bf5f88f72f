import json

import pytest

PARAMETERS = {
    "environment": "test",
    "applicationStartingPoint": "app",
    "greeting": "Hello",
}

DEPENDENCIES = {
    "app": {"class": "sample_components:Application", "inject": ["%routedController%", "%routedAction%"]},
    "home": {"class": "sample_components:Controller", "inject": ["@greeter"]},
    "greeter": {"class": "sample_components:Greeter", "inject": ["%greeting%"]},
    "greet": {"class": "sample_components:GreetCommand", "inject": ["@greeter", "World"]},
    "broken": {"class": "sample_components:FailingCommand"},
    "sloppy": {"class": "sample_components:SloppyCommand"},
    "notACommand": {"class": "sample_components:Inert", "inject": ["@greeter"]},
}


@pytest.fixture
def write_config(tmp_path):
    def write(parameters=None, dependencies=None, settings=None):
        (tmp_path / "parameters.json").write_text(json.dumps(PARAMETERS if parameters is None else parameters))
        dependencies_text = dependencies if isinstance(dependencies, str) else json.dumps(
            DEPENDENCIES if dependencies is None else dependencies
        )
        (tmp_path / "dependencies.json").write_text(dependencies_text)
        if settings is not None:
            (tmp_path / "settings.json").write_text(json.dumps(settings))
        return tmp_path

    return write


@pytest.fixture
def config_dir(write_config):
    return write_config()
