from pathlib import Path

import pytest

from mule_flow_diagrams.utils import ComponentCatalog, load_known_components

RESOURCES = Path(__file__).resolve().parent / "resources"


@pytest.fixture
def renderer_resource():
    """Absolute path of a fixture below tests/resources/renderer."""
    def _resource(relative: str) -> Path:
        return (RESOURCES / "renderer" / relative).absolute()
    return _resource


@pytest.fixture(scope="session")
def catalog() -> ComponentCatalog:
    return load_known_components()


@pytest.fixture
def write_config(tmp_path):
    """Write a Mule configuration file with the given flow elements."""
    def _write(name: str, body: str) -> Path:
        config = tmp_path / name
        config.write_text(
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<mule xmlns="http://www.mulesoft.org/schema/mule/core"\n'
            '      xmlns:http="http://www.mulesoft.org/schema/mule/http"\n'
            '      xmlns:doc="http://www.mulesoft.org/schema/mule/documentation">\n'
            f'{body}\n'
            '</mule>\n',
            encoding="utf-8",
        )
        return config
    return _write
