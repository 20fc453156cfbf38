from pathlib import Path
from unittest import mock

import pytest

from mule_flow_diagrams import cli
from mule_flow_diagrams.models import DiagramType


def test_parses_options(tmp_path):
    args = cli.build_parser().parse_args([
        str(tmp_path), "-t", "out", "-o", "flows.svg", "-d", "COMPACT", "-fl", "main",
    ])

    model = cli.to_command_model(args)

    assert model.source_path == tmp_path
    assert model.target_path == Path("out")
    assert model.output_filename == "flows.svg"
    assert model.diagram_type == DiagramType.COMPACT
    assert model.flow_name == "main"


def test_target_defaults_to_source_directory(renderer_resource):
    config = renderer_resource("single/example-config.xml")

    model = cli.to_command_model(cli.build_parser().parse_args([str(config)]))

    assert model.target_path == config.parent
    assert model.diagram_type == DiagramType.GRAPH


def test_unknown_diagram_type_is_rejected(tmp_path):
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([str(tmp_path), "-d", "sequence"])


def test_main_exit_status(renderer_resource, tmp_path):
    assert cli.main([str(renderer_resource("single")), "-t", str(tmp_path), "-o", "flows.dot"]) == 0
    assert (tmp_path / "flows.dot").is_file()
    assert cli.main([str(tmp_path / "empty"), "-t", str(tmp_path)]) == 1


def test_main_reports_failure_from_renderer(tmp_path):
    with mock.patch.object(cli.DiagramRenderer, "render", return_value=False):
        assert cli.main([str(tmp_path)]) == 1
