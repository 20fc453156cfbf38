"""
Command line entry point for rendering Mule flow diagrams.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from mule_flow_diagrams.diagram_renderer import DiagramRenderer
from mule_flow_diagrams.models import CommandModel, DiagramType

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mule-flow-diagrams",
        description="Create a diagram of the flows in a Mule project or configuration file."
    )
    parser.add_argument(
        "source_path",
        type=Path,
        help="Mule project directory or single configuration file"
    )
    parser.add_argument(
        "-t", "--target",
        type=Path,
        default=None,
        help="Output directory, defaults to the source directory"
    )
    parser.add_argument(
        "-o", "--out",
        default="mule-diagram.png",
        help="Output file name, its suffix selects the format (png, svg, pdf, dot)"
    )
    parser.add_argument(
        "-d", "--diagram",
        type=DiagramType.from_name,
        default=DiagramType.GRAPH,
        metavar="{" + ",".join(member.value for member in DiagramType) + "}",
        help="Diagram style"
    )
    parser.add_argument(
        "-fl", "--flowname",
        default=None,
        help="Only draw this flow and the flows it references"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def to_command_model(args: argparse.Namespace) -> CommandModel:
    source_path = args.source_path.absolute()
    target_path = args.target
    if target_path is None:
        target_path = source_path.parent if source_path.is_file() else source_path
    return CommandModel(
        source_path=source_path,
        target_path=target_path,
        output_filename=args.out,
        diagram_type=args.diagram,
        flow_name=args.flowname,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for the diagram renderer using argparse."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    renderer = DiagramRenderer(to_command_model(args))
    return 0 if renderer.render() else 1


if __name__ == "__main__":
    sys.exit(main())
