"""
Resolution of a user supplied source path to the directory holding Mule configuration files.

Mule projects keep their configuration files in different places depending on
the Mule major version and on whether the project is built with Maven. The
conventions are checked in priority order and the first match wins; a directory
matching none of them is used as-is.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Sequence

MULE4_SOURCE_DIR = "src/main/mule"
MULE3_SOURCE_DIR = "src/main/app"
MAVEN_DESCRIPTOR = "pom.xml"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutConvention:
    """
    One project layout rule.

    Attributes:
        name: Short name of the layout, used in debug output
        matches: Predicate over the project root
        source_dir: Configuration directory relative to the project root
        message: Informational message logged when the layout is detected
    """
    name: str
    matches: Callable[[Path], bool]
    source_dir: str
    message: str


def _has_dir(relative: str) -> Callable[[Path], bool]:
    return lambda root: (root / relative).is_dir()


def _is_maven_mule3(root: Path) -> bool:
    return (root / MAVEN_DESCRIPTOR).is_file() and (root / MULE3_SOURCE_DIR).is_dir()


MULE3_MESSAGE = (
    f"Found standard Mule 3 source structure '{MULE3_SOURCE_DIR}'. Source is a Mule-3 project."
)

DEFAULT_CONVENTIONS: List[LayoutConvention] = [
    LayoutConvention(
        name="mule4",
        matches=_has_dir(MULE4_SOURCE_DIR),
        source_dir=MULE4_SOURCE_DIR,
        message=f"Found standard Mule 4 source structure '{MULE4_SOURCE_DIR}'. Source is a Mule-4 project.",
    ),
    LayoutConvention(
        name="mule3-maven",
        matches=_is_maven_mule3,
        source_dir=MULE3_SOURCE_DIR,
        message=MULE3_MESSAGE,
    ),
    LayoutConvention(
        name="mule3",
        matches=_has_dir(MULE3_SOURCE_DIR),
        source_dir=MULE3_SOURCE_DIR,
        message=MULE3_MESSAGE,
    ),
]


class PathResolver:
    """
    Determines where the configuration files of a source path live.
    """

    def __init__(self, conventions: Sequence[LayoutConvention] = DEFAULT_CONVENTIONS):
        self.conventions = list(conventions)

    def resolve(self, source_path: Path) -> Path:
        """
        Resolve the configuration source for a file or project directory.

        Args:
            source_path: User supplied file or directory

        Returns:
            The absolute file path for a file, the matching convention directory
            for a project, or the directory itself when no convention matches.
            A nonexistent path is returned unchanged, it simply yields no files.
        """
        source_path = Path(source_path).absolute()
        if source_path.is_file():
            logger.info(f"Reading source file {source_path}")
            return source_path
        if not source_path.is_dir():
            logger.error(f"Source path {source_path} does not exist or is not readable")
            return source_path

        for convention in self.conventions:
            if convention.matches(source_path):
                logger.debug(f"Layout convention '{convention.name}' matched {source_path}")
                logger.info(convention.message)
                return source_path / convention.source_dir

        logger.warning(
            f"No known standard Mule (3/4) directory structure found "
            f"({MULE3_SOURCE_DIR} or {MULE4_SOURCE_DIR}). Reading {source_path} as configuration directory."
        )
        return source_path
