"""
Minimal file system access used by the renderer.
"""
import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

CONFIG_FILE_SUFFIX = ".xml"


class FileSystemStorage:
    """Reads configuration files and lists them below a source root."""

    def read_file(self, file_path: Path) -> bytes:
        if not isinstance(file_path, Path):
            raise TypeError("file_path must be a pathlib.Path")
        return file_path.read_bytes()

    def list_config_files(self, source_path: Path) -> List[Path]:
        """
        List configuration files for a source path.

        Args:
            source_path: A single file or a directory searched recursively

        Returns:
            Sorted list of XML files, empty when the path does not exist
        """
        if source_path.is_file():
            return [source_path]
        if not source_path.is_dir():
            return []
        try:
            files = [
                path for path in source_path.rglob(f"*{CONFIG_FILE_SUFFIX}")
                if path.is_file()
            ]
        except OSError as e:
            logger.error(f"Unable to list configuration files in {source_path}: {e}")
            return []
        return sorted(files)
