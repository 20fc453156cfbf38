"""
Catalog of known Mule components, used to label and style diagram nodes.
"""
import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

DEFAULT_COMPONENTS_FILE = Path(__file__).resolve().parent.parent / "resources" / "mule-components.csv"

CORE_PREFIX = "mule"
WILDCARD = "*"
UNKNOWN_CATEGORY = "unknown"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComponentItem:
    """Display metadata for one element kind."""
    kind: str
    name: str
    category: str

    @property
    def known(self) -> bool:
        return self.category != UNKNOWN_CATEGORY


class ComponentCatalog:
    """
    Read-only lookup from element kind (``prefix:operation`` or a bare core
    element name) to its ComponentItem.

    An entry with operation ``*`` matches every operation of its prefix.
    Unrecognised kinds never fail, they get an ``unknown`` item.
    """

    def __init__(self, items: Optional[Mapping[str, ComponentItem]] = None):
        self._items: Dict[str, ComponentItem] = dict(items or {})

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, str]]) -> 'ComponentCatalog':
        """
        Build a catalog from CSV-like rows.

        Args:
            rows: Mappings with ``prefix``, ``operation``, ``name`` and ``category`` keys

        Returns:
            The populated catalog
        """
        items: Dict[str, ComponentItem] = {}
        for row in rows:
            prefix = (row.get("prefix") or CORE_PREFIX).strip()
            operation = (row.get("operation") or "").strip()
            if not operation:
                logger.debug(f"Skipping component row without operation: {dict(row)}")
                continue
            key = component_key(prefix, operation)
            items[key] = ComponentItem(
                kind=key,
                name=(row.get("name") or operation).strip(),
                category=(row.get("category") or UNKNOWN_CATEGORY).strip(),
            )
        return cls(items)

    @classmethod
    def from_csv(cls, csv_file: Path) -> 'ComponentCatalog':
        """
        Load a catalog from a CSV file with a ``prefix,operation,name,category`` header.

        Args:
            csv_file: Path to the CSV file

        Returns:
            The populated catalog
        """
        with open(csv_file, newline="", encoding="utf-8") as handle:
            catalog = cls.from_rows(csv.DictReader(handle))
        logger.debug(f"Loaded {len(catalog)} known components from {csv_file}")
        return catalog

    def lookup(self, kind: str) -> ComponentItem:
        """
        Get the display metadata for an element kind.

        Args:
            kind: Element kind, e.g. ``http:listener`` or ``logger``

        Returns:
            The matching item, or an ``unknown`` item named after the kind
        """
        prefix, _, operation = kind.rpartition(":")
        prefix = prefix or CORE_PREFIX
        item = self._items.get(component_key(prefix, operation))
        if item is None:
            item = self._items.get(component_key(prefix, WILDCARD))
        if item is None:
            return ComponentItem(kind=kind, name=kind, category=UNKNOWN_CATEGORY)
        return item

    def __contains__(self, kind: str) -> bool:
        return self.lookup(kind).known

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)


def component_key(prefix: str, operation: str) -> str:
    """Build the catalog key for a prefix and operation."""
    return operation if prefix == CORE_PREFIX else f"{prefix}:{operation}"


def load_known_components(csv_file: Optional[Path] = None) -> ComponentCatalog:
    """Load the bundled component catalog, or the given CSV file."""
    return ComponentCatalog.from_csv(csv_file or DEFAULT_COMPONENTS_FILE)
