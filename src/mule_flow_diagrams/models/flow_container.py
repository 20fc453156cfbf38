"""
Data models for parsed Mule flows and their processing steps.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class ProcessingStep:
    """
    One configured element inside a flow.

    Steps form a tree: scope elements such as ``choice`` or ``try`` hold their
    nested steps in ``children``, in document order. ``reference_target`` is the
    name of the flow a ``flow-ref`` invokes; it is resolved later, once every
    file has been parsed.
    """
    element_kind: str
    display_label: str
    children: Tuple['ProcessingStep', ...] = ()
    reference_target: Optional[str] = None

    def walk(self):
        """Yield this step and every nested step, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True)
class FlowContainer:
    """
    A named flow or sub-flow extracted from a configuration file.

    Names are unique within one file only, so ``source_file`` is part of the
    container's identity.
    """
    type: str
    name: str
    processors: Tuple[ProcessingStep, ...] = ()
    source_file: Path = Path()

    def references(self) -> List[str]:
        """
        Get the names of all flows referenced from this container.

        Returns:
            Referenced flow names in document order, duplicates included
        """
        return [
            step.reference_target
            for processor in self.processors
            for step in processor.walk()
            if step.reference_target
        ]


class ContainerType:
    """
    Constants for the top-level elements that become flow containers.
    """

    FLOW = "flow"
    SUB_FLOW = "sub-flow"

    @classmethod
    def get_all_types(cls) -> List[str]:
        """Get all container element names."""
        return [cls.FLOW, cls.SUB_FLOW]

    @classmethod
    def is_valid_type(cls, element_type: str) -> bool:
        return element_type in cls.get_all_types()


class ElementKind:
    """
    Element kinds that the parser treats specially.
    """

    FLOW_REF = "flow-ref"

    # Elements whose children are processing steps rather than configuration
    SCOPES = frozenset([
        "choice",
        "when",
        "otherwise",
        "try",
        "error-handler",
        "on-error-propagate",
        "on-error-continue",
        "foreach",
        "parallel-foreach",
        "scatter-gather",
        "route",
        "async",
        "until-successful",
        "first-successful",
        "round-robin",
        "processor-chain",
        "enricher",
        "transactional",
        "cache",
        "catch-exception-strategy",
        "choice-exception-strategy",
        "rollback-exception-strategy",
    ])

    # Children of a flow that carry no processing meaning
    IGNORED = frozenset([
        "description",
        "annotations",
    ])

    @classmethod
    def is_scope(cls, element_kind: str) -> bool:
        return element_kind in cls.SCOPES
