"""Domain: object properties as associations between diagram classes."""
from typing import Set
import logging

from adapter.reasoner import Reasoner

from .diagram import Diagram
from .model import UNDEFINED, ClassExpression, ObjectProperty, ObjectPropertyExpression
from .utils import as_disjunct_set, class_label, label_for, sorted_entities, sorted_expressions

logger = logging.getLogger(__name__)


class UnknownCounter:
    """Mints ``UNDEFINED1``, ``UNDEFINED2``, ... for the lifetime of one run."""

    def __init__(self) -> None:
        self.value = 0

    def next_name(self) -> str:
        self.value += 1
        return f"{UNDEFINED}{self.value}"


class RelationshipProjector:
    """
    Walks the object-property hierarchy, direct sub-properties only, and
    emits one association per resolved domain/range pair.
    """

    def __init__(self, reasoner: Reasoner, counter: UnknownCounter | None = None):
        self.reasoner = reasoner
        self.counter = counter if counter is not None else UnknownCounter()

    def project(self, root: ObjectProperty, diagram: Diagram) -> None:
        # topObjectProperty itself is not a relationship.
        for child in sorted_entities(self.reasoner.subproperties_of(root, direct=True)):
            self._project_property(child, diagram)

    def _project_property(self, prop: ObjectPropertyExpression, diagram: Diagram) -> None:
        if prop.is_bottom:
            return

        domains = self.reasoner.domains_of(prop)
        ranges = self.reasoner.ranges_of(prop)
        label = label_for(prop.named_property)

        if not domains:
            self._project_ranges(label, UNDEFINED, ranges, diagram)
        for domain in sorted_expressions(domains):
            for branch in as_disjunct_set(domain):
                self._project_ranges(label, class_label(branch), ranges, diagram)

        for child in sorted_entities(self.reasoner.subproperties_of(prop, direct=True)):
            if child != prop:
                self._project_property(child, diagram)

    def _project_ranges(
        self,
        label: str,
        domain: str,
        ranges: Set[ClassExpression],
        diagram: Diagram,
    ) -> None:
        if not ranges:
            if domain != UNDEFINED:
                diagram.association(domain, UNDEFINED, label)
            else:
                # Each fully unconstrained relation gets its own placeholder node.
                placeholder = self.counter.next_name()
                diagram.association(placeholder, placeholder, label)
            return

        for range_ in sorted_expressions(ranges):
            for branch in as_disjunct_set(range_):
                diagram.association(domain, class_label(branch), label)
