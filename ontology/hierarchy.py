"""Domain: class hierarchy projection."""
from typing import Optional
import logging

from adapter.reasoner import Reasoner

from .diagram import Diagram
from .model import UNDEFINED, NamedClass, PropertyIndex
from .utils import label_for, label_for_class, sorted_entities, split_iri

logger = logging.getLogger(__name__)


class HierarchyProjector:
    """
    Emits a class block per satisfiable class below the root, with the data
    properties found for it in the index, plus inheritance edges. Makes no
    attempt to deal sensibly with multiple inheritance: a class reached
    through two parents is emitted once per parent.
    """

    def __init__(self, reasoner: Reasoner):
        self.reasoner = reasoner

    def project(self, root: NamedClass, index: PropertyIndex, diagram: Diagram) -> None:
        # The root (owl:Thing) is left out of the diagram.
        for child in sorted_entities(self.reasoner.subclasses_of(root, direct=True)):
            self._project_class(None, child, index, diagram)

        for cls in sorted_entities(self.reasoner.classes_in_signature()):
            if not self.reasoner.is_satisfiable(cls):
                diagram.unsatisfiable(label_for(cls))

        undefined = index.get(UNDEFINED)
        if undefined:
            # Unlike other field lines, these keep the raw IRI fragment.
            diagram.class_block(UNDEFINED, [split_iri(p.iri)[1] for p in sorted_entities(undefined)])

    def _project_class(
        self,
        parent: Optional[NamedClass],
        cls: NamedClass,
        index: PropertyIndex,
        diagram: Diagram,
    ) -> None:
        # Unsatisfiable classes would drag owl:Nothing everywhere; their
        # whole subtree is dropped.
        if not self.reasoner.is_satisfiable(cls):
            logger.debug("Skipping unsatisfiable subtree at %s", cls.iri)
            return

        fields = sorted_entities(index.get(cls.iri, ()))
        diagram.class_block(label_for_class(cls), [label_for(p) for p in fields])
        if parent is not None:
            diagram.inheritance(label_for(parent), label_for(cls))

        for child in sorted_entities(self.reasoner.subclasses_of(cls, direct=True)):
            if child == cls:
                logger.debug("Ignoring %s reported as its own subclass", cls.iri)
                continue
            self._project_class(cls, child, index, diagram)
