"""
Application: service that writes the UML class diagram of a classified ontology.
"""
from typing import TextIO
import io
import logging

from adapter.reasoner import Reasoner

from .diagram import Diagram
from .hierarchy import HierarchyProjector
from .indexer import PropertyDomainIndexer
from .relationships import RelationshipProjector, UnknownCounter

logger = logging.getLogger(__name__)


class DiagramWriter:
    """
    Orchestrates one projection run: data-property index, class hierarchy,
    then object-property associations, between the diagram markers.
    """
    def __init__(self, reasoner: Reasoner):
        self.reasoner = reasoner

    def write(self, out: TextIO) -> None:
        """Write the whole diagram to ``out``; reasoner failures propagate."""
        reasoner = self.reasoner
        diagram = Diagram(out)
        diagram.begin()

        logger.info("Precomputing data properties")
        index = PropertyDomainIndexer(reasoner).build(reasoner.top_data_property)

        logger.info("Printing hierarchy")
        HierarchyProjector(reasoner).project(reasoner.top_class, index, diagram)
        diagram.flush()

        logger.info("Printing object properties")
        RelationshipProjector(reasoner, UnknownCounter()).project(reasoner.top_object_property, diagram)

        diagram.end()
        diagram.flush()
        logger.info("Done")

    def render(self) -> str:
        """Return the diagram text instead of writing it to a stream."""
        buffer = io.StringIO()
        self.write(buffer)
        return buffer.getvalue()

__all__ = ["DiagramWriter"]
