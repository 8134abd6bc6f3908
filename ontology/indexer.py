"""
Domain: index of data properties by the classes their domains resolve to.
"""
from collections import defaultdict
from typing import Set
import logging

from adapter.reasoner import Reasoner

from .model import UNDEFINED, DataProperty, PropertyIndex
from .utils import as_disjunct_set, class_bucket, sorted_entities, sorted_expressions

logger = logging.getLogger(__name__)


class PropertyDomainIndexer:
    """
    Walks the data-property hierarchy and files every property under each
    class its domain resolves to. Properties without a domain go to
    UNDEFINED, as do anonymous domain branches.
    """

    def __init__(self, reasoner: Reasoner):
        self.reasoner = reasoner

    def build(self, root: DataProperty) -> PropertyIndex:
        """Index every sub-property of ``root``; the root itself is skipped."""
        index = defaultdict(set)
        visited: Set[DataProperty] = set()
        for child in sorted_entities(self.reasoner.subproperties_of(root, direct=False)):
            self._index_property(child, index, visited)
        logger.debug("Indexed %d data properties under %d buckets", len(visited), len(index))
        return dict(index)

    def _index_property(self, prop: DataProperty, index: PropertyIndex, visited: Set[DataProperty]) -> None:
        if prop.is_bottom or prop in visited:
            return
        visited.add(prop)

        domains = self.reasoner.domains_of(prop)
        for domain in sorted_expressions(domains):
            for branch in as_disjunct_set(domain):
                index[class_bucket(branch)].add(prop)
        if not domains:
            index[UNDEFINED].add(prop)

        for child in sorted_entities(self.reasoner.subproperties_of(prop, direct=False)):
            self._index_property(child, index, visited)
