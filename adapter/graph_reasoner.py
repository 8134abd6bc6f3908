"""Infrastructure: reasoner over an already classified rdflib graph.

The graph is expected to carry the classification results as plain
assertions (``rdfs:subClassOf`` edges, ``owl:Nothing`` for unsatisfiable
classes), as written by a DL reasoner export. Nothing is inferred here
beyond walking those assertions.
"""
from itertools import combinations
from typing import Dict, Iterator, Optional, Set, Tuple
import logging

from rdflib import Graph, RDF, RDFS, OWL, XSD, BNode, URIRef
from rdflib.collection import Collection
from rdflib.term import Node

from ontology.model import (
    AnonymousClass,
    ClassExpression,
    DataProperty,
    InverseObjectProperty,
    NamedClass,
    ObjectProperty,
)
from .taxonomy import Taxonomy

logger = logging.getLogger(__name__)

BUILTIN_CLASSES = {OWL.Thing, OWL.Nothing, RDFS.Resource, RDFS.Literal}

# Property characteristics that imply an object property.
OBJECT_PROPERTY_TYPES = (
    OWL.ObjectProperty,
    OWL.TransitiveProperty,
    OWL.SymmetricProperty,
    OWL.AsymmetricProperty,
    OWL.ReflexiveProperty,
    OWL.IrreflexiveProperty,
    OWL.InverseFunctionalProperty,
)

_LIST_CONSTRUCTORS = (
    (OWL.unionOf, "union"),
    (OWL.intersectionOf, "intersection"),
)


class ClassifiedGraphReasoner:
    """Answer classification queries from the assertions of ``graph``."""

    top_class = NamedClass(str(OWL.Thing))
    top_data_property = DataProperty(str(OWL.topDataProperty))
    top_object_property = ObjectProperty(str(OWL.topObjectProperty))

    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self._datatypes = {s for s in graph.subjects(RDF.type, RDFS.Datatype) if isinstance(s, URIRef)}
        self._classes = self._collect_classes()
        self._class_taxonomy = Taxonomy(
            self._classes,
            self._class_parents(),
            str(OWL.Thing),
        )
        self._data_taxonomy = self._property_taxonomy(
            {OWL.DatatypeProperty}, OWL.topDataProperty, OWL.bottomDataProperty
        )
        self._object_taxonomy = self._property_taxonomy(
            set(OBJECT_PROPERTY_TYPES), OWL.topObjectProperty, OWL.bottomObjectProperty
        )
        self._unsatisfiable = self._find_unsatisfiable()
        logger.debug(
            "Classified graph: %d classes, %d unsatisfiable",
            len(self._classes),
            len(self._unsatisfiable),
        )

    # Classes

    def _is_datatype(self, node: Node) -> bool:
        return (
            str(node).startswith(str(XSD))
            or node == RDFS.Literal
            or node == RDF.PlainLiteral
            or node in self._datatypes
        )

    def _named_in_expression(self, node: Node) -> Iterator[URIRef]:
        expr = self._expression(node)
        pending = [expr]
        while pending:
            current = pending.pop()
            if isinstance(current, NamedClass):
                yield URIRef(current.iri)
            else:
                pending.extend(current.operands)

    def _collect_classes(self) -> Set[str]:
        g = self.graph
        found: Set[Node] = set(g.subjects(RDF.type, OWL.Class)) | set(g.subjects(RDF.type, RDFS.Class))
        for predicate in (RDFS.subClassOf, OWL.equivalentClass, OWL.disjointWith):
            for s, o in g.subject_objects(predicate):
                found.update((s, o))
        for _, o in g.subject_objects(RDFS.domain):
            found.update(self._named_in_expression(o))
        for s, o in g.subject_objects(RDFS.range):
            if self._is_object_property(s) and not self._is_datatype(o):
                found.update(self._named_in_expression(o))
        return {
            str(n)
            for n in found
            if isinstance(n, URIRef) and n not in BUILTIN_CLASSES and not self._is_datatype(n)
        }

    def _class_parents(self) -> Dict[str, Set[str]]:
        parents: Dict[str, Set[str]] = {}
        for s, o in self.graph.subject_objects(RDFS.subClassOf):
            if isinstance(s, URIRef) and isinstance(o, URIRef):
                parents.setdefault(str(s), set()).add(str(o))
        for s, o in self.graph.subject_objects(OWL.equivalentClass):
            if isinstance(s, URIRef) and isinstance(o, URIRef):
                parents.setdefault(str(s), set()).add(str(o))
                parents.setdefault(str(o), set()).add(str(s))
        return parents

    def _disjoint_pairs(self) -> Set[Tuple[str, str]]:
        pairs: Set[Tuple[str, str]] = set()
        for s, o in self.graph.subject_objects(OWL.disjointWith):
            if isinstance(s, URIRef) and isinstance(o, URIRef):
                pairs.add((str(s), str(o)))
        for axiom in self.graph.subjects(RDF.type, OWL.AllDisjointClasses):
            members = self.graph.value(axiom, OWL.members)
            if members is None:
                continue
            named = [str(m) for m in Collection(self.graph, members) if isinstance(m, URIRef)]
            pairs.update(combinations(named, 2))
        return pairs

    def _find_unsatisfiable(self) -> Set[str]:
        nothing = str(OWL.Nothing)
        disjoint = self._disjoint_pairs()
        unsatisfiable = set()
        for cls in self._classes:
            lineage = self._class_taxonomy.ancestors(cls) | {cls}
            if nothing in lineage or any(a in lineage and b in lineage for a, b in disjoint):
                unsatisfiable.add(cls)
        return unsatisfiable

    def is_satisfiable(self, cls: NamedClass) -> bool:
        if cls.iri == str(OWL.Nothing):
            return False
        return cls.iri not in self._unsatisfiable

    def subclasses_of(self, cls: NamedClass, direct: bool) -> Set[NamedClass]:
        return {NamedClass(iri) for iri in self._class_taxonomy.descendants(cls.iri, direct)}

    def classes_in_signature(self) -> Set[NamedClass]:
        return {NamedClass(iri) for iri in self._classes}

    # Properties

    def _is_object_property(self, node: Node) -> bool:
        return any((node, RDF.type, t) in self.graph for t in OBJECT_PROPERTY_TYPES)

    def _property_taxonomy(self, types: Set[URIRef], top: URIRef, bottom: URIRef) -> Taxonomy:
        members: Set[str] = set()
        for t in types:
            members.update(str(s) for s in self.graph.subjects(RDF.type, t) if isinstance(s, URIRef))
        parents: Dict[str, Set[str]] = {}
        for s, o in self.graph.subject_objects(RDFS.subPropertyOf):
            if str(s) in members and isinstance(o, URIRef):
                parents.setdefault(str(s), set()).add(str(o))
        for s, o in self.graph.subject_objects(OWL.equivalentProperty):
            if str(s) in members and str(o) in members:
                parents.setdefault(str(s), set()).add(str(o))
                parents.setdefault(str(o), set()).add(str(s))
        if (None, None, bottom) in self.graph or (bottom, None, None) in self.graph:
            members.add(str(bottom))
        return Taxonomy(members, parents, str(top))

    def subproperties_of(self, prop, direct: bool) -> set:
        if isinstance(prop, DataProperty):
            return {DataProperty(iri) for iri in self._data_taxonomy.descendants(prop.iri, direct)}
        if isinstance(prop, ObjectProperty):
            return {ObjectProperty(iri) for iri in self._object_taxonomy.descendants(prop.iri, direct)}
        return set()

    def _asserted(self, iri: str, predicate: URIRef, *, skip_datatypes: bool) -> Set[ClassExpression]:
        found = set()
        for node in self.graph.objects(URIRef(iri), predicate):
            if skip_datatypes and self._is_datatype(node):
                continue
            found.add(self._expression(node))
        return found

    def domains_of(self, prop) -> Set[ClassExpression]:
        if isinstance(prop, InverseObjectProperty):
            return self.ranges_of(prop.named_property)
        return self._asserted(prop.iri, RDFS.domain, skip_datatypes=False)

    def ranges_of(self, prop) -> Set[ClassExpression]:
        if isinstance(prop, InverseObjectProperty):
            return self.domains_of(prop.named_property)
        return self._asserted(prop.iri, RDFS.range, skip_datatypes=True)

    # Class expressions

    def _expression(self, node: Node) -> ClassExpression:
        if isinstance(node, URIRef):
            return NamedClass(str(node))
        g = self.graph
        for predicate, kind in _LIST_CONSTRUCTORS:
            head = g.value(node, predicate)
            if head is not None:
                return AnonymousClass(kind, tuple(self._expression(m) for m in Collection(g, head)))
        complement = g.value(node, OWL.complementOf)
        if complement is not None:
            return AnonymousClass("complement", (self._expression(complement),))
        one_of = g.value(node, OWL.oneOf)
        if one_of is not None:
            members = sorted(str(m) for m in Collection(g, one_of))
            return AnonymousClass("oneOf", detail=" ".join(members))
        if (node, RDF.type, OWL.Restriction) in g:
            return self._restriction(node)
        return AnonymousClass("anonymous", detail=str(node) if not isinstance(node, BNode) else "")

    def _restriction(self, node: Node) -> AnonymousClass:
        g = self.graph
        on_property = g.value(node, OWL.onProperty)
        filler: Optional[Node] = None
        for predicate in (OWL.someValuesFrom, OWL.allValuesFrom, OWL.onClass):
            filler = g.value(node, predicate)
            if filler is not None:
                break
        operands = ()
        if filler is not None and not self._is_datatype(filler):
            operands = (self._expression(filler),)
        return AnonymousClass("restriction", operands, detail=str(on_property or ""))

__all__ = ["ClassifiedGraphReasoner"]
