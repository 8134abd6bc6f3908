"""Infrastructure: classify a merged ontology with a DL reasoner through owlready2.

The inferred hierarchy is written back as plain assertions so that
``ClassifiedGraphReasoner`` can walk it: ``rdfs:subClassOf`` /
``rdfs:subPropertyOf`` for inferred parents and ``owl:equivalentClass
owl:Nothing`` for unsatisfiable classes.
"""
from pathlib import Path
import logging
import os
import tempfile

from owlready2 import ThingClass, World, sync_reasoner_hermit, sync_reasoner_pellet
from rdflib import Graph, OWL, RDFS, URIRef

logger = logging.getLogger(__name__)

REASONERS = {
    "pellet": sync_reasoner_pellet,
    "hermit": sync_reasoner_hermit,
}


def _load_world(graph: Graph) -> World:
    world = World()
    with tempfile.NamedTemporaryFile(suffix=".owl", delete=False) as tmp:
        tmp_path = tmp.name
    graph.serialize(destination=tmp_path, format="xml")
    try:
        world.get_ontology(Path(tmp_path).absolute().as_uri()).load()
    finally:
        os.unlink(tmp_path)
    return world


def _inferred_triples(world: World):
    for cls in world.classes():
        subject = URIRef(cls.iri)
        for parent in cls.is_a:
            if isinstance(parent, ThingClass):
                yield subject, RDFS.subClassOf, URIRef(parent.iri)
        for equivalent in cls.equivalent_to:
            if isinstance(equivalent, ThingClass):
                yield subject, OWL.equivalentClass, URIRef(equivalent.iri)
    for cls in world.inconsistent_classes():
        yield URIRef(cls.iri), OWL.equivalentClass, OWL.Nothing

    for properties in (list(world.data_properties()), list(world.object_properties())):
        iris = {p.iri for p in properties}
        for prop in properties:
            for parent in prop.is_a:
                if getattr(parent, "iri", None) in iris:
                    yield URIRef(prop.iri), RDFS.subPropertyOf, URIRef(parent.iri)


def classify_graph(graph: Graph, *, engine: str = "pellet") -> Graph:
    """
    Return a copy of ``graph`` extended with the classification computed by
    ``engine`` (``pellet`` or ``hermit``).

    Reasoner failures, including ``OwlReadyInconsistentOntologyError``,
    propagate unchanged.
    """
    run = REASONERS[engine]
    world = _load_world(graph)
    logger.info("Classifying with %s", engine)
    run(world, infer_property_values=False, debug=0)

    classified = Graph()
    for prefix, namespace in graph.namespaces():
        classified.bind(prefix, namespace, override=False)
    classified += graph
    added = 0
    for triple in _inferred_triples(world):
        if triple not in classified:
            classified.add(triple)
            added += 1
    logger.debug("Classification added %d triples", added)
    return classified


__all__ = ["classify_graph", "REASONERS"]
