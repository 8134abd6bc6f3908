"""Infrastructure: load ontology documents and merge them into one graph."""
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
import logging

from rdflib import Graph, RDF, OWL, URIRef

logger = logging.getLogger(__name__)

MERGED_ONTOLOGY_IRI = "http://example.org"


def load_ontology(path: str, *, format: Optional[str] = None) -> Graph:
    """Parse one document; parser errors propagate unchanged."""
    logger.info("Loading: %s", Path(path).absolute().as_uri())
    g = Graph()
    g.parse(str(path), format=format)
    return g


def merge_ontologies(components: Sequence[Graph], merged_iri: str = MERGED_ONTOLOGY_IRI) -> Graph:
    """
    Return a new graph holding the axioms of every component under a single
    ``owl:Ontology`` header named ``merged_iri``.
    """
    merged = Graph()
    for component in components:
        for prefix, namespace in component.namespaces():
            merged.bind(prefix, namespace, override=False)
        merged += component

    for header in list(merged.subjects(RDF.type, OWL.Ontology)):
        merged.remove((header, None, None))
    merged.add((URIRef(merged_iri), RDF.type, OWL.Ontology))
    return merged


def load_merged(
    paths: Sequence[str],
    *,
    format: Optional[str] = None,
    merged_iri: str = MERGED_ONTOLOGY_IRI,
) -> Tuple[Graph, List[Graph]]:
    """Load every document in ``paths`` and return ``(merged, components)``."""
    components = [load_ontology(p, format=format) for p in paths]
    return merge_ontologies(components, merged_iri), components

__all__ = ["load_ontology", "merge_ontologies", "load_merged", "MERGED_ONTOLOGY_IRI"]
