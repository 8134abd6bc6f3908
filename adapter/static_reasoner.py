"""Infrastructure: reasoner answering from a fixed classification snapshot."""
from typing import Any, Dict, Iterable, Mapping, Optional, Set

from rdflib import OWL

from ontology.model import (
    AnonymousClass,
    ClassExpression,
    DataProperty,
    InverseObjectProperty,
    NamedClass,
    ObjectProperty,
)
from .taxonomy import Taxonomy


class StaticReasoner:
    """Reasoner built from plain mappings of classes and properties.

    ``classes`` maps a class name to ``{"parents": [...], "satisfiable": bool}``;
    property mappings carry ``parents``, ``domains`` and (object properties)
    ``ranges``. Bare names are expanded against ``namespace``.
    """

    top_class = NamedClass(str(OWL.Thing))
    top_data_property = DataProperty(str(OWL.topDataProperty))
    top_object_property = ObjectProperty(str(OWL.topObjectProperty))

    def __init__(
        self,
        classes: Optional[Mapping[str, Any]] = None,
        data_properties: Optional[Mapping[str, Any]] = None,
        object_properties: Optional[Mapping[str, Any]] = None,
        *,
        namespace: str = "",
    ) -> None:
        self.namespace = namespace
        self._satisfiable: Dict[str, bool] = {}
        self._domains: Dict[str, Set[ClassExpression]] = {}
        self._ranges: Dict[str, Set[ClassExpression]] = {}

        class_parents = {}
        for name, spec in (classes or {}).items():
            spec = spec or {}
            iri = self.expand(name)
            self._satisfiable[iri] = bool(spec.get("satisfiable", True))
            class_parents[iri] = {self.expand(p) for p in spec.get("parents") or ()}
        self._classes = Taxonomy(self._satisfiable, class_parents, self.top_class.iri)
        self._data = self._properties(data_properties or {}, self.top_data_property.iri)
        self._object = self._properties(object_properties or {}, self.top_object_property.iri)

    def expand(self, name: str) -> str:
        if "://" in name or name.startswith("urn:"):
            return name
        return self.namespace + name

    def expression(self, value: Any) -> ClassExpression:
        """Build a class expression from a name or a one-key constructor mapping."""
        if isinstance(value, str):
            return NamedClass(self.expand(value))
        if isinstance(value, Mapping) and len(value) == 1:
            kind, operands = next(iter(value.items()))
            if kind in ("union", "intersection") and isinstance(operands, list):
                return AnonymousClass(kind, tuple(self.expression(op) for op in operands))
            if kind == "complement":
                return AnonymousClass(kind, (self.expression(operands),))
        raise ValueError(f"Unsupported class expression: {value!r}")

    def _properties(self, entries: Mapping[str, Any], top: str) -> Taxonomy:
        parents = {}
        for name, spec in entries.items():
            spec = spec or {}
            iri = self.expand(name)
            parents[iri] = {self.expand(p) for p in spec.get("parents") or ()}
            self._domains[iri] = self._expressions(spec.get("domains"))
            self._ranges[iri] = self._expressions(spec.get("ranges"))
        return Taxonomy(parents, parents, top)

    def _expressions(self, values: Optional[Iterable[Any]]) -> Set[ClassExpression]:
        return {self.expression(v) for v in values or ()}

    def is_satisfiable(self, cls: NamedClass) -> bool:
        if cls.iri == self.top_class.iri:
            return True
        return self._satisfiable[cls.iri]

    def subclasses_of(self, cls: NamedClass, direct: bool) -> Set[NamedClass]:
        return {NamedClass(iri) for iri in self._classes.descendants(cls.iri, direct)}

    def classes_in_signature(self) -> Set[NamedClass]:
        return {NamedClass(iri) for iri in self._classes.members}

    def subproperties_of(self, prop, direct: bool) -> set:
        if isinstance(prop, DataProperty):
            return {DataProperty(iri) for iri in self._data.descendants(prop.iri, direct)}
        if isinstance(prop, ObjectProperty):
            return {ObjectProperty(iri) for iri in self._object.descendants(prop.iri, direct)}
        return set()

    def domains_of(self, prop) -> Set[ClassExpression]:
        if isinstance(prop, InverseObjectProperty):
            return set(self._ranges[prop.named_property.iri])
        return set(self._domains[prop.iri])

    def ranges_of(self, prop) -> Set[ClassExpression]:
        if isinstance(prop, InverseObjectProperty):
            return set(self._domains[prop.named_property.iri])
        return set(self._ranges[prop.iri])

__all__ = ["StaticReasoner"]
