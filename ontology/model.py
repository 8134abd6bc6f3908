"""Domain entities for a classified ontology: class expressions and properties."""

from dataclasses import dataclass, field
from typing import Dict, Set, Tuple, Union

from rdflib import OWL

# Bucket for properties whose domain is missing or anonymous, and the
# synthetic diagram node standing in for unknown endpoints.
UNDEFINED = "UNDEFINED"


@dataclass(frozen=True)
class NamedClass:
    """OWL class with a stable IRI."""

    iri: str

    @property
    def is_anonymous(self) -> bool:
        return False


@dataclass(frozen=True)
class AnonymousClass:
    """Composite class expression (union, intersection, complement, ...).

    Never becomes a diagram node; it is decomposed or resolved to UNDEFINED.
    """

    kind: str
    operands: Tuple["ClassExpression", ...] = field(default_factory=tuple)
    # Distinguishes expressions without class operands (restriction property, oneOf members).
    detail: str = ""

    @property
    def is_anonymous(self) -> bool:
        return True

    @property
    def is_union(self) -> bool:
        return self.kind == "union"


ClassExpression = Union[NamedClass, AnonymousClass]


@dataclass(frozen=True)
class DataProperty:
    """Named OWL datatype property."""

    iri: str

    @property
    def is_bottom(self) -> bool:
        return self.iri == str(OWL.bottomDataProperty)


@dataclass(frozen=True)
class ObjectProperty:
    """Named OWL object property."""

    iri: str

    @property
    def is_bottom(self) -> bool:
        return self.iri == str(OWL.bottomObjectProperty)

    @property
    def named_property(self) -> "ObjectProperty":
        return self


@dataclass(frozen=True)
class InverseObjectProperty:
    """``ObjectInverseOf(p)``: a property expression without its own IRI."""

    inverse: ObjectProperty

    @property
    def is_bottom(self) -> bool:
        return self.inverse.is_bottom

    @property
    def named_property(self) -> ObjectProperty:
        return self.inverse


ObjectPropertyExpression = Union[ObjectProperty, InverseObjectProperty]

# Class IRI (or UNDEFINED) -> data properties whose domain resolves there.
PropertyIndex = Dict[str, Set[DataProperty]]
