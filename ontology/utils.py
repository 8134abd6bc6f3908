"""Utility helpers shared by the diagram projectors."""
import re
from typing import Iterable, List, Tuple, Union

from .model import (
    UNDEFINED,
    AnonymousClass,
    ClassExpression,
    DataProperty,
    NamedClass,
    ObjectPropertyExpression,
)

_SEPARATOR = re.compile(r"^(.*[#/])([^#/]*)$")


def split_iri(iri: str) -> Tuple[str, str]:
    """Return ``(namespace, fragment)`` split at the last ``#`` or ``/``."""
    match = _SEPARATOR.match(str(iri))
    if match is None:
        return "", str(iri)
    return match.group(1), match.group(2)


def label_for(entity: Union[NamedClass, DataProperty, ObjectPropertyExpression, str]) -> str:
    """Diagram label: the IRI fragment without hyphens.

    Property expressions are labelled after their named property.
    """
    named = getattr(entity, "named_property", entity)
    iri = getattr(named, "iri", named)
    return split_iri(iri)[1].replace("-", "")


def label_for_class(cls: NamedClass) -> str:
    """Class block header: label followed by ``<namespace>``."""
    return f"{label_for(cls)}<{split_iri(cls.iri)[0]}>"


def class_label(expr: ClassExpression) -> str:
    """Label of a disjunct, or UNDEFINED for anonymous branches."""
    return UNDEFINED if expr.is_anonymous else label_for(expr)


def class_bucket(expr: ClassExpression) -> str:
    """Index key of a disjunct: the class IRI, or UNDEFINED for anonymous branches."""
    return UNDEFINED if expr.is_anonymous else expr.iri


def expression_key(expr: ClassExpression) -> tuple:
    """Deterministic ordering key; named classes sort before anonymous ones."""
    if isinstance(expr, AnonymousClass):
        return (1, expr.kind, expr.detail, tuple(expression_key(op) for op in expr.operands))
    return (0, label_for(expr), expr.iri)


def entity_key(entity) -> tuple:
    """Deterministic ordering key for named classes and property expressions."""
    named = getattr(entity, "named_property", entity)
    return (label_for(named), named.iri, named is not entity)


def sorted_entities(entities: Iterable) -> list:
    return sorted(entities, key=entity_key)


def sorted_expressions(expressions: Iterable[ClassExpression]) -> List[ClassExpression]:
    return sorted(expressions, key=expression_key)


def as_disjunct_set(expr: ClassExpression) -> List[ClassExpression]:
    """Decompose ``expr`` into its union branches.

    Nested unions are flattened; any other expression is its own single
    branch.
    """
    branches = set()
    pending = [expr]
    while pending:
        current = pending.pop()
        if isinstance(current, AnonymousClass) and current.is_union:
            pending.extend(current.operands)
        else:
            branches.add(current)
    return sorted_expressions(branches)

__all__ = [
    "split_iri",
    "label_for",
    "label_for_class",
    "class_label",
    "class_bucket",
    "expression_key",
    "entity_key",
    "sorted_entities",
    "sorted_expressions",
    "as_disjunct_set",
]
