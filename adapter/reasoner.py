from typing import Protocol, Set, Union

from ontology.model import (
    ClassExpression,
    DataProperty,
    NamedClass,
    ObjectProperty,
    ObjectPropertyExpression,
)

Property = Union[DataProperty, ObjectPropertyExpression]


class Reasoner(Protocol):
    """Interface for the classification results of an ontology.

    Every answer is authoritative; failures propagate to the caller.
    """

    top_class: NamedClass
    top_data_property: DataProperty
    top_object_property: ObjectProperty

    def is_satisfiable(self, cls: NamedClass) -> bool:
        ...

    def subclasses_of(self, cls: NamedClass, direct: bool) -> Set[NamedClass]:
        ...

    def subproperties_of(self, prop: Property, direct: bool) -> Set[Property]:
        ...

    def domains_of(self, prop: Property) -> Set[ClassExpression]:
        ...

    def ranges_of(self, prop: ObjectPropertyExpression) -> Set[ClassExpression]:
        ...

    def classes_in_signature(self) -> Set[NamedClass]:
        """All named classes of the ontology, built-ins excluded."""
        ...

