import io

from ontology.diagram import Diagram
from ontology.hierarchy import HierarchyProjector
from ontology.model import UNDEFINED, DataProperty, NamedClass
from adapter.static_reasoner import StaticReasoner

ZOO = "http://example.org/zoo#"


def _project(reasoner, index=None):
    out = io.StringIO()
    HierarchyProjector(reasoner).project(reasoner.top_class, index or {}, Diagram(out))
    return out.getvalue().splitlines()


def test_unsatisfiable_child_is_dropped_and_reported():
    reasoner = StaticReasoner(
        {"Animal": {}, "Dog": {"parents": ["Animal"], "satisfiable": False}},
        namespace=ZOO,
    )
    index = {ZOO + "Animal": {DataProperty(ZOO + "hasName")}}
    assert _project(reasoner, index) == [
        f"class Animal<{ZOO}> {{",
        "\thasName",
        "}",
        "XXX: Dog",
    ]


def test_inheritance_edges_follow_child_blocks():
    reasoner = StaticReasoner(
        {"Animal": {}, "Dog": {"parents": ["Animal"]}, "Puppy": {"parents": ["Dog"]}},
        namespace=ZOO,
    )
    assert _project(reasoner) == [
        f"class Animal<{ZOO}> {{",
        "}",
        f"class Dog<{ZOO}> {{",
        "}",
        "Animal <|-- Dog",
        f"class Puppy<{ZOO}> {{",
        "}",
        "Dog <|-- Puppy",
    ]


def test_satisfiable_descendant_of_unsatisfiable_class_is_suppressed():
    reasoner = StaticReasoner(
        {
            "Animal": {},
            "Chimera": {"parents": ["Animal"], "satisfiable": False},
            "Kitten": {"parents": ["Chimera"]},
        },
        namespace=ZOO,
    )
    lines = _project(reasoner)
    assert not any("Kitten" in line and line.startswith("class") for line in lines)
    assert "XXX: Chimera" in lines
    assert "XXX: Kitten" not in lines


def test_disconnected_unsatisfiable_class_is_reported():
    reasoner = StaticReasoner({"Ghost": {"satisfiable": False}, "Animal": {}}, namespace=ZOO)
    lines = _project(reasoner)
    assert lines[-1] == "XXX: Ghost"
    assert not any(line.startswith("class Ghost") for line in lines)


def test_multiple_parents_emit_class_once_per_parent():
    reasoner = StaticReasoner(
        {"Pet": {}, "Animal": {}, "Dog": {"parents": ["Pet", "Animal"]}},
        namespace=ZOO,
    )
    lines = _project(reasoner)
    assert lines.count(f"class Dog<{ZOO}> {{") == 2
    assert "Animal <|-- Dog" in lines
    assert "Pet <|-- Dog" in lines


def test_fields_are_sorted_by_label():
    reasoner = StaticReasoner({"Animal": {}}, namespace=ZOO)
    index = {ZOO + "Animal": {DataProperty(ZOO + "weight"), DataProperty(ZOO + "age")}}
    assert _project(reasoner, index)[1:3] == ["\tage", "\tweight"]


def test_undefined_block_is_emitted_last():
    reasoner = StaticReasoner({"Ghost": {"satisfiable": False}}, namespace=ZOO)
    index = {UNDEFINED: {DataProperty(ZOO + "note"), DataProperty(ZOO + "comment")}}
    assert _project(reasoner, index) == [
        "XXX: Ghost",
        "class UNDEFINED {",
        "\tcomment",
        "\tnote",
        "}",
    ]


def test_undefined_block_keeps_raw_fragments():
    reasoner = StaticReasoner({"Animal": {}}, namespace=ZOO)
    prop = DataProperty(ZOO + "free-text")
    index = {ZOO + "Animal": {prop}, UNDEFINED: {prop}}
    lines = _project(reasoner, index)
    assert lines[1] == "\tfreetext"
    assert lines[-2] == "\tfree-text"


def test_empty_undefined_bucket_emits_nothing():
    reasoner = StaticReasoner({}, namespace=ZOO)
    assert _project(reasoner, {UNDEFINED: set()}) == []


class SelfLoopReasoner(StaticReasoner):
    """Reports every class as its own direct subclass, as for equivalent classes."""

    def subclasses_of(self, cls, direct):
        found = super().subclasses_of(cls, direct)
        if cls != self.top_class:
            found.add(cls)
        return found


def test_class_reported_as_own_subclass_is_not_recursed():
    reasoner = SelfLoopReasoner({"Animal": {}, "Dog": {"parents": ["Animal"]}}, namespace=ZOO)
    lines = _project(reasoner)
    assert lines.count(f"class Animal<{ZOO}> {{") == 1
    assert lines.count(f"class Dog<{ZOO}> {{") == 1
    assert "Animal <|-- Animal" not in lines


def test_root_is_not_emitted():
    reasoner = StaticReasoner({"Animal": {}}, namespace=ZOO)
    lines = _project(reasoner)
    assert not any("Thing" in line for line in lines)
    assert NamedClass(ZOO + "Animal") in reasoner.subclasses_of(reasoner.top_class, direct=True)
