"""Told subsumption hierarchy over IRIs, shared by the reasoner adapters."""
from typing import Dict, Iterable, Mapping, Set


class Taxonomy:
    """Subsumption hierarchy built from asserted ``child -> parents`` edges.

    Cycles of assertions make their members equivalent; equivalent members
    are siblings of each other, never sub-entities.
    """

    def __init__(self, members: Iterable[str], parents: Mapping[str, Iterable[str]], top: str) -> None:
        self.top = top
        self.members: Set[str] = set(members) - {top}
        self.parents: Dict[str, Set[str]] = {k: set(v) for k, v in parents.items()}
        self._ancestors: Dict[str, Set[str]] = {}

    def ancestors(self, iri: str) -> Set[str]:
        """All transitively asserted parents of ``iri``."""
        cached = self._ancestors.get(iri)
        if cached is not None:
            return cached
        seen: Set[str] = set()
        stack = list(self.parents.get(iri, ()))
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            stack.extend(self.parents.get(current, ()))
        self._ancestors[iri] = seen
        return seen

    def equivalents(self, iri: str) -> Set[str]:
        return {iri} | {a for a in self.ancestors(iri) if iri in self.ancestors(a)}

    def strict_ancestors(self, iri: str) -> Set[str]:
        return self.ancestors(iri) - self.equivalents(iri) - {self.top}

    def descendants(self, iri: str, direct: bool) -> Set[str]:
        if iri == self.top:
            pool = set(self.members)
        else:
            pool = {m for m in self.members if iri in self.ancestors(m)} - self.equivalents(iri)
        if not direct:
            return pool
        return {m for m in pool if not self.strict_ancestors(m) & pool}

__all__ = ["Taxonomy"]
