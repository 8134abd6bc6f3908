"""PlantUML class-diagram lines written to an append-only text sink."""
from typing import Iterable, TextIO


class Diagram:
    """Formats diagram statements, one line each, onto ``out``."""

    def __init__(self, out: TextIO) -> None:
        self.out = out

    def line(self, text: str) -> None:
        self.out.write(text + "\n")

    def begin(self) -> None:
        self.line("@startuml")
        self.line("hide methods")

    def end(self) -> None:
        self.line("@enduml")

    def class_block(self, header: str, fields: Iterable[str]) -> None:
        self.line(f"class {header} {{")
        for name in fields:
            self.line(f"\t{name}")
        self.line("}")

    def inheritance(self, parent: str, child: str) -> None:
        self.line(f"{parent} <|-- {child}")

    def association(self, domain: str, range_: str, label: str) -> None:
        self.line(f"{domain} o-- {range_} : {label}")

    def unsatisfiable(self, label: str) -> None:
        self.line(f"XXX: {label}")

    def flush(self) -> None:
        self.out.flush()

__all__ = ["Diagram"]
