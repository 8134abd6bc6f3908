"""Command-line interface for the OWL to PlantUML converter."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from adapter.graph_reasoner import ClassifiedGraphReasoner
from adapter.hermit_runner import HERMIT_JAR, HermiTReasoner
from adapter.owl_loader import MERGED_ONTOLOGY_IRI, load_merged
from adapter.owlready_classifier import REASONERS, classify_graph
from adapter.yaml_loader import load_snapshot
from ontology.service import DiagramWriter

logger = logging.getLogger(__name__)

STDOUT_TARGET = "sysout"
NO_CLASSIFICATION = "none"
LOG_FORMAT = "%(levelname)s: %(message)s"


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert classified OWL ontologies into a PlantUML class diagram",
    )
    parser.add_argument(
        "output",
        help=f"Output file, or '{STDOUT_TARGET}' for standard output. Existing files are never overwritten",
    )
    parser.add_argument("inputs", nargs="*", help="Ontology documents to load and merge")
    parser.add_argument(
        "--snapshot",
        help="YAML snapshot of a classified model, used instead of ontology documents",
    )
    parser.add_argument("--format", default=None, help="rdflib parser format (guessed by default)")
    parser.add_argument(
        "--merged-iri",
        default=MERGED_ONTOLOGY_IRI,
        help="IRI of the merged ontology",
    )
    parser.add_argument(
        "--classify",
        choices=[*REASONERS, NO_CLASSIFICATION],
        default="pellet",
        help=f"DL reasoner used to classify the merged ontology, or '{NO_CLASSIFICATION}' for already classified input",
    )
    parser.add_argument(
        "--hermit-check",
        action="store_true",
        help="Check consistency of the merged ontology with HermiT first",
    )
    parser.add_argument("--hermit", default=HERMIT_JAR, help="Path to HermiT JAR")
    parser.add_argument("--timeout", type=float, default=None, help="HermiT timeout in seconds")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings")

    args = parser.parse_intermixed_args(argv)
    if args.snapshot and args.inputs:
        parser.error("--snapshot cannot be combined with ontology documents")
    if not args.snapshot and not args.inputs:
        parser.error("no input documents given")
    if args.snapshot and args.hermit_check:
        parser.error("--hermit-check needs ontology documents")
    return args


def _setup_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    _setup_logging(args)

    to_stdout = args.output.lower() == STDOUT_TARGET
    if not to_stdout and Path(args.output).exists():
        raise SystemExit(f"Output file already exists: {args.output}")

    if args.snapshot:
        reasoner = load_snapshot(args.snapshot)
    else:
        merged, components = load_merged(args.inputs, format=args.format, merged_iri=args.merged_iri)
        logger.info("Merged %d document(s) into %s", len(components), args.merged_iri)
        if args.hermit_check:
            ok, logs = HermiTReasoner(jar_path=args.hermit).check_graph(merged, timeout=args.timeout)
            print(logs, file=sys.stderr)
            if not ok:
                raise SystemExit(1)
        if args.classify != NO_CLASSIFICATION:
            merged = classify_graph(merged, engine=args.classify)
        reasoner = ClassifiedGraphReasoner(merged)

    writer = DiagramWriter(reasoner)
    if to_stdout:
        writer.write(sys.stdout)
        return
    with open(args.output, "x", encoding="utf-8") as out:
        writer.write(out)
    logger.info("Wrote %s", args.output)


if __name__ == "__main__":  # pragma: no cover - manual entrypoint
    main(sys.argv[1:])
