import logging

import pytest
from rdflib import Graph, Namespace, OWL, RDF, RDFS

from owl2uml import cli

ZOO = Namespace("http://example.org/zoo#")

TTL = """
@prefix : <http://example.org/zoo#> .
@prefix owl: <http://www.w3.org/2002/07/owl#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
:Animal a owl:Class .
:Dog a owl:Class ; rdfs:subClassOf :Animal , owl:Nothing .
:hasName a owl:DatatypeProperty ; rdfs:domain :Animal .
"""

class DummyReasoner:
    def __init__(self, ok=True):
        self.ok = ok
        self.called = False

    def check_graph(self, graph, *, timeout=None):
        assert len(graph) > 0
        self.called = True
        return self.ok, "HermiT logs"


def _ontology(tmp_path):
    file = tmp_path / "zoo.ttl"
    file.write_text(TTL)
    return str(file)


def test_main_writes_file(tmp_path):
    out_file = tmp_path / "zoo.puml"
    cli.main([str(out_file), _ontology(tmp_path), "--classify", "none"])
    text = out_file.read_text()
    assert text.startswith("@startuml\nhide methods\n")
    assert "class Animal<http://example.org/zoo#> {\n\thasName\n}\n" in text
    assert "XXX: Dog\n" in text
    assert text.endswith("@enduml\n")


def test_main_sysout_is_case_insensitive(tmp_path, capsys, caplog):
    caplog.set_level(logging.INFO)
    cli.main(["SysOut", _ontology(tmp_path), "--classify", "none"])
    captured = capsys.readouterr()
    assert captured.out.startswith("@startuml")
    assert "Loading: file://" in caplog.text


def test_main_logs_merge_and_output(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="owl2uml.cli")
    out_file = tmp_path / "zoo.puml"
    cli.main([str(out_file), _ontology(tmp_path), "--classify", "none"])
    messages = [r.getMessage() for r in caplog.records if r.name == "owl2uml.cli"]
    assert "Merged 1 document(s) into http://example.org" in messages
    assert f"Wrote {out_file}" in messages


def test_main_refuses_existing_output(tmp_path):
    out_file = tmp_path / "zoo.puml"
    out_file.write_text("keep me")
    with pytest.raises(SystemExit, match="already exists"):
        cli.main([str(out_file), _ontology(tmp_path)])
    assert out_file.read_text() == "keep me"


def test_main_requires_inputs(tmp_path):
    with pytest.raises(SystemExit) as exc:
        cli.main([str(tmp_path / "zoo.puml")])
    assert exc.value.code == 2


def test_main_snapshot(tmp_path, capsys):
    snapshot = tmp_path / "zoo.yaml"
    snapshot.write_text("namespace: http://example.org/zoo#\nobject_properties:\n  owns: {}\n")
    cli.main(["sysout", "--snapshot", str(snapshot)])
    out = capsys.readouterr().out
    assert "UNDEFINED1 o-- UNDEFINED1 : owns\n" in out


def test_main_snapshot_with_inputs_is_rejected(tmp_path):
    with pytest.raises(SystemExit) as exc:
        cli.main(["sysout", "--snapshot", "zoo.yaml", _ontology(tmp_path)])
    assert exc.value.code == 2


def test_main_runs_hermit_check(tmp_path, monkeypatch):
    dummy = DummyReasoner()
    monkeypatch.setattr(cli, "HermiTReasoner", lambda jar_path: dummy)
    out_file = tmp_path / "zoo.puml"
    cli.main([str(out_file), _ontology(tmp_path), "--hermit-check", "--classify", "none"])
    assert dummy.called
    assert out_file.exists()


def test_main_inconsistent_ontology_aborts(tmp_path, monkeypatch, capsys):
    dummy = DummyReasoner(ok=False)
    monkeypatch.setattr(cli, "HermiTReasoner", lambda jar_path: dummy)
    out_file = tmp_path / "zoo.puml"
    with pytest.raises(SystemExit) as exc:
        cli.main([str(out_file), _ontology(tmp_path), "--hermit-check"])
    assert exc.value.code == 1
    assert "HermiT logs" in capsys.readouterr().err
    assert not out_file.exists()


def test_main_parse_error_propagates(tmp_path):
    bad = tmp_path / "bad.ttl"
    bad.write_text("this is not turtle")
    with pytest.raises(Exception):
        cli.main(["sysout", str(bad), "--classify", "none"])


def test_main_classifies_with_selected_reasoner(tmp_path, monkeypatch, capsys):
    seen = {}

    def fake_classify(graph, *, engine):
        seen['engine'] = engine
        classified = Graph()
        classified += graph
        classified.add((ZOO.Pet, RDF.type, OWL.Class))
        classified.add((ZOO.Pet, RDFS.subClassOf, ZOO.Animal))
        return classified

    monkeypatch.setattr(cli, "classify_graph", fake_classify)
    cli.main(["sysout", _ontology(tmp_path), "--classify", "hermit"])
    assert seen['engine'] == "hermit"
    assert "Animal <|-- Pet\n" in capsys.readouterr().out


def test_main_classifies_with_pellet_by_default(tmp_path, monkeypatch):
    engines = []

    def fake_classify(graph, *, engine):
        engines.append(engine)
        return graph

    monkeypatch.setattr(cli, "classify_graph", fake_classify)
    cli.main([str(tmp_path / "zoo.puml"), _ontology(tmp_path)])
    assert engines == ["pellet"]


def test_main_rejects_unknown_reasoner(tmp_path):
    with pytest.raises(SystemExit) as exc:
        cli.main(["sysout", _ontology(tmp_path), "--classify", "fact"])
    assert exc.value.code == 2
