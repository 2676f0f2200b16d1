# tests/core/document/test_store.py
"""
Testes do ConfigDocument (carregamento e gravação do backing file).

Este módulo valida:
- criação do backing file vazio quando ausente
- carregamento de YAML e JSON, incluindo arquivos vazios
- rejeição de raízes que não são mapeamentos e de extensões desconhecidas
- gravação atômica e registro de eventos de sucesso e falha

Invariantes:
    - Uma gravação com falha não deixa arquivo temporário para trás
    - Uma gravação com falha nunca é silenciosa (exceção + evento)

Limites explícitos:
    - Não valida schemas nem accessors
"""

import json
from pathlib import Path

import pytest

from bound_config.core.document.events import events_of_type
from bound_config.core.document.hashing import compute_document_hash
from bound_config.core.document.store import ConfigDocument
from bound_config.core.errors import PersistenceError, UnsupportedDocumentFormatError


def test_open_creates_missing_file_and_parents(tmp_path: Path):
    path = tmp_path / "nested" / "dir" / "Server.yml"

    doc = ConfigDocument.open(path)

    assert path.is_file()
    assert doc.root == {}
    assert [e["event_type"] for e in doc.events] == ["document_created", "document_loaded"]
    assert doc.fingerprint == compute_document_hash({})


def test_open_existing_file_does_not_emit_created(tmp_path: Path, write_yaml):
    path = write_yaml(tmp_path / "Server.yml", {"server-port": 8080, "database": {"host": "db"}})

    doc = ConfigDocument.open(path)

    assert doc.root == {"server-port": 8080, "database": {"host": "db"}}
    assert events_of_type(doc.events, "document_created") == []
    loaded = events_of_type(doc.events, "document_loaded")[0]
    assert loaded["payload"]["keys"] == 2


def test_empty_file_loads_as_empty_mapping(tmp_path: Path):
    path = tmp_path / "Empty.yml"
    path.write_text("", encoding="utf-8")

    assert ConfigDocument.open(path).root == {}


def test_empty_json_file_loads_as_empty_mapping(tmp_path: Path):
    path = tmp_path / "Empty.json"
    path.write_text("  \n", encoding="utf-8")

    assert ConfigDocument.open(path).root == {}


def test_non_mapping_root_is_rejected(tmp_path: Path):
    path = tmp_path / "List.yml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(PersistenceError) as exc:
        ConfigDocument.open(path)
    assert exc.value.path == path


def test_invalid_yaml_is_rejected(tmp_path: Path):
    path = tmp_path / "Broken.yml"
    path.write_text("a: [1, 2\n", encoding="utf-8")

    with pytest.raises(PersistenceError):
        ConfigDocument.open(path)


def test_unsupported_suffix_is_rejected(tmp_path: Path):
    with pytest.raises(UnsupportedDocumentFormatError):
        ConfigDocument.open(tmp_path / "Server.toml")
    assert not (tmp_path / "Server.toml").exists()


def test_save_writes_yaml_preserving_insertion_order(tmp_path: Path, read_yaml):
    path = tmp_path / "Server.yml"
    doc = ConfigDocument.open(path)
    doc.root["server-port"] = 25565
    doc.root["motd"] = "Olá"
    doc.root["database"] = {"host": "localhost"}

    fingerprint = doc.save()

    assert read_yaml(path) == {"server-port": 25565, "motd": "Olá", "database": {"host": "localhost"}}
    assert list(read_yaml(path)) == ["server-port", "motd", "database"]
    assert "Olá" in path.read_text(encoding="utf-8")
    assert fingerprint == doc.fingerprint == compute_document_hash(doc.root)
    saved = events_of_type(doc.events, "document_saved")
    assert saved[-1]["payload"] == {"fingerprint": fingerprint}
    assert not (tmp_path / "Server.yml.tmp").exists()


def test_save_writes_json(tmp_path: Path):
    path = tmp_path / "Server.json"
    doc = ConfigDocument.open(path)
    doc.root["worlds"] = ["lobby"]

    doc.save()

    assert json.loads(path.read_text(encoding="utf-8")) == {"worlds": ["lobby"]}


def test_save_failure_raises_and_records_event(tmp_path: Path):
    path = tmp_path / "Server.yml"
    doc = ConfigDocument.open(path)
    path.unlink()
    path.mkdir()
    doc.root["server-port"] = 1

    with pytest.raises(PersistenceError) as exc:
        doc.save()

    assert exc.value.path == path
    failed = events_of_type(doc.events, "save_failed")
    assert len(failed) == 1
    assert failed[0]["payload"]["exc_type"]
    assert events_of_type(doc.events, "document_saved") == []
    assert not (tmp_path / "Server.yml.tmp").exists()
    assert doc.root == {"server-port": 1}


def test_unserializable_value_fails_without_truncating(tmp_path: Path, read_yaml, write_yaml):
    path = write_yaml(tmp_path / "Server.yml", {"server-port": 8080})
    doc = ConfigDocument.open(path)
    doc.root["bad"] = object()

    with pytest.raises(PersistenceError):
        doc.save()

    assert read_yaml(path) == {"server-port": 8080}


def test_non_string_keys_are_loaded_as_strings(tmp_path: Path, read_yaml):
    path = tmp_path / "Server.yml"
    path.write_text("worlds: [7]\n7:\n  name: Seven\n  1: one\n", encoding="utf-8")

    doc = ConfigDocument.open(path)

    assert doc.root == {"worlds": [7], "7": {"name": "Seven", "1": "one"}}
    assert doc.fingerprint == compute_document_hash(doc.root)

    doc.root["motd"] = "oi"
    doc.save()
    assert read_yaml(path)["7"] == {"name": "Seven", "1": "one"}


def test_mixed_key_types_fail_save_as_persistence_error(tmp_path: Path):
    doc = ConfigDocument.open(tmp_path / "Server.yml")
    doc.root.update({"a": 1, 2: "b"})

    with pytest.raises(PersistenceError):
        doc.save()
    assert len(events_of_type(doc.events, "save_failed")) == 1
