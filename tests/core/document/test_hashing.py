# tests/core/document/test_hashing.py
"""
Testes do fingerprint canônico de documentos.

Os testes asseguram que:
- árvores equivalentes produzem o mesmo hash, independentemente da ordem das chaves
- alterações na árvore produzem hashes diferentes
- o algoritmo corresponde ao SHA-256 do JSON canônico
- entradas que não são mapeamentos são rejeitadas

Limites explícitos:
    - Não valida a gravação do fingerprint no Event Log
"""

import hashlib
import json
from datetime import date

import pytest

from bound_config.core.document.hashing import compute_document_hash


def _canonical_sha256(obj: dict) -> str:
    s = json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)
    return hashlib.sha256(s.encode("utf-8")).hexdigest()


def test_hash_matches_canonical_sha256():
    root = {"server-port": 25565, "database": {"host": "localhost"}}
    assert compute_document_hash(root) == _canonical_sha256(root)


def test_hash_is_independent_of_key_order():
    a = {"a": 1, "b": {"x": [1, 2], "y": "ç"}}
    b = {"b": {"y": "ç", "x": [1, 2]}, "a": 1}
    assert compute_document_hash(a) == compute_document_hash(b)


def test_hash_changes_with_content():
    assert compute_document_hash({"a": 1}) != compute_document_hash({"a": 2})


def test_hash_is_stable_hex_and_does_not_mutate_input():
    root = {"z": 1, "a": {"k": "v"}}
    before = json.dumps(root)

    h = compute_document_hash(root)

    assert len(h) == 64
    int(h, 16)
    assert json.dumps(root) == before


def test_non_json_values_are_hashed_as_text():
    # PyYAML carrega datas como `date`
    root = {"since": date(2024, 1, 2)}
    assert compute_document_hash(root) == compute_document_hash({"since": "2024-01-02"})


@pytest.mark.parametrize("bad", [[], "x", None, 1])
def test_non_mapping_root_is_rejected(bad):
    with pytest.raises(TypeError):
        compute_document_hash(bad)
