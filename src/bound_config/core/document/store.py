# src/bound_config/core/document/store.py
"""
Document Tree — carregamento e gravação do backing file.

Este módulo define o `ConfigDocument`, o adaptador mínimo entre a árvore
em memória (dicionários puros) e o arquivo físico que a persiste.

A árvore é composta por:
    - nós: `dict` com chaves `str`
    - valores: escalares, listas ou nós aninhados

Responsabilidades do módulo:
    - Criar o backing file vazio quando ausente
    - Carregar a árvore em YAML ou JSON, de acordo com a extensão
    - Validar o tipo raiz (sempre um mapeamento)
    - Gravar a árvore completa de forma atômica (arquivo temporário + replace)
    - Registrar eventos de carregamento e gravação

Decisões arquiteturais:
    - O parser/writer é a PyYAML (`safe_load` / `safe_dump`); JSON via stdlib
    - O formato é inferido apenas pela extensão do arquivo
    - Arquivos vazios são interpretados como dicionários vazios
    - Chaves não textuais do YAML (ex.: `7:`) são convertidas para `str` no carregamento
    - Falhas de I/O são sempre convertidas em `PersistenceError`

Invariantes:
    - `root` é sempre um `dict` e sua identidade nunca muda
    - Uma gravação com falha nunca trunca o documento anterior
    - Toda gravação grava a árvore inteira, nunca uma seção isolada

Limites explícitos:
    - Não conhece schemas nem accessors
    - Não decide quando gravar (responsabilidade do Mapping Engine)
    - Não suporta acesso concorrente entre processos
"""

from __future__ import annotations

import json
import logging
import os
from contextlib import suppress
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml  # PyYAML

from ..errors import PersistenceError, UnsupportedDocumentFormatError
from .events import (
    DOCUMENT_CREATED,
    DOCUMENT_LOADED,
    DOCUMENT_SAVED,
    SAVE_FAILED,
    add_event,
)
from .hashing import compute_document_hash

logger = logging.getLogger(__name__)

YAML_SUFFIXES = frozenset({".yml", ".yaml"})
JSON_SUFFIXES = frozenset({".json"})
SUPPORTED_SUFFIXES = YAML_SUFFIXES | JSON_SUFFIXES


def check_suffix(suffix: str) -> str:
    """Normaliza e valida a extensão de um backing file."""
    normalized = suffix.lower()
    if normalized not in SUPPORTED_SUFFIXES:
        raise UnsupportedDocumentFormatError(f"Formato não suportado: {suffix}")
    return normalized


def _string_keys(value: Any) -> Any:
    """Converte recursivamente as chaves de mapeamentos para `str` (`7:` → `"7"`)."""
    if isinstance(value, dict):
        return {str(k): _string_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_string_keys(v) for v in value]
    return value


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um backing file e valida sua estrutura básica.

    Args:
        path (Path): caminho do arquivo.

    Returns:
        Dict[str, Any]: árvore carregada (vazia para arquivos vazios).

    Raises:
        UnsupportedDocumentFormatError: se a extensão não for suportada.
        PersistenceError: se o arquivo não puder ser lido ou parseado,
            ou se a raiz não for um mapeamento.
    """
    suffix = check_suffix(path.suffix)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PersistenceError(f"Falha ao ler {path}: {e}", path=path) from e

    try:
        if suffix in YAML_SUFFIXES:
            data = yaml.safe_load(raw)
        else:
            data = json.loads(raw) if raw.strip() else None
    except (yaml.YAMLError, ValueError) as e:
        raise PersistenceError(f"Falha ao parsear {path}: {e}", path=path) from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise PersistenceError(
            f"Raiz do documento deve ser um mapeamento, recebido: {type(data).__name__}",
            path=path,
        )

    return _string_keys(data)


def _dump(root: Dict[str, Any], suffix: str) -> str:
    if suffix in YAML_SUFFIXES:
        return yaml.safe_dump(
            root,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    return json.dumps(root, indent=2, ensure_ascii=False) + "\n"


class ConfigDocument:
    """
    Árvore de configuração associada a um backing file.

    O documento é o único dono do nó raiz; bindings aninhados guardam
    referências para nós filhos desta mesma árvore, nunca cópias.

    Attributes:
        path: backing file.
        root: nó raiz (dict) da árvore.
        events: Event Log ordenado do documento.
        fingerprint: hash da última gravação bem-sucedida (ou do carregamento).
    """

    def __init__(self, path: Union[str, Path], root: Optional[Dict[str, Any]] = None):
        self.path = Path(path)
        self.suffix = check_suffix(self.path.suffix)
        self.root: Dict[str, Any] = root if root is not None else {}
        self.events: List[Dict[str, Any]] = []
        self.fingerprint: Optional[str] = None

    @classmethod
    def open(cls, path: Union[str, Path]) -> "ConfigDocument":
        """
        Abre (criando quando necessário) e carrega um backing file.

        Raises:
            UnsupportedDocumentFormatError: se a extensão não for suportada.
            PersistenceError: se o arquivo não puder ser criado, lido ou parseado.
        """
        path = Path(path)
        check_suffix(path.suffix)
        created = False

        if not path.exists():
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.touch()
            except OSError as e:
                raise PersistenceError(
                    f"Não foi possível criar o arquivo de configuração: {path}", path=path
                ) from e
            created = True

        doc = cls(path, _load_file(path))
        doc.fingerprint = compute_document_hash(doc.root)

        if created:
            logger.info("Arquivo de configuração criado: %s", path)
            add_event(doc.events, event_type=DOCUMENT_CREATED, path=path)
        add_event(
            doc.events,
            event_type=DOCUMENT_LOADED,
            path=path,
            payload={"keys": len(doc.root), "fingerprint": doc.fingerprint},
        )
        logger.debug("Documento carregado: %s (%d chaves)", path, len(doc.root))
        return doc

    def save(self) -> str:
        """
        Grava a árvore inteira no backing file.

        A escrita ocorre em um arquivo temporário irmão, movido para o
        lugar do original apenas após o sucesso da escrita.

        Returns:
            str: fingerprint do conteúdo gravado.

        Raises:
            PersistenceError: se a árvore não puder ser serializada ou gravada.
        """
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            text = _dump(self.root, self.suffix)
            fingerprint = compute_document_hash(self.root)
            tmp.write_text(text, encoding="utf-8")
            os.replace(tmp, self.path)
        except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
            with suppress(OSError):
                tmp.unlink()
            err = PersistenceError(f"Falha ao gravar {self.path}: {e}", path=self.path)
            add_event(
                self.events,
                event_type=SAVE_FAILED,
                path=self.path,
                payload={"error": str(e), "exc_type": type(e).__name__},
            )
            raise err from e

        self.fingerprint = fingerprint
        add_event(
            self.events,
            event_type=DOCUMENT_SAVED,
            path=self.path,
            payload={"fingerprint": self.fingerprint},
        )
        return self.fingerprint

    def __repr__(self) -> str:
        return f"ConfigDocument(path={str(self.path)!r}, keys={len(self.root)})"


__all__ = ["ConfigDocument", "SUPPORTED_SUFFIXES", "check_suffix"]
