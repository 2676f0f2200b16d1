# src/bound_config/core/registry.py
"""
Config Registry — ponto de entrada para schemas de configuração.

Este módulo define o `ConfigRegistry`, responsável por ligar cada tipo
de schema ao seu backing file dedicado e manter, durante o tempo de
vida do registry, uma instância raiz por tipo.

Responsabilidades do módulo:
    - Validar o marcador de schema no registro
    - Resolver o backing file `<config_dir>/<NomeDoSchema><suffix>`
    - Criar o diretório de configuração no primeiro uso
    - Carregar o documento e ligar a instância raiz
    - Oferecer lookup puro e flush explícito (retry)

Decisões arquiteturais:
    - O registry é um objeto explícito, passado por referência; não há singleton global
    - Registrar novamente o mesmo tipo recarrega o arquivo e sobrescreve o cache
    - `get` nunca cria nem carrega nada

Invariantes:
    - Cada tipo registrado possui exatamente um documento em memória
    - O cache cresce apenas com o número de schemas distintos

Limites explícitos:
    - Não resolve accessors (responsabilidade do Mapping Engine)
    - Não realiza migração de schema nem versionamento
    - Não é seguro para acesso concorrente entre processos
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar, Union, cast

from .document.store import ConfigDocument, check_suffix
from .engine.engine import bind
from .errors import PersistenceError, SchemaError
from .schema.descriptor import describe
from .schema.markers import is_config_schema

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class _Entry:
    instance: Any
    document: ConfigDocument


class ConfigRegistry:
    """
    Registro de schemas de configuração e suas instâncias raiz.

    Example:
        >>> registry = ConfigRegistry("config")
        >>> server = registry.register(ServerConfig)
        >>> server.setServerPort(25565)
        >>> registry.get(ServerConfig) is server
        True
    """

    def __init__(self, config_dir: Union[str, Path], *, suffix: str = ".yml"):
        self.config_dir = Path(config_dir)
        self.suffix = check_suffix(suffix)
        self._entries: Dict[type, _Entry] = {}

    def path_for(self, schema: type) -> Path:
        """Backing file determinístico de um schema."""
        return self.config_dir / f"{schema.__name__}{self.suffix}"

    def register(self, schema: Type[T]) -> T:
        """
        Registra `schema`, carregando (ou criando) seu backing file.

        Returns:
            Instância raiz ligada ao documento do schema.

        Raises:
            SchemaError: se o tipo não for marcado com `@config_schema`
                ou se sua declaração for inválida.
            PersistenceError: se o diretório ou o arquivo não puderem ser
                criados ou lidos.
        """
        if not is_config_schema(schema):
            raise SchemaError(
                f"Tipo deve ser marcado com @config_schema: {getattr(schema, '__qualname__', schema)!r}"
            )
        describe(schema)

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(
                f"Não foi possível criar o diretório de configuração: {self.config_dir}",
                path=self.config_dir,
            ) from e

        document = ConfigDocument.open(self.path_for(schema))
        instance = bind(schema, document.root, document)

        if schema in self._entries:
            logger.debug("Schema %s registrado novamente; cache sobrescrito", schema.__name__)
        self._entries[schema] = _Entry(instance=instance, document=document)
        logger.info("Schema %s registrado em %s", schema.__name__, document.path)
        return cast(T, instance)

    def get(self, schema: Type[T]) -> Optional[T]:
        """Retorna a instância raiz de `schema`, ou None se nunca foi registrado."""
        entry = self._entries.get(schema)
        return cast(T, entry.instance) if entry is not None else None

    def is_registered(self, schema: type) -> bool:
        return schema in self._entries

    def list(self) -> List[str]:
        return sorted(s.__name__ for s in self._entries)

    def document(self, schema: type) -> ConfigDocument:
        """
        Retorna o documento que sustenta um schema registrado.

        Raises:
            KeyError: se o schema não estiver registrado.
        """
        entry = self._entries.get(schema)
        if entry is None:
            raise KeyError(f"schema não registrado: {getattr(schema, '__name__', schema)}")
        return entry.document

    def flush(self, schema: type) -> str:
        """
        Grava explicitamente o documento de um schema registrado.

        Útil para repetir um flush que falhou durante uma chamada de accessor.

        Returns:
            str: fingerprint do conteúdo gravado.

        Raises:
            KeyError: se o schema não estiver registrado.
            PersistenceError: se a gravação falhar.
        """
        return self.document(schema).save()

    def flush_all(self) -> Dict[str, PersistenceError]:
        """Grava todos os documentos registrados; retorna as falhas por nome de schema."""
        failures: Dict[str, PersistenceError] = {}
        for schema, entry in self._entries.items():
            try:
                entry.document.save()
            except PersistenceError as e:
                logger.error("Falha ao persistir %s: %s", entry.document.path, e)
                failures[schema.__name__] = e
        return failures


__all__ = ["ConfigRegistry"]
