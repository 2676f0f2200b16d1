# src/bound_config/__init__.py
"""
Bound Config — schemas de configuração tipados ligados a documentos YAML.

A aplicação declara sua configuração como classes de schema, com
accessors no formato getter/setter, e recebe no registro um objeto vivo
que lê e grava um documento hierárquico sob demanda, sem jamais tocar
nos nós do documento diretamente.

Exemplo:
    >>> from bound_config import ConfigRegistry, config_schema, node
    >>>
    >>> @config_schema
    ... class Database:
    ...     def getHost(self) -> str: ...
    ...     def setHost(self, value: str) -> None: ...
    >>>
    >>> @config_schema
    ... class Server:
    ...     def getServerPort(self) -> int: ...
    ...     def setServerPort(self, value: int) -> None: ...
    ...     @node
    ...     def database(self) -> Database: ...
    >>>
    >>> registry = ConfigRegistry("config")
    >>> server = registry.register(Server)      # config/Server.yml
    >>> server.setServerPort(8080)               # server-port: 8080
    >>> server.database().getHost()              # database: {host: ''}
    ''

Arquitetura em alto nível:
    - core.schema   → marcadores, chaves semânticas e descriptors
    - core.document → árvore do documento e persistência (PyYAML)
    - core.engine   → instâncias ligadas e Mapping Engine
    - core.registry → ConfigRegistry

Limites explícitos:
    - Não é um ORM nem um serviço de configuração distribuído
    - Não realiza migração de schema
    - Não é seguro para acesso concorrente entre processos
"""

from .core.engine import BoundConfig, binding_of, to_plain
from .core.errors import (
    ConfigError,
    PersistenceError,
    SchemaError,
    SerializationError,
    UnsupportedDocumentFormatError,
    UnsupportedTypeError,
)
from .core.registry import ConfigRegistry
from .core.schema import Serializer, config_schema, derive_key, node, serializer

__all__ = [
    "BoundConfig",
    "ConfigError",
    "ConfigRegistry",
    "PersistenceError",
    "SchemaError",
    "SerializationError",
    "Serializer",
    "UnsupportedDocumentFormatError",
    "UnsupportedTypeError",
    "binding_of",
    "config_schema",
    "derive_key",
    "node",
    "serializer",
    "to_plain",
]
