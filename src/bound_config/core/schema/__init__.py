# src/bound_config/core/schema/__init__.py
"""
Camada de schema do Bound Config.

Reúne os marcadores declarativos, a regra de derivação de chaves e a
derivação do Schema Descriptor (a tabela de accessors consultada pelo
Mapping Engine).

Limites explícitos:
    - Não lê nem escreve documentos
    - Não gera instâncias ligadas
"""

from .descriptor import AccessorSpec, Direction, SchemaDescriptor, ValueKind, classify, describe
from .markers import Serializer, config_schema, is_config_schema, node, serializer
from .naming import derive_key

__all__ = [
    "AccessorSpec",
    "Direction",
    "SchemaDescriptor",
    "Serializer",
    "ValueKind",
    "classify",
    "config_schema",
    "derive_key",
    "describe",
    "is_config_schema",
    "node",
    "serializer",
]
