# src/bound_config/core/errors.py
"""
Exceções canônicas do Bound Config.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a derivação de schemas, a resolução de accessors e a persistência do
documento de configuração.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros de schema são erros de programação e nunca são repetidos
    - Falhas de flush são reportadas, não propagadas pelo accessor

Taxonomia:
    - SchemaError                     → tipo sem marcador ou convenção de nomes violada
    - UnsupportedTypeError            → tipo declarado fora do conjunto fechado
    - SerializationError              → falha do serializer customizado
    - PersistenceError                → backing file ilegível ou não gravável
    - UnsupportedDocumentFormatError  → extensão de arquivo desconhecida

Invariantes:
    - Todas as exceções herdam de `ConfigError`
    - `UnsupportedTypeError` é um caso particular de `SchemaError`

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não registra logs nem eventos
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union


class ConfigError(Exception):
    """
    Exceção base para erros do Bound Config.

    Permite captura genérica de qualquer falha de schema, serialização
    ou persistência levantada pela biblioteca.
    """


class SchemaError(ConfigError):
    """
    Exceção levantada quando uma declaração de schema é inválida.

    Casos cobertos:
        - classe sem o marcador `@config_schema`
        - accessor fora da convenção `get`/`set` sem marcador `@node`
        - anotações de tipo ausentes
        - setter para tipos aninhados (não atribuíveis diretamente)
        - chaves semânticas duplicadas no mesmo schema

    Decisões arquiteturais:
        - É um erro de programação, detectado no registro ou no primeiro acesso
        - Nunca é tratado como falha recuperável
    """


class UnsupportedTypeError(SchemaError):
    """
    Exceção levantada quando um tipo declarado não pertence ao conjunto suportado.

    O tipo ofensivo fica disponível em `offending_type` e aparece na mensagem.
    """

    def __init__(self, offending_type: Any, *, accessor: Optional[str] = None) -> None:
        name = getattr(offending_type, "__name__", None) or repr(offending_type)
        where = f" (accessor '{accessor}')" if accessor else ""
        super().__init__(f"Tipo não suportado: {name}{where}")
        self.offending_type = offending_type
        self.accessor = accessor


class SerializationError(ConfigError):
    """Falha ao construir o serializer ou ao (des)serializar um valor customizado."""


class PersistenceError(ConfigError):
    """
    Exceção levantada quando o backing file não pode ser lido ou gravado.

    Durante chamadas de accessor esta exceção é apenas registrada (log +
    evento); ela só é propagada em operações explícitas como o registro de
    um schema ou `ConfigRegistry.flush`.
    """

    def __init__(self, message: str, *, path: Union[str, Path, None] = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class UnsupportedDocumentFormatError(ConfigError):
    """
    Extensão de backing file não suportada.

    Formatos suportados:
        - YAML (.yml, .yaml)
        - JSON (.json)
    """


__all__ = [
    "ConfigError",
    "PersistenceError",
    "SchemaError",
    "SerializationError",
    "UnsupportedDocumentFormatError",
    "UnsupportedTypeError",
]
