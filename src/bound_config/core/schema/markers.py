# src/bound_config/core/schema/markers.py
"""
Marcadores declarativos de schema.

Este módulo define os decorators que transformam uma classe comum em um
schema de configuração e anexam metadados por accessor:

    - @config_schema   → marca a classe como schema de configuração
    - @node            → marca um accessor aninhado (permite nomes sem `get`/`set`)
    - @serializer(cls) → associa um serializer customizado ao accessor

Os marcadores apenas anexam dados aos objetos; nenhuma lógica de
resolução vive aqui. A interpretação fica a cargo do descriptor.

Invariantes:
    - O marcador de schema é explícito por classe (não é herdado)
    - Metadados de accessor são atributos simples da função

Limites explícitos:
    - Não valida anotações de tipo
    - Não deriva chaves semânticas
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Type, TypeVar, runtime_checkable

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])

_SCHEMA_MARKER = "__bound_config_schema__"
_NODE_MARKER = "__bound_config_node__"
_SERIALIZER_MARKER = "__bound_config_serializer__"


@runtime_checkable
class Serializer(Protocol[T]):
    """
    Contrato de um serializer customizado.

    Converte um tipo de domínio opaco em um escalar armazenável e
    vice-versa. Implementações são instanciadas sem argumentos a cada
    chamada do accessor.
    """

    def deserialize(self, value: Any) -> T:
        ...

    def serialize(self, value: T) -> Any:
        ...


def config_schema(cls: Type[T]) -> Type[T]:
    """Marca `cls` como schema de configuração."""
    if not isinstance(cls, type):
        raise TypeError("@config_schema deve decorar uma classe")
    setattr(cls, _SCHEMA_MARKER, True)
    return cls


def is_config_schema(obj: Any) -> bool:
    """Retorna True apenas para classes marcadas explicitamente com `@config_schema`."""
    return isinstance(obj, type) and obj.__dict__.get(_SCHEMA_MARKER, False) is True


def node(func: F) -> F:
    """Marca um accessor cujo valor é governado por outro schema."""
    setattr(func, _NODE_MARKER, True)
    return func


def is_node(func: Any) -> bool:
    return getattr(func, _NODE_MARKER, False) is True


def serializer(serializer_cls: Type[Serializer[Any]]) -> Callable[[F], F]:
    """
    Associa um serializer customizado a um accessor.

    Args:
        serializer_cls: classe instanciável sem argumentos que implementa
            `serialize` e `deserialize`.

    Example:
        >>> @config_schema
        ... class Spawn:
        ...     @serializer(PointSerializer)
        ...     def getSpawnPoint(self) -> Point: ...
    """
    if not callable(serializer_cls):
        raise TypeError("@serializer requer uma classe de serializer")

    def decorator(func: F) -> F:
        setattr(func, _SERIALIZER_MARKER, serializer_cls)
        return func

    return decorator


def serializer_of(func: Any) -> Optional[Type[Serializer[Any]]]:
    return getattr(func, _SERIALIZER_MARKER, None)


__all__ = [
    "Serializer",
    "config_schema",
    "is_config_schema",
    "is_node",
    "node",
    "serializer",
    "serializer_of",
]
