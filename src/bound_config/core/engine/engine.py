# src/bound_config/core/engine/engine.py
"""
Mapping Engine — resolução de accessors contra a árvore do documento.

Este módulo é o núcleo do Bound Config. Dado um `SchemaDescriptor` e um
`Binding`, ele resolve cada chamada de accessor:

Caminho de leitura:
    - NESTED       → seção filha (criada vazia quando ausente) ligada ao schema aninhado
    - NESTED_LIST  → tokens da sequência resolvidos como seções irmãs
    - NESTED_MAP   → filhos diretos da seção, indexados pela chave
    - SCALAR*      → valor do nó; quando ausente, default materializado na árvore
    - CUSTOM       → escalar lido da RAIZ do documento e desserializado

Caminho de escrita:
    - SCALAR*      → valor gravado no nó
    - CUSTOM       → valor serializado e gravado na RAIZ do documento

Toda chamada que muta a árvore termina com um flush do documento inteiro.

Decisões arquiteturais:
    - Uma classe concreta é gerada uma única vez por schema; seus métodos
      delegam ao engine via o descriptor cacheado (sem reflexão por chamada)
    - Valores customizados são endereçados pela chave não qualificada na
      raiz do documento, e não relativos à seção atual. O comportamento é
      mantido por compatibilidade com documentos existentes
    - Tokens de sequência sem seção correspondente produzem uma instância
      ligada a um nó destacado (fallback para defaults), com warning;
      mutações em nós destacados (e em seus filhos) nunca disparam flush
    - Falhas de flush são registradas e não interrompem o chamador; o
      binding permanece sujo e o próximo flush grava a mudança pendente

Invariantes:
    - Defaults sintetizados são gravados na árvore antes de retornar
    - Leituras de NESTED_LIST / NESTED_MAP sem dados não mutam a árvore
    - Instâncias aninhadas compartilham o documento raiz do pai

Limites explícitos:
    - Não carrega documentos nem cria diretórios
    - Não possui locking; o acesso deve ser serializado pelo chamador
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Callable, Dict, List, Type

from ..document.events import DANGLING_REFERENCE, add_event
from ..document.store import ConfigDocument
from ..errors import PersistenceError, SerializationError, UnsupportedTypeError
from ..schema.descriptor import SCALAR_TYPES, AccessorSpec, Direction, ValueKind, describe
from .binding import Binding, BoundConfig, to_plain

logger = logging.getLogger(__name__)

_SCALAR_DEFAULTS: Dict[type, Any] = {str: "", int: 0, bool: False, float: 0.0}


# -----------------------------
# Binding & class generation
# -----------------------------
def bind(
    schema: Type[Any],
    node: Dict[str, Any],
    document: ConfigDocument,
    *,
    section: str = "",
    attached: bool = True,
) -> BoundConfig:
    """
    Liga `schema` a um nó da árvore de `document`.

    Raises:
        SchemaError: se `schema` não for um schema válido.
    """
    descriptor = describe(schema)
    binding = Binding(
        descriptor=descriptor,
        node=node,
        document=document,
        section=section,
        attached=attached,
    )
    return bound_class(schema)(binding)


def _make_accessor(spec: AccessorSpec) -> Callable[..., Any]:
    if spec.direction is Direction.READ:

        def accessor(self: BoundConfig) -> Any:
            return read(self._binding, spec)

    else:

        def accessor(self: BoundConfig, value: Any) -> None:
            write(self._binding, spec, value)

    accessor.__name__ = spec.name
    accessor.__doc__ = f"{spec.direction.value} '{spec.key}' ({spec.kind.value})"
    return accessor


@lru_cache(maxsize=None)
def bound_class(schema: Type[Any]) -> type:
    """Gera (uma vez por schema) a classe concreta que implementa os accessors."""
    descriptor = describe(schema)
    namespace: Dict[str, Any] = {
        "__module__": schema.__module__,
        "__qualname__": f"Bound{schema.__qualname__}",
        "__doc__": schema.__doc__,
    }
    for spec in descriptor.accessors.values():
        namespace[spec.name] = _make_accessor(spec)
    return type(schema)(f"Bound{schema.__name__}", (BoundConfig, schema), namespace)


def _child_section(parent: str, key: str) -> str:
    return f"{parent}.{key}" if parent else key


# -----------------------------
# Persistence
# -----------------------------
def mark_dirty(binding: Binding) -> None:
    binding.dirty = True


def flush(binding: Binding) -> bool:
    """
    Persiste o documento de um binding sujo.

    Antes da gravação, filhos diretos da seção que sejam instâncias
    ligadas são substituídos por sua forma de dados pura.

    Returns:
        bool: True se nada havia a gravar ou se a gravação teve sucesso.
    """
    if not binding.dirty:
        return True

    node = binding.node
    for key, value in list(node.items()):
        if isinstance(value, BoundConfig):
            node[key] = to_plain(value)

    try:
        binding.document.save()
    except PersistenceError as e:
        logger.error(
            "Falha ao persistir %s (seção '%s'); mudança mantida em memória: %s",
            binding.document.path,
            binding.section or "<root>",
            e,
        )
        return False

    binding.dirty = False
    return True


def _commit(binding: Binding) -> None:
    # nós destacados não pertencem à árvore; não há o que gravar
    if not binding.attached:
        return
    mark_dirty(binding)
    flush(binding)


# -----------------------------
# Defaults
# -----------------------------
def default_value(spec: AccessorSpec) -> Any:
    """
    Sintetiza o valor default de um accessor escalar ou de coleção escalar.

    Raises:
        UnsupportedTypeError: para qualquer outro tipo declarado.
    """
    if spec.kind is ValueKind.SCALAR and spec.value_type in _SCALAR_DEFAULTS:
        return _SCALAR_DEFAULTS[spec.value_type]
    if spec.kind is ValueKind.SCALAR_LIST:
        return []
    if spec.kind is ValueKind.SCALAR_MAP:
        return {}
    raise UnsupportedTypeError(spec.value_type, accessor=spec.name)


# -----------------------------
# Read path
# -----------------------------
def read(binding: Binding, spec: AccessorSpec) -> Any:
    kind = spec.kind
    if kind is ValueKind.NESTED:
        return _read_nested(binding, spec)
    if kind is ValueKind.NESTED_LIST:
        return _read_nested_list(binding, spec)
    if kind is ValueKind.NESTED_MAP:
        return _read_nested_map(binding, spec)
    if kind is ValueKind.CUSTOM:
        return _read_custom(binding, spec)
    return _read_value(binding, spec)


def _read_nested(binding: Binding, spec: AccessorSpec) -> BoundConfig:
    node = binding.node
    child = node.get(spec.key)
    if not isinstance(child, dict):
        if child is not None:
            logger.warning(
                "Valor em '%s' não é uma seção; substituído por seção vazia",
                _child_section(binding.section, spec.key),
            )
        child = {}
        node[spec.key] = child
        _commit(binding)
    return bind(
        spec.value_type,
        child,
        binding.document,
        section=_child_section(binding.section, spec.key),
        attached=binding.attached,
    )


def _detached(binding: Binding, schema: type, section: str, token: str) -> BoundConfig:
    logger.warning(
        "Referência '%s' sem seção correspondente em '%s'; usando instância destacada",
        token,
        binding.section or "<root>",
    )
    add_event(
        binding.document.events,
        event_type=DANGLING_REFERENCE,
        path=binding.document.path,
        payload={"section": section, "token": token},
    )
    return bind(schema, {}, binding.document, section=section, attached=False)


def _read_nested_list(binding: Binding, spec: AccessorSpec) -> List[BoundConfig]:
    node = binding.node
    raw = node.get(spec.key)
    if not isinstance(raw, list):
        return []

    items: List[BoundConfig] = []
    for element in raw:
        token = str(element)
        section = _child_section(binding.section, token)
        child = node.get(token)
        if isinstance(child, dict):
            items.append(
                bind(
                    spec.value_type,
                    child,
                    binding.document,
                    section=section,
                    attached=binding.attached,
                )
            )
        else:
            items.append(_detached(binding, spec.value_type, section, token))
    return items


def _read_nested_map(binding: Binding, spec: AccessorSpec) -> Dict[str, BoundConfig]:
    container = binding.node.get(spec.key)
    if not isinstance(container, dict):
        return {}

    base = _child_section(binding.section, spec.key)
    result: Dict[str, BoundConfig] = {}
    for entry_key, child in container.items():
        entry = str(entry_key)
        section = _child_section(base, entry)
        if isinstance(child, dict):
            result[entry] = bind(
                spec.value_type,
                child,
                binding.document,
                section=section,
                attached=binding.attached,
            )
        else:
            result[entry] = _detached(binding, spec.value_type, section, entry)
    return result


def _read_value(binding: Binding, spec: AccessorSpec) -> Any:
    node = binding.node
    value = node.get(spec.key)
    if value is not None:
        return value

    value = default_value(spec)
    node[spec.key] = value
    _commit(binding)
    return value


def _serializer_for(spec: AccessorSpec) -> Any:
    try:
        return spec.serializer()
    except Exception as e:  # noqa: BLE001
        raise SerializationError(
            f"Não foi possível instanciar o serializer "
            f"{getattr(spec.serializer, '__name__', spec.serializer)!r} de '{spec.name}': {e}"
        ) from e


def _read_custom(binding: Binding, spec: AccessorSpec) -> Any:
    ser = _serializer_for(spec)
    raw = binding.document.root.get(spec.key)
    try:
        return ser.deserialize(raw)
    except Exception as e:  # noqa: BLE001
        raise SerializationError(
            f"Falha ao desserializar '{spec.key}' via {type(ser).__name__}: {e}"
        ) from e


# -----------------------------
# Write path
# -----------------------------
def write(binding: Binding, spec: AccessorSpec, value: Any) -> None:
    if spec.kind is ValueKind.CUSTOM:
        _write_custom(binding, spec, value)
    else:
        binding.node[spec.key] = _checked(spec, value)
        _commit(binding)


def _scalar(spec: AccessorSpec, value: Any, expected: Any) -> Any:
    """Valida um escalar isolado; `expected` None aceita qualquer escalar suportado."""
    if expected is None:
        if isinstance(value, SCALAR_TYPES):
            return value
        raise TypeError(
            f"'{spec.name}' aceita apenas escalares, recebido: {type(value).__name__}"
        )
    if expected is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, bool) and expected is not bool:
        raise TypeError(f"'{spec.name}' espera {expected.__name__}, recebido: bool")
    if not isinstance(value, expected):
        raise TypeError(
            f"'{spec.name}' espera {expected.__name__}, recebido: {type(value).__name__}"
        )
    return value


def _checked(spec: AccessorSpec, value: Any) -> Any:
    """
    Valida `value` contra o tipo declarado do setter e normaliza coleções.

    Elementos de listas e valores de mapas passam pela mesma checagem dos
    escalares; chaves de mapas devem ser `str`. Nada chega à árvore se a
    validação falhar.
    """
    kind = spec.kind
    if kind is ValueKind.SCALAR:
        return _scalar(spec, value, spec.value_type)
    if kind is ValueKind.SCALAR_LIST:
        if not isinstance(value, (list, tuple)):
            raise TypeError(f"'{spec.name}' espera uma lista, recebido: {type(value).__name__}")
        return [_scalar(spec, v, spec.value_type) for v in value]
    if kind is ValueKind.SCALAR_MAP:
        if not isinstance(value, Mapping):
            raise TypeError(f"'{spec.name}' espera um mapeamento, recebido: {type(value).__name__}")
        checked: Dict[str, Any] = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise TypeError(
                    f"'{spec.name}' aceita apenas chaves str, recebido: {type(k).__name__}"
                )
            checked[k] = _scalar(spec, v, spec.value_type)
        return checked
    raise UnsupportedTypeError(spec.value_type, accessor=spec.name)


def _write_custom(binding: Binding, spec: AccessorSpec, value: Any) -> None:
    ser = _serializer_for(spec)
    try:
        serialized = ser.serialize(value)
    except Exception as e:  # noqa: BLE001
        raise SerializationError(
            f"Falha ao serializar '{spec.key}' via {type(ser).__name__}: {e}"
        ) from e
    binding.document.root[spec.key] = serialized
    # a raiz é sempre real, mesmo para instâncias destacadas
    mark_dirty(binding)
    flush(binding)


__all__ = [
    "bind",
    "bound_class",
    "default_value",
    "flush",
    "mark_dirty",
    "read",
    "write",
]
