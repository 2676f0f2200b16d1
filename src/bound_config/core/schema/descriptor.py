# src/bound_config/core/schema/descriptor.py
"""
Schema Descriptor — tabela de accessors derivada de uma classe de schema.

Este módulo deriva, uma única vez por tipo de schema, a descrição
completa de seus accessors: nome do método, chave semântica, direção
(leitura ou escrita), tipo de valor e serializer customizado.

O descriptor é a "vtable" consultada pelo Mapping Engine: nenhuma
reflexão acontece por chamada de accessor, apenas na derivação.

Responsabilidades do módulo:
    - Validar o marcador `@config_schema`
    - Validar a convenção de nomes `get`/`set` (ou marcador `@node`)
    - Classificar o tipo declarado em um `ValueKind`
    - Garantir unicidade de chaves por direção
    - Cachear o descriptor por tipo de schema

Decisões arquiteturais:
    - A classificação é guiada pelo tipo anotado, não pelo marcador `@node`
    - Accessors aninhados (schema, sequência ou mapa de schemas) usam o nome
      completo como chave; `@node` apenas dispensa o verbo `get`/`set`
    - Schemas aninhados são descritos sob demanda (schemas recursivos são válidos)
    - Setters para tipos aninhados são rejeitados na derivação

Invariantes:
    - Cada chave aparece no máximo uma vez por direção
    - Pares getter/setter com a mesma chave possuem o mesmo `ValueKind` e tipo de valor
    - O descriptor é imutável após a derivação

Limites explícitos:
    - Não lê nem escreve o documento
    - Não instancia serializers
    - Não gera classes concretas (responsabilidade de `engine.binding`)
"""

from __future__ import annotations

import collections.abc
import inspect
import typing
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from ..errors import SchemaError, UnsupportedTypeError
from .markers import is_config_schema, is_node, serializer_of
from .naming import SETTER_VERB, derive_key, split_verb

SCALAR_TYPES: Tuple[type, ...] = (str, int, bool, float)

_SEQUENCE_ORIGINS = (list, collections.abc.Sequence, collections.abc.MutableSequence)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)


class ValueKind(str, Enum):
    """
    Classificação do valor de um accessor.

    Valores textuais estáveis, adequados para mensagens e inspeção.
    """

    SCALAR = "scalar"
    SCALAR_LIST = "scalar_list"
    SCALAR_MAP = "scalar_map"
    NESTED = "nested"
    NESTED_LIST = "nested_list"
    NESTED_MAP = "nested_map"
    CUSTOM = "custom"

    @property
    def is_nested(self) -> bool:
        return self in (ValueKind.NESTED, ValueKind.NESTED_LIST, ValueKind.NESTED_MAP)


class Direction(str, Enum):
    READ = "read"
    WRITE = "write"


@dataclass(frozen=True)
class AccessorSpec:
    """
    Descrição de um accessor individual.

    `value_type` carrega o tipo escalar, o schema aninhado ou o tipo de
    domínio customizado; para coleções, carrega o tipo dos elementos
    (None para `list`/`dict` sem parâmetros).
    """

    name: str
    key: str
    direction: Direction
    kind: ValueKind
    value_type: Any = None
    serializer: Optional[type] = None
    is_node: bool = False


@dataclass(frozen=True)
class SchemaDescriptor:
    """Tabela imutável de accessors de um schema, indexada por nome de método."""

    schema: type
    accessors: Mapping[str, AccessorSpec] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.schema.__name__

    def getters(self) -> List[AccessorSpec]:
        return [a for a in self.accessors.values() if a.direction is Direction.READ]

    def setters(self) -> List[AccessorSpec]:
        return [a for a in self.accessors.values() if a.direction is Direction.WRITE]


def _iter_accessor_functions(schema: type) -> List[Tuple[str, Any]]:
    """
    Funções públicas declaradas no schema e em suas bases, na ordem de declaração.

    Raises:
        SchemaError: se um membro público que não é função usar o verbo
            `get`/`set` (ex.: `property`, `staticmethod`).
    """
    found: Dict[str, Any] = {}
    for klass in reversed(schema.__mro__):
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if name.startswith("_"):
                continue
            if not inspect.isfunction(attr):
                if split_verb(name) is not None:
                    raise SchemaError(
                        f"Accessor '{schema.__name__}.{name}' deve ser um método comum, "
                        f"recebido: {type(attr).__name__}"
                    )
                continue
            found[name] = attr
    return list(found.items())


def _resolve_hints(schema: type, func: Any) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(func, localns={schema.__name__: schema})
    except Exception as e:  # noqa: BLE001
        raise SchemaError(
            f"Não foi possível resolver as anotações de {schema.__name__}.{func.__name__}: {e}"
        ) from e


def _classify_element(element: Any, accessor: str) -> Tuple[bool, Any]:
    """Retorna (aninhado?, tipo do elemento) para o parâmetro de uma coleção."""
    if element is None or element in SCALAR_TYPES:
        return False, element
    if is_config_schema(element):
        return True, element
    raise UnsupportedTypeError(element, accessor=accessor)


def classify(annotation: Any, *, accessor: str = "") -> Tuple[ValueKind, Any]:
    """
    Classifica um tipo anotado em `ValueKind`.

    Args:
        annotation: tipo de retorno (getter) ou do parâmetro (setter).
        accessor: nome do accessor, usado apenas em mensagens de erro.

    Returns:
        Tuple[ValueKind, Any]: o tipo de valor e o tipo relevante (escalar,
        schema aninhado ou tipo dos elementos da coleção).

    Raises:
        UnsupportedTypeError: se o tipo estiver fora do conjunto suportado.
    """
    if annotation in SCALAR_TYPES:
        return ValueKind.SCALAR, annotation
    if is_config_schema(annotation):
        return ValueKind.NESTED, annotation
    if annotation is list:
        return ValueKind.SCALAR_LIST, None
    if annotation is dict:
        return ValueKind.SCALAR_MAP, None

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin in _SEQUENCE_ORIGINS:
        nested, element = _classify_element(args[0] if args else None, accessor)
        return (ValueKind.NESTED_LIST if nested else ValueKind.SCALAR_LIST), element

    if origin in _MAPPING_ORIGINS:
        key_type, value_type = args if len(args) == 2 else (str, None)
        if key_type is not str:
            raise UnsupportedTypeError(key_type, accessor=accessor)
        nested, element = _classify_element(value_type, accessor)
        return (ValueKind.NESTED_MAP if nested else ValueKind.SCALAR_MAP), element

    raise UnsupportedTypeError(annotation, accessor=accessor)


def _describe_accessor(schema: type, name: str, func: Any) -> AccessorSpec:
    qualified = f"{schema.__name__}.{name}"
    node_marked = is_node(func)
    verb = split_verb(name)

    if verb is None and not node_marked:
        raise SchemaError(
            f"Accessor '{qualified}' deve começar com 'get'/'set' ou ser marcado com @node"
        )

    params = list(inspect.signature(func).parameters.values())[1:]
    hints = _resolve_hints(schema, func)
    custom = serializer_of(func)

    if verb == SETTER_VERB and not node_marked:
        if len(params) != 1:
            raise SchemaError(f"Setter '{qualified}' deve receber exatamente um argumento")
        annotation = hints.get(params[0].name)
        if annotation is None:
            raise SchemaError(f"Setter '{qualified}' não declara o tipo do argumento")
        direction = Direction.WRITE
    else:
        if params:
            raise SchemaError(f"Getter '{qualified}' não deve receber argumentos")
        if "return" not in hints:
            raise SchemaError(f"Getter '{qualified}' não declara o tipo de retorno")
        annotation = hints["return"]
        direction = Direction.READ

    if custom is not None:
        if node_marked:
            raise SchemaError(f"Accessor '{qualified}' não pode ser @node e @serializer")
        kind, value_type = ValueKind.CUSTOM, annotation
    else:
        kind, value_type = classify(annotation, accessor=qualified)

    if node_marked and not kind.is_nested:
        raise SchemaError(f"Accessor @node '{qualified}' deve retornar um schema de configuração")
    if direction is Direction.WRITE and kind.is_nested:
        raise SchemaError(f"Setter '{qualified}' não pode atribuir um valor aninhado ({kind.value})")

    return AccessorSpec(
        name=name,
        key=derive_key(name, strip_verb=not kind.is_nested),
        direction=direction,
        kind=kind,
        value_type=value_type,
        serializer=custom,
        is_node=node_marked,
    )


def _type_label(spec: AccessorSpec) -> str:
    name = getattr(spec.value_type, "__name__", None) or "any"
    return f"{spec.kind.value}[{name}]"


@lru_cache(maxsize=None)
def describe(schema: Type[Any]) -> SchemaDescriptor:
    """
    Deriva (e cacheia) o descriptor de um schema.

    Raises:
        SchemaError: se o tipo não for marcado ou violar a convenção de accessors.
        UnsupportedTypeError: se algum tipo declarado não for suportado.
    """
    if not is_config_schema(schema):
        raise SchemaError(
            f"Tipo deve ser marcado com @config_schema: {getattr(schema, '__qualname__', schema)!r}"
        )

    accessors: Dict[str, AccessorSpec] = {}
    keys: Dict[Tuple[Direction, str], str] = {}

    for name, func in _iter_accessor_functions(schema):
        spec = _describe_accessor(schema, name, func)
        owner = keys.get((spec.direction, spec.key))
        if owner is not None:
            raise SchemaError(
                f"Chave '{spec.key}' duplicada em {schema.__name__}: '{owner}' e '{name}'"
            )
        keys[(spec.direction, spec.key)] = name
        accessors[name] = spec

    by_key = {(a.direction, a.key): a for a in accessors.values()}
    for (direction, key), setter in by_key.items():
        if direction is not Direction.WRITE:
            continue
        getter = by_key.get((Direction.READ, key))
        if getter is None:
            continue
        if getter.kind is not setter.kind or getter.value_type != setter.value_type:
            raise SchemaError(
                f"Getter '{getter.name}' e setter '{setter.name}' divergem no tipo "
                f"da chave '{key}': {_type_label(getter)} vs {_type_label(setter)}"
            )

    return SchemaDescriptor(schema=schema, accessors=accessors)


__all__ = [
    "AccessorSpec",
    "Direction",
    "SCALAR_TYPES",
    "SchemaDescriptor",
    "ValueKind",
    "classify",
    "describe",
]
