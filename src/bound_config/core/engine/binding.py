# src/bound_config/core/engine/binding.py
"""
Bound Config Instance — associação entre schema, nó e documento.

Todo objeto devolvido ao chamador é instância de uma classe concreta
gerada por schema (ver `engine.bound_class`), que herda de `BoundConfig`
e carrega um `Binding`:

    - descriptor → tabela de accessors do schema
    - node       → nó (dict) da árvore ao qual a instância está ligada
    - document   → documento raiz e seu backing file
    - dirty      → há mutação ainda não persistida

Invariantes:
    - `node` é sempre o próprio objeto da árvore, nunca uma cópia
    - Instâncias ligadas ao mesmo nó enxergam as mutações umas das outras
    - Não existe etapa de fechamento: a persistência é flush-on-write

Limites explícitos:
    - Não resolve accessors (responsabilidade do engine)
    - Não grava o documento
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from ..document.store import ConfigDocument
from ..schema.descriptor import SchemaDescriptor


@dataclass(eq=False)
class Binding:
    descriptor: SchemaDescriptor
    node: Dict[str, Any]
    document: ConfigDocument
    section: str = ""
    attached: bool = True
    dirty: bool = field(default=False, repr=False)


class BoundConfig:
    """
    Base das classes concretas geradas por schema.

    Duas instâncias são iguais quando pertencem ao mesmo schema e estão
    ligadas ao mesmo nó da árvore.
    """

    def __init__(self, binding: Binding):
        self._binding = binding

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, BoundConfig):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._binding.node is other._binding.node
        )

    def __hash__(self) -> int:
        return hash((type(self), id(self._binding.node)))

    def __repr__(self) -> str:
        b = self._binding
        section = b.section or "<root>"
        detached = "" if b.attached else ", detached"
        return f"<{b.descriptor.name} {b.document.path.name}:{section}{detached}>"


def binding_of(instance: BoundConfig) -> Binding:
    """Retorna o `Binding` de uma instância ligada."""
    if not isinstance(instance, BoundConfig):
        raise TypeError(f"Esperado BoundConfig, recebido: {type(instance).__name__}")
    return instance._binding


def _plain(value: Any) -> Any:
    if isinstance(value, BoundConfig):
        return _plain(value._binding.node)
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def to_plain(instance: BoundConfig) -> Dict[str, Any]:
    """
    Extrai a forma de dados pura da seção de uma instância ligada.

    O retorno é uma cópia profunda: alterá-lo não afeta a árvore.
    """
    return _plain(binding_of(instance).node)


__all__ = ["Binding", "BoundConfig", "binding_of", "to_plain"]
