# src/bound_config/core/schema/naming.py
"""
Derivação de chaves semânticas a partir de nomes de accessors.

Regra (compatível bit a bit com documentos existentes):
    1. Para accessors de valor (não aninhados), remove o verbo inicial `get`/`set`
       (no estilo snake_case, remove também o `_` seguinte)
    2. Insere `-` em toda fronteira letra minúscula → letra maiúscula
    3. Converte o resultado para minúsculas

Sequências de maiúsculas nunca são separadas entre si:

    >>> derive_key("maxPlayerCount", strip_verb=False)
    'max-player-count'
    >>> derive_key("setMaxHP")
    'max-hp'
    >>> derive_key("getHTTPPort")
    'httpport'

Para accessors em snake_case, os `_` restantes viram `-`:

    >>> derive_key("get_server_port")
    'server-port'
"""

from __future__ import annotations

import re
from typing import Optional

_CASE_BOUNDARY = re.compile(r"([a-z])([A-Z])")

GETTER_VERB = "get"
SETTER_VERB = "set"


def split_verb(name: str) -> Optional[str]:
    """
    Retorna o verbo (`get`/`set`) que inicia `name`, ou None.

    O verbo só é reconhecido quando seguido de uma letra maiúscula
    (`getPort`) ou de `_` (`get_port`): `settings` e `getaway` não
    são accessors de valor.
    """
    for verb in (GETTER_VERB, SETTER_VERB):
        if not name.startswith(verb) or len(name) == len(verb):
            continue
        nxt = name[len(verb)]
        if nxt == "_" and len(name) > len(verb) + 1:
            return verb
        if nxt.isupper():
            return verb
    return None


def remove_verb(name: str) -> str:
    verb = split_verb(name)
    if verb is None:
        return name
    rest = name[len(verb):]
    return rest[1:] if rest.startswith("_") else rest


def derive_key(name: str, *, strip_verb: bool = True) -> str:
    """
    Deriva a chave semântica de um accessor.

    Args:
        name: nome do método accessor.
        strip_verb: remove o verbo `get`/`set` (False para accessors aninhados,
            cuja chave é o nome completo).

    Returns:
        str: chave em minúsculas separada por hífens.
    """
    base = remove_verb(name) if strip_verb else name
    base = _CASE_BOUNDARY.sub(r"\1-\2", base)
    return base.replace("_", "-").lower()


__all__ = ["GETTER_VERB", "SETTER_VERB", "derive_key", "remove_verb", "split_verb"]
