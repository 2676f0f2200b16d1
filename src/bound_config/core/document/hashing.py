# src/bound_config/core/document/hashing.py
"""
Fingerprint canônico de um documento de configuração.

O hash representa a identidade estrutural da árvore persistida e é
registrado no Event Log a cada gravação bem-sucedida, permitindo
verificar se duas gravações produziram o mesmo conteúdo.

Política de hashing:
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Valores não-JSON (ex.: datas carregadas do YAML) viram `str`
    - Codificação UTF-8
    - Algoritmo SHA-256

Invariantes:
    - Árvores estruturalmente equivalentes produzem o mesmo hash
    - O valor é sempre uma string hexadecimal de 64 caracteres
    - O input nunca é mutado
"""

import hashlib
import json
from typing import Any, Dict


def compute_document_hash(root: Dict[str, Any]) -> str:
    """
    Gera o SHA-256 determinístico de uma árvore de documento.

    Args:
        root (Dict[str, Any]): nó raiz do documento.

    Returns:
        str: hash hexadecimal da árvore.

    Raises:
        TypeError: se `root` não for um dicionário.
    """
    if not isinstance(root, dict):
        raise TypeError(
            f"Documento para hashing deve ser dict, recebido: {type(root).__name__}"
        )

    canonical_json = json.dumps(
        root,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
