# src/bound_config/core/document/__init__.py
"""
Camada de documento do Bound Config.

Adaptador entre a árvore em memória (dicionários puros) e o backing
file em YAML ou JSON, com fingerprint canônico e Event Log.
"""

from .events import add_event, events_of_type
from .hashing import compute_document_hash
from .store import SUPPORTED_SUFFIXES, ConfigDocument

__all__ = [
    "ConfigDocument",
    "SUPPORTED_SUFFIXES",
    "add_event",
    "compute_document_hash",
    "events_of_type",
]
