# src/bound_config/core/document/events.py
"""
Event Log de um documento de configuração.

Cada `ConfigDocument` mantém uma lista ordenada de eventos explícitos
(carregamento, criação, gravação, falha de gravação, referências
pendentes), que funciona como canal de observabilidade estruturado ao
lado do `logging`.

Tipos de evento emitidos pela biblioteca:
    - document_created   → backing file criado vazio
    - document_loaded    → árvore carregada do disco
    - document_saved     → árvore gravada (payload: fingerprint)
    - save_failed        → gravação falhou (payload: erro)
    - dangling_reference → token de sequência sem seção correspondente

Invariantes:
    - A ordem da lista reflete a ordem das chamadas
    - Todo evento possui `event_type`, `timestamp` (ISO, UTC) e `path`
    - Eventos nunca são reordenados ou deduplicados
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

DOCUMENT_CREATED = "document_created"
DOCUMENT_LOADED = "document_loaded"
DOCUMENT_SAVED = "document_saved"
SAVE_FAILED = "save_failed"
DANGLING_REFERENCE = "dangling_reference"


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def add_event(
    events: List[Dict[str, Any]],
    *,
    event_type: str,
    path: Union[str, Path],
    ts: Optional[datetime] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Adiciona um evento explícito ao Event Log.

    Args:
        events: lista de eventos do documento (mutada in-place).
        event_type: tipo semântico do evento.
        path: backing file associado.
        ts: timestamp do evento (default: agora, UTC).
        payload: dados adicionais, opcionais.

    Returns:
        Dict[str, Any]: o evento adicionado.
    """
    ts = _ensure_tzaware_utc(ts or datetime.now(timezone.utc))

    ev: Dict[str, Any] = {
        "event_type": event_type,
        "timestamp": ts.isoformat(),
        "path": str(path),
    }
    if payload is not None:
        ev["payload"] = payload

    events.append(ev)
    return ev


def events_of_type(events: List[Dict[str, Any]], event_type: str) -> List[Dict[str, Any]]:
    return [e for e in events if e.get("event_type") == event_type]


__all__ = [
    "DANGLING_REFERENCE",
    "DOCUMENT_CREATED",
    "DOCUMENT_LOADED",
    "DOCUMENT_SAVED",
    "SAVE_FAILED",
    "add_event",
    "events_of_type",
]
