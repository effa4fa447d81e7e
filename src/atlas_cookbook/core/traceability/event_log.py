# src/atlas_cookbook/core/traceability/event_log.py
"""
Event Log v1 — rastreabilidade dos eventos de compilação.

Este módulo fornece implementações de `EventSink` para o Atlas Cookbook:

    - CompileEventLog → registra cada evento de ciclo de vida em uma lista
      ordenada de dicts serializáveis, com cabeçalho da run
    - NullEventSink   → descarta todos os eventos

O Event Log é o equivalente, na compilação de cookbooks, ao Manifest de
uma execução: um registro forense, determinístico e reconstruível
(round-trip via JSON) do que foi carregado e do que falhou.

Decisões arquiteturais:
    - UTC é o timezone canônico para todos os timestamps
    - Causas de falha são gravadas como `AtlasErrorPayload` (sem stack trace)
    - A ordem do log é a ordem de chamada; nada é reordenado ou deduplicado
    - O formato de persistência é JSON com chaves ordenadas

Invariantes:
    - Cada chamada do sink adiciona exatamente um evento
    - Todo evento possui `event_type` e `timestamp`

Limites explícitos:
    - Não decide política de erro
    - Não emite eventos por conta própria
    - Não realiza migração de versões de schema
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from atlas_cookbook.core.config.hashing import compute_config_hash
from atlas_cookbook.core.errors import exception_to_error
from atlas_cookbook.core.pipeline.types import Phase


EVENT_LOG_VERSION = "1"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class NullEventSink:
    """EventSink que descarta todos os eventos."""

    def phase_start(self, phase: Phase, count: int) -> None:
        pass

    def phase_complete(self, phase: Phase) -> None:
        pass

    def file_loaded(self, phase: Phase, path: str) -> None:
        pass

    def file_load_failed(self, phase: Phase, path: str, cause: BaseException) -> None:
        pass

    def recipe_not_found(self, cause: BaseException) -> None:
        pass

    def recipe_file_load_failed(self, path: Optional[str], cause: BaseException) -> None:
        pass


@dataclass
class CompileEventLog:
    """
    EventSink que grava os eventos da compilação.

    Campos:
        - run: cabeçalho da run (run_id, started_at, config_hash, version)
        - events: eventos na ordem de chamada
    """

    run: Dict[str, Any] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def for_run(cls, *, run_id: str, config: Optional[Dict[str, Any]] = None) -> "CompileEventLog":
        return cls(
            run={
                "run_id": run_id,
                "started_at": _utc_now_iso(),
                "config_hash": compute_config_hash(config) if config is not None else None,
                "event_log_version": EVENT_LOG_VERSION,
            }
        )

    # -----------------------------
    # Registro
    # -----------------------------
    def add_event(self, event_type: str, *, phase: Optional[Phase] = None, **payload: Any) -> Dict[str, Any]:
        event: Dict[str, Any] = {"event_type": event_type, "timestamp": _utc_now_iso()}
        if phase is not None:
            event["phase"] = phase.value
        event.update(payload)
        self.events.append(event)
        return event

    def phase_start(self, phase: Phase, count: int) -> None:
        self.add_event("phase_start", phase=phase, count=int(count))

    def phase_complete(self, phase: Phase) -> None:
        self.add_event("phase_complete", phase=phase)

    def file_loaded(self, phase: Phase, path: str) -> None:
        self.add_event("file_loaded", phase=phase, path=path)

    def file_load_failed(self, phase: Phase, path: str, cause: BaseException) -> None:
        self.add_event("file_load_failed", phase=phase, path=path, error=exception_to_error(cause).to_dict())

    def recipe_not_found(self, cause: BaseException) -> None:
        self.add_event("recipe_not_found", phase=Phase.RECIPES, error=exception_to_error(cause).to_dict())

    def recipe_file_load_failed(self, path: Optional[str], cause: BaseException) -> None:
        self.add_event(
            "recipe_file_load_failed",
            phase=Phase.RECIPES,
            path=path,
            error=exception_to_error(cause).to_dict(),
        )

    # -----------------------------
    # Consulta
    # -----------------------------
    def of_type(self, event_type: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["event_type"] == event_type]

    def loaded_paths(self, phase: Optional[Phase] = None) -> List[str]:
        return [
            e["path"]
            for e in self.of_type("file_loaded")
            if phase is None or e.get("phase") == phase.value
        ]

    # -----------------------------
    # Serialização
    # -----------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "run": dict(self.run),
            "events": [dict(e) for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompileEventLog":
        return cls(
            run=dict(data.get("run", {}) or {}),
            events=[dict(e) for e in (data.get("events", []) or [])],
        )


def save_event_log(event_log: CompileEventLog, path: Path) -> None:
    """
    Persiste o Event Log em JSON (chaves ordenadas, indentado).

    Diretórios intermediários são criados automaticamente.

    Raises:
        OSError: Em caso de falha de escrita.
        TypeError: Se algum payload de evento não for serializável.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(event_log.to_dict(), ensure_ascii=False, indent=2, sort_keys=True),
        encoding="utf-8",
    )


def load_event_log(path: Path) -> CompileEventLog:
    """Restaura um Event Log salvo por `save_event_log`."""
    data = json.loads(path.read_text(encoding="utf-8"))
    return CompileEventLog.from_dict(data)
