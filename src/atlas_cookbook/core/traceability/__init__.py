"""
Pacote de rastreabilidade (traceability) do Atlas Cookbook — Event Log v1.

API pública exposta:
    - CompileEventLog → EventSink que grava eventos de compilação
    - NullEventSink   → EventSink que descarta eventos
    - save_event_log  → persistência do Event Log em JSON
    - load_event_log  → restauração determinística do Event Log
"""

from .event_log import (
    CompileEventLog,
    NullEventSink,
    save_event_log,
    load_event_log,
)

__all__ = [
    "CompileEventLog",
    "NullEventSink",
    "save_event_log",
    "load_event_log",
]
