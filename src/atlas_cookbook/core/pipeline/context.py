# src/atlas_cookbook/core/pipeline/context.py
"""
Contexto de execução compartilhado de uma compilação de cookbooks.

Este módulo define o `RunContext`, a estrutura canônica que concentra
todo o estado pertencente a uma run: colaboradores injetados (node,
coleção de cookbooks, event sink, executor de artefatos), configuração
resolvida e as estruturas criadas e descartadas com a run.

O RunContext atua como o único meio permitido de:
    - acessar o node mutável durante a carga de atributos
    - registrar recipes e atributos já carregados (at-most-once)
    - consultar a tabela de definições resultante da fase de definições
    - registrar e consultar notificações pendentes
    - registrar logs estruturados da compilação

Princípios fundamentais:
    - Isolamento por execução (cada run possui seu próprio contexto)
    - Nenhum estado global: colaboradores chegam por injeção explícita
    - Execução síncrona e sequencial; nenhuma estrutura exige lock

Invariantes:
    - `definitions`, `notifications` e o registro de recipes/atributos
      pertencem exclusivamente a este contexto
    - Logs sempre incluem `run_id` e `scope`
    - Registros abaixo de `compiler.log_level` são descartados

Limites explícitos:
    - Não decide a ordem de carga (ver core.engine)
    - Não interpreta conteúdo de arquivos
    - Não persiste dados automaticamente
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from atlas_cookbook.core.config.defaults import LOG_LEVELS, compiler_setting, resolve_config
from atlas_cookbook.core.engine.recipes import RecipeIncluder

from .definitions import DefinitionTable
from .notifications import Notification, NotificationRegistry
from .protocols import ArtifactExecutor, CookbookCollection, EventSink, ExpandedRunList, Node


_LEVEL_RANK = {name: rank for rank, name in enumerate(LOG_LEVELS)}


@dataclass
class RunContext:
    """
    Contexto de execução de uma compilação.

    Campos injetados:
        - run_id, created_at: identidade da execução
        - config: configuração efetiva (ver `core.config`)
        - node: alvo mutável da fase de atributos
        - cookbook_collection: cookbooks disponíveis na run
        - events: receptor dos eventos de ciclo de vida
        - executor: execução de arquivos de artefato

    Estado da run (criado aqui, nunca compartilhado):
        - definitions: tabela de definições (last-writer-wins)
        - notifications: notificações imediatas e tardias
        - recipes: registro at-most-once de recipes e atributos
        - logs: registros estruturados
    """
    run_id: str
    created_at: datetime
    config: Dict[str, Any]
    node: Node
    cookbook_collection: CookbookCollection
    events: EventSink
    executor: ArtifactExecutor
    meta: Dict[str, Any] = field(default_factory=dict)

    definitions: DefinitionTable = field(default_factory=DefinitionTable, init=False)
    notifications: NotificationRegistry = field(default_factory=NotificationRegistry, init=False)
    logs: List[Dict[str, Any]] = field(default_factory=list, init=False)
    recipes: RecipeIncluder = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.recipes = RecipeIncluder(self)

    @classmethod
    def create(
        cls,
        *,
        node: Node,
        cookbook_collection: CookbookCollection,
        executor: ArtifactExecutor,
        events: Optional[EventSink] = None,
        config: Optional[Dict[str, Any]] = None,
        run_id: Optional[str] = None,
    ) -> "RunContext":
        """Cria um contexto novo com configuração resolvida sobre os defaults."""
        if events is None:
            from atlas_cookbook.core.traceability.event_log import NullEventSink

            events = NullEventSink()

        return cls(
            run_id=run_id or uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            config=resolve_config(config),
            node=node,
            cookbook_collection=cookbook_collection,
            events=events,
            executor=executor,
        )

    # -----------------------------
    # Settings
    # -----------------------------
    @property
    def default_attribute_file(self) -> str:
        return compiler_setting(self.config, "default_attribute_file")

    @property
    def script_extension(self) -> str:
        return compiler_setting(self.config, "script_extension")

    # -----------------------------
    # Compilação
    # -----------------------------
    def load(self, run_list_expansion: ExpandedRunList) -> None:
        """Compila a run inteira: libraries → LWRPs → atributos → definições → recipes."""
        from atlas_cookbook.core.engine.compiler import CookbookCompiler

        CookbookCompiler(ctx=self, run_list_expansion=run_list_expansion).compile()

    # -----------------------------
    # Recipes & atributos
    # -----------------------------
    def include_recipe(self, *recipe_names: Any) -> List[Any]:
        return self.recipes.include(*recipe_names)

    def loaded_recipe(self, recipe_name: str) -> bool:
        return self.recipes.loaded_recipe(recipe_name)

    def resolve_recipe(self, recipe_name: str) -> Optional[str]:
        return self.recipes.resolve_recipe(recipe_name)

    def include_attribute(self, *attribute_names: Any) -> List[str]:
        return self.recipes.include_attribute(*attribute_names)

    def resolve_attribute(self, cookbook_name: str, attr_file_name: str) -> str:
        return self.recipes.resolve_attribute(cookbook_name, attr_file_name)

    # -----------------------------
    # Notificações
    # -----------------------------
    def notifies_immediately(self, notification: Notification) -> None:
        self.notifications.record_immediate(notification)

    def notifies_delayed(self, notification: Notification) -> None:
        self.notifications.record_delayed(notification)

    def immediate_notifications(self, resource: Any) -> List[Notification]:
        return self.notifications.immediate_for(resource)

    def delayed_notifications(self, resource: Any) -> List[Notification]:
        return self.notifications.delayed_for(resource)

    # -----------------------------
    # Logging
    # -----------------------------
    def log(self, *, scope: str, level: str, message: str, **extra: Any) -> None:
        level = level.upper()
        if level not in _LEVEL_RANK:
            raise ValueError(f"Unknown log level: {level}")

        threshold = str(compiler_setting(self.config, "log_level")).upper()
        if _LEVEL_RANK[level] < _LEVEL_RANK.get(threshold, 0):
            return

        record = {
            "run_id": self.run_id,
            "scope": scope,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        record.update(extra)
        self.logs.append(record)
