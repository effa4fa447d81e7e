# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas Cookbook.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações mínimas e determinísticas do compilador
- colaboradores falsos (node, executor de artefatos)
- cookbooks em memória montados a partir de layouts simples
- RunContext controlado com Event Log de gravação

O objetivo destas fixtures é permitir testes do core
(config, pipeline, engine e traceability) sem depender de:
- filesystem
- scripts reais de cookbooks
- coordenador de run

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Colaboradores falsos gravam chamadas em listas para inspeção
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture executa compilação real
    - Nenhuma fixture realiza I/O
"""

import pytest
from datetime import datetime, timezone


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """Conteúdo típico de um `compiler.defaults.yaml` de projeto."""
    return """\
compiler:
  log_level: INFO
  default_attribute_file: default
  script_extension: .rb
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """Override local: apenas o nível de log muda."""
    return """\
compiler:
  log_level: DEBUG
"""


@pytest.fixture
def dummy_config() -> dict:
    """Configuração já resolvida, sem passar por arquivos."""
    return {
        "compiler": {
            "log_level": "INFO",
            "default_attribute_file": "default",
            "script_extension": ".rb",
        },
    }


# =====================================================
# Colaboradores falsos
# =====================================================

class FakeNode:
    """Node que grava cada `include_attribute` recebido."""

    def __init__(self, name: str = "node-test-001", failures=None):
        self.name = name
        self.included = []
        self.failures = dict(failures or {})

    def include_attribute(self, qualified_name: str):
        if qualified_name in self.failures:
            raise self.failures[qualified_name]
        self.included.append(qualified_name)
        return qualified_name


class RecordingExecutor:
    """
    ArtifactExecutor que grava os artefatos executados.

    - failures: caminho → exceção levantada ao executar
    - definitions: caminho → mapeamento retornado para arquivos de definição
      (arquivos de definição sem entrada retornam None, isto é, nada definido)
    - results: caminho → valor retornado (ex.: resultado de recipe)
    - actions: caminho → callable(ctx) executado antes de retornar
      (ex.: include_recipe aninhado)
    """

    def __init__(self, failures=None, definitions=None, results=None, actions=None):
        self.executed = []
        self.failures = dict(failures or {})
        self.definitions = dict(definitions or {})
        self.results = dict(results or {})
        self.actions = dict(actions or {})

    @property
    def paths(self):
        return [a.path for a in self.executed]

    def execute(self, artifact, ctx):
        from atlas_cookbook.core.pipeline.types import ArtifactKind

        self.executed.append(artifact)
        if artifact.path in self.failures:
            raise self.failures[artifact.path]
        if artifact.path in self.actions:
            self.actions[artifact.path](ctx)
        if artifact.path in self.definitions:
            return self.definitions[artifact.path]
        if artifact.kind is ArtifactKind.DEFINITION and artifact.path not in self.results:
            return None
        return self.results.get(artifact.path, f"loaded:{artifact.path}")


@pytest.fixture
def fake_node():
    return FakeNode()


@pytest.fixture
def make_node():
    """Factory de FakeNode (ex.: com falhas configuradas)."""
    return FakeNode


@pytest.fixture
def executor():
    return RecordingExecutor()


@pytest.fixture
def make_executor():
    """Factory de RecordingExecutor com falhas, definições, resultados ou ações."""
    return RecordingExecutor


@pytest.fixture
def make_cookbooks():
    """
    Factory de CookbookCollection a partir de um dict:

        {"apache": {"deps": ["base"], "attributes": ["default.rb"], ...}}

    Chaves além de "deps" são segmentos (`ArtifactKind.value`).
    """
    from atlas_cookbook.core.pipeline.cookbook import CookbookCollection, cookbook_from_layout

    def _make(layouts):
        cookbooks = []
        for name, layout in layouts.items():
            layout = dict(layout)
            deps = {d: ">= 0.0.0" for d in layout.pop("deps", [])}
            cookbooks.append(cookbook_from_layout(name, layout, dependencies=deps))
        return CookbookCollection(cookbooks)

    return _make


@pytest.fixture
def event_log():
    from atlas_cookbook.core.traceability.event_log import CompileEventLog

    return CompileEventLog.for_run(run_id="run-test-001")


@pytest.fixture
def make_ctx(dummy_config, fake_node, executor, event_log):
    """
    Factory de RunContext determinístico.

    `run_id` e `created_at` são fixos; node, executor e event sink vêm
    das fixtures correspondentes, salvo override explícito.
    """
    from atlas_cookbook.core.pipeline.context import RunContext

    def _make(cookbook_collection, *, node=None, executor_=None, events=None, config=None):
        return RunContext(
            run_id="run-test-001",
            created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
            config=config or dummy_config,
            node=node or fake_node,
            cookbook_collection=cookbook_collection,
            events=events or event_log,
            executor=executor_ or executor,
            meta={"source": "pytest"},
        )

    return _make
