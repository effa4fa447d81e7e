# tests/core/engine/test_compiler_phases.py
"""
Testes do CookbookCompiler (compilação completa de uma run).

Este módulo valida a orquestração das fases sobre cookbooks em memória:

- a sequência de fases é libraries → lwrps → attributes → definitions → recipes
- cada fase percorre os cookbooks na ordem resolvida
- recipes seguem a ordem da run-list, não a ordem de dependências
- falhas de recipe emitem exatamente um evento e propagam
- cargas anteriores a uma falha permanecem aplicadas

Invariantes:
    - Nenhuma fase começa antes da anterior terminar
    - A ordem de cookbooks é a mesma em todas as fases
"""

import pytest

from atlas_cookbook.core.engine.compiler import CookbookCompiler
from atlas_cookbook.core.exceptions import CookbookNotFound, FileLoadFailure, RecipeNotFound
from atlas_cookbook.core.pipeline.cookbook import RunListExpansion
from atlas_cookbook.core.pipeline.definitions import DefinitionTable
from atlas_cookbook.core.pipeline.types import PHASE_SEQUENCE, ArtifactKind, Phase


LAYOUT = {
    "app": {
        "deps": ["web", "base"],
        "libraries": ["app_lib.rb"],
        "attributes": ["default.rb"],
        "recipes": ["default.rb"],
    },
    "web": {
        "deps": ["base"],
        "libraries": ["web_lib.rb"],
        "providers": ["site.rb"],
        "resources": ["site.rb"],
        "attributes": ["tuning.rb", "default.rb"],
        "definitions": ["vhost.rb"],
        "recipes": ["server.rb"],
    },
    "base": {
        "libraries": ["base_lib.rb"],
        "attributes": ["default.rb"],
        "recipes": ["default.rb"],
    },
}


def _compiler(ctx, recipes):
    return CookbookCompiler(ctx=ctx, run_list_expansion=RunListExpansion.from_recipes(recipes))


def test_compile_runs_phases_in_sequence(make_ctx, make_cookbooks, event_log):
    ctx = make_ctx(make_cookbooks(LAYOUT))

    _compiler(ctx, ["app::default", "web::server"]).compile()

    phase_starts = [e["phase"] for e in event_log.of_type("phase_start")]
    assert phase_starts == ["libraries", "lwrps", "attributes", "definitions", "recipes"]

    # cada fase termina antes da próxima começar
    markers = [(e["event_type"], e["phase"]) for e in event_log.events if e["event_type"].startswith("phase_")]
    for i in range(0, len(markers), 2):
        assert markers[i][0] == "phase_start"
        assert markers[i + 1] == ("phase_complete", markers[i][1])


def test_cookbook_order_drives_segment_phases(make_ctx, make_cookbooks, executor, fake_node):
    ctx = make_ctx(make_cookbooks(LAYOUT))
    compiler = _compiler(ctx, ["app::default"])

    compiler.compile()

    assert compiler.cookbook_order == ("base", "web", "app")
    assert [a.path for a in executor.executed if a.kind is ArtifactKind.LIBRARY] == [
        "base/libraries/base_lib.rb",
        "web/libraries/web_lib.rb",
        "app/libraries/app_lib.rb",
    ]
    assert fake_node.included == ["base::default", "web::default", "web::tuning", "app::default"]


def test_recipes_follow_run_list_order(make_ctx, make_cookbooks, executor):
    ctx = make_ctx(make_cookbooks(LAYOUT))

    results = _compiler(ctx, ["web::server", "base::default", "app::default"]).compile()

    recipe_paths = [a.path for a in executor.executed if a.kind is ArtifactKind.RECIPE]
    assert recipe_paths == ["web/recipes/server.rb", "base/recipes/default.rb", "app/recipes/default.rb"]
    assert results == [f"loaded:{p}" for p in recipe_paths]


def test_recipe_phase_start_counts_run_list(make_ctx, make_cookbooks, event_log):
    ctx = make_ctx(make_cookbooks(LAYOUT))

    _compiler(ctx, ["web::server", "base::default"]).compile_recipes()

    assert event_log.of_type("phase_start")[0]["count"] == 2


def test_duplicate_recipe_in_run_list_loads_once(make_ctx, make_cookbooks, executor):
    ctx = make_ctx(make_cookbooks(LAYOUT))

    results = _compiler(ctx, ["base::default", "base::default"]).compile_recipes()

    assert len(results) == 1
    assert executor.paths == ["base/recipes/default.rb"]


def test_definitions_available_after_compile(make_ctx, make_cookbooks, make_executor):
    executor = make_executor(definitions={"web/definitions/vhost.rb": {"vhost": "body"}})
    ctx = make_ctx(make_cookbooks(LAYOUT), executor_=executor)
    compiler = _compiler(ctx, ["app::default"])

    compiler.compile()

    assert compiler.definitions.get("vhost") == "body"
    assert ctx.definitions is compiler.definitions


def test_recipe_not_found_emits_event_and_propagates(make_ctx, make_cookbooks, event_log):
    ctx = make_ctx(make_cookbooks(LAYOUT))

    with pytest.raises(RecipeNotFound):
        _compiler(ctx, ["base::default", "web::missing", "app::default"]).compile_recipes()

    events = event_log.of_type("recipe_not_found")
    assert len(events) == 1
    assert events[0]["error"]["type"] == "RECIPE_NOT_FOUND"
    assert event_log.of_type("recipe_file_load_failed") == []
    assert event_log.of_type("phase_complete") == []
    # recipes anteriores continuam carregadas
    assert ctx.loaded_recipe("base::default")
    assert not ctx.loaded_recipe("app::default")


def test_recipe_failure_emits_event_with_path(make_ctx, make_cookbooks, event_log, make_executor):
    boom = RuntimeError("undefined method")
    executor = make_executor(failures={"web/recipes/server.rb": boom})
    ctx = make_ctx(make_cookbooks(LAYOUT), executor_=executor)

    with pytest.raises(FileLoadFailure) as exc:
        _compiler(ctx, ["web::server"]).compile_recipes()

    assert exc.value.__cause__ is boom
    assert exc.value.kind is ArtifactKind.RECIPE
    assert exc.value.path == "web/recipes/server.rb"

    events = event_log.of_type("recipe_file_load_failed")
    assert len(events) == 1
    assert events[0]["path"] == "web/recipes/server.rb"
    assert events[0]["error"]["message"] == "undefined method"


def test_nested_include_failure_is_reported_once(make_ctx, make_cookbooks, event_log, make_executor):
    executor = make_executor(actions={"app/recipes/default.rb": lambda ctx: ctx.include_recipe("web::missing")})
    ctx = make_ctx(make_cookbooks(LAYOUT), executor_=executor)

    with pytest.raises(RecipeNotFound):
        _compiler(ctx, ["app::default"]).compile_recipes()

    assert len(event_log.of_type("recipe_not_found")) == 1


def test_segment_failure_aborts_later_phases(make_ctx, make_cookbooks, event_log, make_executor, fake_node):
    executor = make_executor(failures={"web/libraries/web_lib.rb": ValueError("bad library")})
    ctx = make_ctx(make_cookbooks(LAYOUT), executor_=executor)

    with pytest.raises(FileLoadFailure):
        _compiler(ctx, ["app::default"]).compile()

    assert [e["phase"] for e in event_log.of_type("phase_start")] == ["libraries"]
    assert event_log.loaded_paths() == ["base/libraries/base_lib.rb"]
    assert fake_node.included == []


def test_missing_dependency_fails_when_phase_loads_it(make_ctx, make_cookbooks):
    layout = {"app": {"deps": ["ghost"], "libraries": ["a.rb"]}}
    ctx = make_ctx(make_cookbooks(layout))

    with pytest.raises(CookbookNotFound):
        _compiler(ctx, ["app::default"]).compile()


def test_order_is_stable_across_phases(make_ctx, make_cookbooks):
    ctx = make_ctx(make_cookbooks(LAYOUT))
    compiler = _compiler(ctx, ["app::default"])

    first = compiler.cookbook_order
    compiler.compile_libraries()
    compiler.compile_lwrps()

    assert compiler.cookbook_order is first


def test_run_context_load_compiles_everything(make_ctx, make_cookbooks, executor, event_log):
    ctx = make_ctx(make_cookbooks(LAYOUT))

    ctx.load(RunListExpansion.from_recipes(["app::default"]))

    assert ctx.loaded_recipe("app::default")
    assert [e["phase"] for e in event_log.of_type("phase_complete")] == [p.value for p in Phase]


def test_compile_follows_phase_sequence_constant(make_ctx, make_cookbooks, event_log):
    ctx = make_ctx(make_cookbooks(LAYOUT))

    _compiler(ctx, ["app::default"]).compile()

    assert [e["phase"] for e in event_log.of_type("phase_start")] == [p.value for p in PHASE_SEQUENCE]


def test_definitions_property_exposes_run_table(make_ctx, make_cookbooks):
    ctx = make_ctx(make_cookbooks(LAYOUT))

    assert isinstance(_compiler(ctx, ["app::default"]).definitions, DefinitionTable)


@pytest.mark.parametrize("bad", ["base::", "::x"])
def test_malformed_run_list_entry_is_reported_by_recipe_phase(make_ctx, make_cookbooks, event_log, bad):
    ctx = make_ctx(make_cookbooks(LAYOUT))

    with pytest.raises(FileLoadFailure) as exc:
        _compiler(ctx, ["base::default", bad]).compile()

    assert isinstance(exc.value.__cause__, ValueError)
    assert exc.value.kind is ArtifactKind.RECIPE
    assert exc.value.path is None

    # as fases de segmento completam; só a fase de recipes é abortada
    assert [e["phase"] for e in event_log.of_type("phase_complete")] == [
        "libraries", "lwrps", "attributes", "definitions",
    ]
    failures = event_log.of_type("recipe_file_load_failed")
    assert len(failures) == 1
    assert failures[0]["path"] is None
    assert failures[0]["error"]["type"] == "COMPILER_EXECUTION_ERROR"
    assert ctx.loaded_recipe("base::default")
