# src/atlas_cookbook/core/engine/compiler.py
"""
Compilador de cookbooks do Atlas Cookbook (fases + recipes).

Implementa a fase de compilação de uma run carregando arquivos de
cookbooks na ordem correta e no contexto correto:

    1. Libraries
    2. LWRPs (providers, depois resources)
    3. Atributos
    4. Definições de resource
    5. Recipes

Recipes são carregadas exatamente na ordem da run-list expandida. Os
demais segmentos seguem a ordem derivada da run-list e das dependências
declaradas pelos cookbooks (ver `resolver`).

Política de erro: nenhuma recuperação local. A primeira falha é
reportada ao event sink e relançada; a decisão de abortar ou repetir
pertence ao coordenador da run.
"""

from __future__ import annotations

from typing import Any, List, Tuple

from atlas_cookbook.core.exceptions import FileLoadFailure, RecipeNotFound
from atlas_cookbook.core.pipeline.context import RunContext
from atlas_cookbook.core.pipeline.definitions import DefinitionTable
from atlas_cookbook.core.pipeline.protocols import ExpandedRunList
from atlas_cookbook.core.pipeline.types import PHASE_SEQUENCE, ArtifactKind, Phase

from .resolver import CookbookOrderResolver
from .segments import SegmentLoader


class CookbookCompiler:
    """Compilador canônico de uma run (ordem de cookbooks + fases)."""

    def __init__(self, *, ctx: RunContext, run_list_expansion: ExpandedRunList):
        self.ctx = ctx
        self.run_list_expansion = run_list_expansion
        self.resolver = CookbookOrderResolver(ctx.cookbook_collection)

    @property
    def definitions(self) -> DefinitionTable:
        return self.ctx.definitions

    @property
    def cookbook_order(self) -> Tuple[str, ...]:
        return self.resolver.order(self.run_list_expansion.recipes)

    def compile(self) -> List[Any]:
        """Executa as fases na ordem de `PHASE_SEQUENCE`; retorna os resultados das recipes."""
        steps = {
            Phase.LIBRARIES: self.compile_libraries,
            Phase.LWRPS: self.compile_lwrps,
            Phase.ATTRIBUTES: self.compile_attributes,
            Phase.DEFINITIONS: self.compile_resource_definitions,
            Phase.RECIPES: self.compile_recipes,
        }
        results: List[Any] = []
        for phase in PHASE_SEQUENCE:
            results = steps[phase]()
        return results

    def _run_phase(self, phase: Phase) -> List[str]:
        self.ctx.log(scope=phase.value, level="DEBUG", message=f"Compiling {phase.value}")
        return SegmentLoader(phase=phase, ctx=self.ctx, cookbook_order=self.cookbook_order).run()

    def compile_libraries(self) -> List[str]:
        return self._run_phase(Phase.LIBRARIES)

    def compile_lwrps(self) -> List[str]:
        return self._run_phase(Phase.LWRPS)

    def compile_attributes(self) -> List[str]:
        return self._run_phase(Phase.ATTRIBUTES)

    def compile_resource_definitions(self) -> List[str]:
        return self._run_phase(Phase.DEFINITIONS)

    def compile_recipes(self) -> List[Any]:
        """
        Carrega as recipes da run-list, em ordem, via RecipeIncluder.

        Raises:
            RecipeNotFound: Após o evento `recipe_not_found`.
            FileLoadFailure: Após o evento `recipe_file_load_failed`, para
                qualquer outra falha (inclusive de recipes incluídas).
        """
        recipes = list(self.run_list_expansion.recipes)
        events = self.ctx.events
        events.phase_start(Phase.RECIPES, len(recipes))

        results: List[Any] = []
        for recipe in recipes:
            try:
                results.extend(self.ctx.recipes.include(recipe))
            except RecipeNotFound as e:
                events.recipe_not_found(e)
                raise
            except Exception as e:
                path = self.ctx.recipes.resolve_recipe(recipe)
                events.recipe_file_load_failed(path, e)
                raise FileLoadFailure.wrap(kind=ArtifactKind.RECIPE, path=path, cause=e) from e

        events.phase_complete(Phase.RECIPES)
        return results
