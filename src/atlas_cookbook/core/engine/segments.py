# src/atlas_cookbook/core/engine/segments.py
"""
Carga de segmentos de cookbook (libraries, LWRPs, atributos, definições).

Um `SegmentLoader` é instanciado por fase. Para cada cookbook, na ordem
resolvida da run, lista os arquivos dos segmentos da fase, ordena-os de
forma determinística e despacha cada arquivo, emitindo os eventos de
ciclo de vida da fase.

Ordem dentro de um cookbook:
    - ATTRIBUTES: arquivo padrão (`default`) primeiro, depois lexicográfica
    - LWRPS: todos os providers, depois todos os resources; cada grupo
      em ordem lexicográfica
    - LIBRARIES / DEFINITIONS: lexicográfica

Despacho:
    - LIBRARIES, LWRPS: `ArtifactExecutor.execute`
    - ATTRIBUTES: `node.include_attribute("cookbook::short")`, protegido
      pelo registro de atributos já carregados
    - DEFINITIONS: o executor retorna `nome → corpo`, incorporado à
      tabela de definições (last-writer-wins, log INFO na sobrescrita)

Política de falha:
    - Exatamente um evento `file_load_failed` para o arquivo que falhou
    - `FileLoadFailure` é levantada (encadeada à causa) e aborta a fase
    - Cargas anteriores não são desfeitas
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, List, Sequence

from atlas_cookbook.core.exceptions import FileLoadFailure, cookbook_not_found
from atlas_cookbook.core.pipeline.cookbook import short_name_for
from atlas_cookbook.core.pipeline.protocols import Cookbook
from atlas_cookbook.core.pipeline.types import ArtifactFile, ArtifactKind, Phase, qualified_name

if TYPE_CHECKING:  # pragma: no cover
    from atlas_cookbook.core.pipeline.context import RunContext


class SegmentLoader:
    """Carregador de uma fase de segmento sobre a ordem resolvida de cookbooks."""

    def __init__(self, *, phase: Phase, ctx: "RunContext", cookbook_order: Sequence[str]):
        if phase is Phase.RECIPES:
            raise ValueError("recipes are loaded by RecipeIncluder, not SegmentLoader")
        self.phase = phase
        self.ctx = ctx
        self.cookbook_order = tuple(cookbook_order)

    def count_files(self) -> int:
        """Total de arquivos da fase em todos os cookbooks da coleção."""
        collection = self.ctx.cookbook_collection
        total = 0
        for name in collection:
            cookbook = collection.lookup(name)
            if cookbook is None:
                continue
            for kind in self.phase.kinds:
                total += len(cookbook.filenames_for_segment(kind))
        return total

    def files_in_cookbook(self, cookbook: Cookbook, kind: ArtifactKind) -> List[str]:
        """Arquivos de um segmento do cookbook, na ordem de carga."""
        filenames = sorted(cookbook.filenames_for_segment(kind))
        if kind is not ArtifactKind.ATTRIBUTE:
            return filenames

        default_name = self.ctx.default_attribute_file
        extension = self.ctx.script_extension
        defaults = [f for f in filenames if short_name_for(f, extension) == default_name]
        if not defaults:
            return filenames
        # apenas o primeiro arquivo padrão sobe; o resto mantém ordem lexicográfica
        first = defaults[0]
        return [first] + [f for f in filenames if f != first]

    def run(self) -> List[str]:
        """
        Executa a fase completa.

        Returns:
            List[str]: Caminhos carregados, na ordem de carga.

        Raises:
            CookbookNotFound: Se um cookbook da ordem não existir na coleção.
            FileLoadFailure: Na primeira falha de carga de arquivo.
        """
        events = self.ctx.events
        events.phase_start(self.phase, self.count_files())

        loaded: List[str] = []
        for cookbook_name in self.cookbook_order:
            loaded.extend(self.load_cookbook(cookbook_name))

        events.phase_complete(self.phase)
        return loaded

    def load_cookbook(self, cookbook_name: str) -> List[str]:
        cookbook = self.ctx.cookbook_collection.lookup(cookbook_name)
        if cookbook is None:
            raise cookbook_not_found(cookbook_name, while_loading=self.phase.value)

        loaded: List[str] = []
        for kind in self.phase.kinds:
            for path in self.files_in_cookbook(cookbook, kind):
                if self.load_file(ArtifactFile(cookbook_name, kind, path)):
                    loaded.append(path)
        return loaded

    def load_file(self, artifact: ArtifactFile) -> bool:
        """
        Carrega um arquivo e emite o evento correspondente.

        Returns:
            bool: False quando o arquivo foi ignorado (atributo já carregado).
        """
        self.ctx.log(
            scope=self.phase.value,
            level="DEBUG",
            message=f"Loading cookbook {artifact.cookbook}'s {artifact.kind.value} file: {artifact.path}",
            cookbook=artifact.cookbook,
            path=artifact.path,
        )
        try:
            if artifact.kind is ArtifactKind.ATTRIBUTE:
                loaded = self._load_attribute(artifact)
            elif artifact.kind is ArtifactKind.DEFINITION:
                loaded = self._load_definitions(artifact)
            else:
                self.ctx.executor.execute(artifact, self.ctx)
                loaded = True
        except Exception as e:
            self.ctx.events.file_load_failed(self.phase, artifact.path, e)
            raise FileLoadFailure.wrap(kind=artifact.kind, path=artifact.path, cause=e) from e

        if loaded:
            self.ctx.events.file_loaded(self.phase, artifact.path)
        return loaded

    def _load_attribute(self, artifact: ArtifactFile) -> bool:
        short_name = short_name_for(artifact.path, self.ctx.script_extension)
        recipes = self.ctx.recipes
        if recipes.loaded_fully_qualified_attribute(artifact.cookbook, short_name):
            self.ctx.log(
                scope=self.phase.value,
                level="DEBUG",
                message=f"Skipping already loaded attribute file {artifact.cookbook}::{short_name}",
            )
            return False

        self.ctx.log(
            scope=self.phase.value,
            level="DEBUG",
            message=f"Node {self.ctx.node.name} loading cookbook {artifact.cookbook}'s attribute file {artifact.path}",
        )
        recipes.mark_attribute_loaded(artifact.cookbook, short_name)
        self.ctx.node.include_attribute(qualified_name(artifact.cookbook, short_name))
        return True

    def _load_definitions(self, artifact: ArtifactFile) -> bool:
        defines = self.ctx.executor.execute(artifact, self.ctx)
        if defines is None:
            defines = {}
        if not isinstance(defines, Mapping):
            raise TypeError(
                f"definition file must produce a mapping of definitions, got {type(defines).__name__}"
            )

        for name in self.ctx.definitions.merge(defines):
            self.ctx.log(
                scope=self.phase.value,
                level="INFO",
                message=f"Overriding duplicate definition {name}, new definition found in {artifact.path}",
                definition=name,
                path=artifact.path,
            )
        return True
