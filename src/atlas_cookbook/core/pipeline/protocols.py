# src/atlas_cookbook/core/pipeline/protocols.py
"""
Contratos dos colaboradores externos do compilador de cookbooks.

Este módulo define, via `typing.Protocol`, as interfaces mínimas que o
Atlas Cookbook consome durante a compilação de uma run. Nenhuma delas
é implementada pelo core: quem monta a run injeta implementações
concretas (ou as referências em memória de `core.pipeline.cookbook`).

Colaboradores:
    - Cookbook           → arquivos por segmento, dependências, execução de recipes
    - CookbookCollection → lookup de cookbooks por nome
    - Node               → alvo mutável da carga de atributos
    - EventSink          → recepção dos eventos de ciclo de vida
    - ExpandedRunList    → recipes expandidas da run-list
    - ArtifactExecutor   → execução de um arquivo de artefato

Princípios fundamentais:
    - O core apenas ordena e despacha; nunca interpreta o conteúdo dos arquivos
    - Conformidade é garantida por duck typing (@runtime_checkable)
    - Nenhum estado global: tudo chega por injeção explícita

Limites explícitos:
    - Não define ordem de carga
    - Não define política de erro
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Iterator,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Set,
    runtime_checkable,
)

from .types import ArtifactFile, ArtifactKind, Phase

if TYPE_CHECKING:  # pragma: no cover
    from .context import RunContext


@runtime_checkable
class Cookbook(Protocol):
    """
    Cookbook resolvido para a run.

    Atributos obrigatórios:
        - name: identificador do cookbook
        - dependencies: nome do cookbook → restrição de versão (a restrição
          é ignorada pela ordenação; apenas a presença importa)
        - recipe_filenames_by_name: nome curto da recipe → caminho
        - attribute_filenames_by_short_name: nome curto do atributo → caminho
    """
    name: str

    @property
    def dependencies(self) -> Mapping[str, str]:
        ...

    @property
    def recipe_filenames_by_name(self) -> Mapping[str, str]:
        ...

    @property
    def attribute_filenames_by_short_name(self) -> Mapping[str, str]:
        ...

    def filenames_for_segment(self, kind: ArtifactKind) -> Set[str]:
        """Caminhos locais dos arquivos do segmento, sem ordem definida."""
        ...

    def load_recipe(self, short_name: str, ctx: "RunContext") -> Any:
        """Executa a recipe indicada no contexto da run e retorna seu resultado."""
        ...


@runtime_checkable
class CookbookCollection(Protocol):
    def lookup(self, name: str) -> Optional[Cookbook]:
        """Retorna o cookbook ou None quando não existe na coleção."""
        ...

    def __iter__(self) -> Iterator[str]:
        ...


@runtime_checkable
class Node(Protocol):
    name: str

    def include_attribute(self, qualified_name: str) -> Any:
        """Avalia o arquivo de atributos `cookbook::short`, mutando o node."""
        ...


@runtime_checkable
class EventSink(Protocol):
    """
    Receptor dos eventos de ciclo de vida da compilação.

    As quatro fases de segmento e a fase de recipes compartilham as mesmas
    formas de evento, parametrizadas por `Phase`.
    """

    def phase_start(self, phase: Phase, count: int) -> None:
        ...

    def phase_complete(self, phase: Phase) -> None:
        ...

    def file_loaded(self, phase: Phase, path: str) -> None:
        ...

    def file_load_failed(self, phase: Phase, path: str, cause: BaseException) -> None:
        ...

    def recipe_not_found(self, cause: BaseException) -> None:
        ...

    def recipe_file_load_failed(self, path: Optional[str], cause: BaseException) -> None:
        ...


@runtime_checkable
class ExpandedRunList(Protocol):
    @property
    def recipes(self) -> Sequence[str]:
        ...


@runtime_checkable
class ArtifactExecutor(Protocol):
    """
    Capacidade injetada de execução de um arquivo de artefato.

    Para DEFINITION o retorno deve ser um mapeamento nome → corpo da
    definição; para os demais segmentos o retorno é livre.
    """

    def execute(self, artifact: ArtifactFile, ctx: "RunContext") -> Any:
        ...
