# src/atlas_cookbook/core/pipeline/cookbook.py
"""
Implementações em memória dos colaboradores de cookbook.

Estas classes satisfazem os protocolos de `core.pipeline.protocols` a
partir de dados já enumerados (nomes de arquivos por segmento e
dependências declaradas). São usadas pelo coordenador da run quando a
enumeração de arquivos já foi feita externamente, e pelos testes.

Decisões arquiteturais:
    - A enumeração de arquivos não acontece aqui; os caminhos chegam prontos
    - A execução de recipes é delegada ao `ArtifactExecutor` do RunContext
    - Nomes curtos de recipes/atributos derivam do nome do arquivo sem extensão

Limites explícitos:
    - Não acessa o filesystem
    - Não resolve versões nem restrições de dependência
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, Mapping, Optional, Set, Tuple

from .types import ArtifactFile, ArtifactKind

if TYPE_CHECKING:  # pragma: no cover
    from .context import RunContext


DEFAULT_SCRIPT_EXTENSION = ".rb"


def short_name_for(path: str, extension: str = DEFAULT_SCRIPT_EXTENSION) -> str:
    """Nome curto de um arquivo: basename sem a extensão de script."""
    name = PurePath(path).name
    if extension and name.endswith(extension) and len(name) > len(extension):
        return name[: -len(extension)]
    return name


@dataclass
class CookbookVersion:
    """
    Cookbook com segmentos já enumerados.

    Campos:
        - name: nome do cookbook
        - dependencies: nome → restrição de versão
        - segments: segmento → caminhos locais
        - script_extension: extensão removida para obter nomes curtos
    """
    name: str
    dependencies: Dict[str, str] = field(default_factory=dict)
    segments: Dict[ArtifactKind, Set[str]] = field(default_factory=dict)
    script_extension: str = DEFAULT_SCRIPT_EXTENSION

    def filenames_for_segment(self, kind: ArtifactKind) -> Set[str]:
        return set(self.segments.get(kind, ()))

    def _by_short_name(self, kind: ArtifactKind) -> Dict[str, str]:
        return {
            short_name_for(path, self.script_extension): path
            for path in sorted(self.filenames_for_segment(kind))
        }

    @property
    def recipe_filenames_by_name(self) -> Dict[str, str]:
        return self._by_short_name(ArtifactKind.RECIPE)

    @property
    def attribute_filenames_by_short_name(self) -> Dict[str, str]:
        return self._by_short_name(ArtifactKind.ATTRIBUTE)

    def load_recipe(self, short_name: str, ctx: "RunContext") -> Any:
        """
        Executa a recipe `short_name` através do executor da run.

        Raises:
            KeyError: Se a recipe não existir neste cookbook. O RecipeIncluder
                verifica a existência antes de chamar este método.
        """
        path = self.recipe_filenames_by_name[short_name]
        return ctx.executor.execute(ArtifactFile(self.name, ArtifactKind.RECIPE, path), ctx)


class CookbookCollection:
    """Coleção de cookbooks da run indexada por nome."""

    def __init__(self, cookbooks: Iterable[CookbookVersion] = ()):
        self._cookbooks: Dict[str, CookbookVersion] = {}
        for cookbook in cookbooks:
            self.add(cookbook)

    def add(self, cookbook: CookbookVersion) -> None:
        if not isinstance(cookbook.name, str) or not cookbook.name.strip():
            raise ValueError("cookbook.name must be a non-empty string")
        self._cookbooks[cookbook.name] = cookbook

    def lookup(self, name: str) -> Optional[CookbookVersion]:
        return self._cookbooks.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._cookbooks

    def __iter__(self) -> Iterator[str]:
        return iter(self._cookbooks)

    def __len__(self) -> int:
        return len(self._cookbooks)


@dataclass(frozen=True)
class RunListExpansion:
    """Run-list expandida: recipes em ordem de execução."""

    recipes: Tuple[str, ...] = ()

    @classmethod
    def from_recipes(cls, recipes: Iterable[str]) -> "RunListExpansion":
        return cls(recipes=tuple(recipes))


def cookbook_from_layout(
    name: str,
    layout: Mapping[str, Iterable[str]],
    *,
    dependencies: Optional[Mapping[str, str]] = None,
    script_extension: str = DEFAULT_SCRIPT_EXTENSION,
) -> CookbookVersion:
    """
    Monta um CookbookVersion a partir de um layout `segmento → nomes de arquivo`.

    As chaves do layout são os valores de `ArtifactKind` ("libraries",
    "attributes", ...). Os caminhos resultantes seguem `<name>/<segmento>/<arquivo>`.

    Raises:
        ValueError: Se alguma chave do layout não for um segmento conhecido.
    """
    segments: Dict[ArtifactKind, Set[str]] = {}
    for segment, filenames in layout.items():
        kind = ArtifactKind(segment)
        segments[kind] = {f"{name}/{kind.value}/{fn}" for fn in filenames}

    return CookbookVersion(
        name=name,
        dependencies=dict(dependencies or {}),
        segments=segments,
        script_extension=script_extension,
    )
