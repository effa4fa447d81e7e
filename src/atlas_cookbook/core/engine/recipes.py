# src/atlas_cookbook/core/engine/recipes.py
"""
Inclusão de recipes e resolução de arquivos de atributos.

Recipes são carregadas exatamente na ordem recebida (ordem da run-list
ou ordem dos `include_recipe` dentro de uma recipe), nunca reordenadas
por dependência. Cada recipe qualificada (`cookbook::recipe`) é carregada
no máximo uma vez por run.

Decisões arquiteturais:
    - A recipe é marcada como carregada ANTES de executar; uma recipe que
      inclui a si mesma (direta ou indiretamente) não entra em loop
    - Recipes já carregadas são ignoradas silenciosamente e não contribuem
      resultado
    - Eventos de falha são emitidos pela fase de recipes
      (`CookbookCompiler.compile_recipes`), não aqui: um include aninhado
      que falha propaga até a recipe de topo e é reportado uma única vez
    - `resolve_attribute` falha imediatamente, sem evento

Invariantes:
    - `loaded_recipes` e `loaded_attributes` são write-once por chave
    - A contagem de resultados é <= à contagem de nomes recebidos

Limites explícitos:
    - Não executa recipes diretamente (delegado ao cookbook)
    - Não decide a ordem da run-list
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, List, Optional, Tuple

from atlas_cookbook.core.exceptions import (
    attribute_not_found,
    cookbook_not_found,
    recipe_not_found,
)
from atlas_cookbook.core.pipeline.types import (
    RECIPE_NAME_SEPARATOR,
    parse_recipe_name,
    qualified_name,
)

if TYPE_CHECKING:  # pragma: no cover
    from atlas_cookbook.core.pipeline.context import RunContext


def _flatten(names: Iterable[Any]) -> Iterator[str]:
    for name in names:
        if isinstance(name, (list, tuple)):
            yield from _flatten(name)
        else:
            yield name


class RecipeIncluder:
    """Registro at-most-once de recipes e atributos de uma run."""

    def __init__(self, ctx: "RunContext"):
        self.ctx = ctx
        self._loaded_recipes: Dict[str, bool] = {}
        self._loaded_attributes: Dict[str, bool] = {}

    @property
    def loaded_recipes(self) -> List[str]:
        """Recipes qualificadas na ordem em que foram marcadas."""
        return list(self._loaded_recipes)

    @property
    def loaded_attributes(self) -> List[str]:
        return list(self._loaded_attributes)

    # ------------------------------------------------------------------
    # Recipes
    # ------------------------------------------------------------------
    def include(self, *recipe_names: Any) -> List[Any]:
        """
        Carrega as recipes informadas, na ordem, ignorando as já carregadas.

        Aceita nomes soltos ou sequências aninhadas de nomes.

        Returns:
            List[Any]: Resultados das recipes efetivamente carregadas.

        Raises:
            RecipeNotFound: Se a recipe (ou seu cookbook) não existir.
            Exception: Qualquer falha da execução da recipe é propagada.
        """
        results: List[Any] = []
        for recipe_name in _flatten(recipe_names):
            loaded, result = self.load_recipe(recipe_name)
            if loaded:
                results.append(result)
        return results

    def load_recipe(self, recipe_name: str) -> Tuple[bool, Any]:
        """
        Carrega uma recipe se ainda não foi carregada nesta run.

        Returns:
            Tuple[bool, Any]: (carregou, resultado). `carregou` é False quando
            a recipe já havia sido carregada.
        """
        self.ctx.log(scope="recipes", level="DEBUG", message=f"Loading Recipe {recipe_name} via include_recipe")

        cookbook_name, short_name = parse_recipe_name(recipe_name)
        if self.loaded_fully_qualified_recipe(cookbook_name, short_name):
            self.ctx.log(
                scope="recipes",
                level="DEBUG",
                message=f"I am not loading {recipe_name}, because I have already seen it.",
            )
            return False, None

        self._loaded_recipes[qualified_name(cookbook_name, short_name)] = True

        cookbook = self.ctx.cookbook_collection.lookup(cookbook_name)
        if cookbook is None:
            raise recipe_not_found(cookbook_name, short_name, cookbook_found=False)
        if short_name not in cookbook.recipe_filenames_by_name:
            raise recipe_not_found(cookbook_name, short_name)

        return True, cookbook.load_recipe(short_name, self.ctx)

    def loaded_fully_qualified_recipe(self, cookbook: str, recipe: str) -> bool:
        return qualified_name(cookbook, recipe) in self._loaded_recipes

    def loaded_recipe(self, recipe_name: str) -> bool:
        cookbook, short_name = parse_recipe_name(recipe_name)
        return self.loaded_fully_qualified_recipe(cookbook, short_name)

    def resolve_recipe(self, recipe_name: str) -> Optional[str]:
        """Caminho do arquivo da recipe, ou None se não puder ser resolvido."""
        try:
            cookbook_name, short_name = parse_recipe_name(recipe_name)
        except ValueError:
            return None
        cookbook = self.ctx.cookbook_collection.lookup(cookbook_name)
        if cookbook is None:
            return None
        return cookbook.recipe_filenames_by_name.get(short_name)

    # ------------------------------------------------------------------
    # Atributos
    # ------------------------------------------------------------------
    def loaded_fully_qualified_attribute(self, cookbook: str, attribute_file: str) -> bool:
        return qualified_name(cookbook, attribute_file) in self._loaded_attributes

    def mark_attribute_loaded(self, cookbook: str, attribute_file: str) -> None:
        self._loaded_attributes[qualified_name(cookbook, attribute_file)] = True

    def resolve_attribute(self, cookbook_name: str, attr_file_name: str) -> str:
        """
        Caminho do arquivo de atributos `attr_file_name` do cookbook.

        Raises:
            CookbookNotFound: Se o cookbook não existir na coleção.
            AttributeNotFound: Se o nome curto não corresponder a nenhum arquivo.
        """
        cookbook = self.ctx.cookbook_collection.lookup(cookbook_name)
        if cookbook is None:
            raise cookbook_not_found(
                cookbook_name,
                while_loading=qualified_name(cookbook_name, attr_file_name),
            )

        attribute_filename = cookbook.attribute_filenames_by_short_name.get(attr_file_name)
        if attribute_filename is None:
            raise attribute_not_found(cookbook_name, attr_file_name)

        return attribute_filename

    def include_attribute(self, *attribute_names: Any) -> List[str]:
        """
        Inclusão direta de arquivos de atributos (uso dentro de scripts).

        Nome sem separador aponta para o arquivo de atributos padrão do
        cookbook (`compiler.default_attribute_file`).

        Returns:
            List[str]: Caminhos dos arquivos efetivamente incluídos.

        Raises:
            CookbookNotFound / AttributeNotFound: Resolução impossível.
        """
        included: List[str] = []
        for name in _flatten(attribute_names):
            if RECIPE_NAME_SEPARATOR in name:
                cookbook_name, attr_name = parse_recipe_name(name)
            else:
                cookbook_name, attr_name = name, self.ctx.default_attribute_file

            if self.loaded_fully_qualified_attribute(cookbook_name, attr_name):
                self.ctx.log(
                    scope="attributes",
                    level="DEBUG",
                    message=f"I am not loading attribute file {cookbook_name}::{attr_name}, because I have already seen it.",
                )
                continue

            path = self.resolve_attribute(cookbook_name, attr_name)
            self.mark_attribute_loaded(cookbook_name, attr_name)
            self.ctx.node.include_attribute(qualified_name(cookbook_name, attr_name))
            included.append(path)
        return included
