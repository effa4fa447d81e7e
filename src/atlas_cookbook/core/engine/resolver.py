# src/atlas_cookbook/core/engine/resolver.py
"""
Ordenação de cookbooks de uma run.

Este módulo produz a ordem total de cookbooks usada por todas as fases
de segmento (libraries, LWRPs, atributos, definições). A ordem deriva
das recipes da run-list expandida e das dependências declaradas nos
metadados de cada cookbook.

Algoritmo:
    Para cada recipe, na ordem da run-list, extrai o cookbook dono. Cada
    cookbook ainda não visitado é marcado como visitado, suas dependências
    são visitadas em ordem lexicográfica e só então o cookbook é anexado
    à saída (inserção em profundidade, pós-ordem).

Decisões arquiteturais:
    - Dependências sempre precedem dependentes
    - Empates são resolvidos por ordem lexicográfica do nome da dependência
    - A ordem dominante é a de visitação das recipes
    - O cookbook é marcado como visitado ANTES de suas dependências:
      um ciclo é truncado silenciosamente no primeiro participante
      revisitado. Ciclos não são erro.
    - Um cookbook ausente da coleção não contribui dependências e só
      falha quando uma fase tenta carregá-lo
    - O percurso é iterativo (pilha explícita) e não depende do limite de
      recursão do interpretador

Invariantes:
    - Cada cookbook aparece exatamente uma vez
    - A mesma entrada sempre produz a mesma ordem
    - Depois de calculada, a ordem não muda durante a run

Limites explícitos:
    - Não carrega arquivos
    - Não emite eventos
    - Não considera restrições de versão
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Set, Tuple

from atlas_cookbook.core.pipeline.protocols import CookbookCollection
from atlas_cookbook.core.pipeline.types import parse_recipe_name


DependenciesOf = Callable[[str], Iterable[str]]


def _insert_with_dependencies(
    root: str,
    dependencies_of: DependenciesOf,
    ordered: List[str],
    seen: Set[str],
) -> None:
    if root in seen:
        return

    seen.add(root)
    stack = [(root, iter(sorted(dependencies_of(root))))]

    while stack:
        cookbook, pending = stack[-1]
        dependency = next((dep for dep in pending if dep not in seen), None)
        if dependency is None:
            stack.pop()
            ordered.append(cookbook)
            continue

        seen.add(dependency)
        stack.append((dependency, iter(sorted(dependencies_of(dependency)))))


def resolve_cookbook_order(recipes: Iterable[str], dependencies_of: DependenciesOf) -> Tuple[str, ...]:
    """
    Ordena cookbooks a partir das recipes e de uma função de dependências.

    Nomes de recipe malformados são ignorados; a ordenação nunca falha.

    Args:
        recipes (Iterable[str]): Recipes da run-list, em ordem.
        dependencies_of (Callable[[str], Iterable[str]]): Nomes dos cookbooks
            dos quais o cookbook informado depende.

    Returns:
        Tuple[str, ...]: Cookbooks sem duplicatas, dependências primeiro.
    """
    ordered: List[str] = []
    seen: Set[str] = set()
    for recipe in recipes:
        try:
            cookbook, _ = parse_recipe_name(recipe)
        except ValueError:
            # nome malformado não contribui cookbook; a fase de recipes o reporta
            continue
        _insert_with_dependencies(cookbook, dependencies_of, ordered, seen)
    return tuple(ordered)


class CookbookOrderResolver:
    """Ordem de cookbooks de uma run, calculada uma vez e reutilizada."""

    def __init__(self, cookbook_collection: CookbookCollection):
        self.cookbook_collection = cookbook_collection
        self._order: Optional[Tuple[str, ...]] = None

    def dependencies_of(self, cookbook_name: str) -> List[str]:
        cookbook = self.cookbook_collection.lookup(cookbook_name)
        if cookbook is None:
            return []
        return sorted(cookbook.dependencies.keys())

    def order(self, recipes: Iterable[str]) -> Tuple[str, ...]:
        """
        Ordem de cookbooks da run.

        A primeira chamada calcula e guarda a ordem; chamadas seguintes
        retornam a mesma tupla, sem recalcular.
        """
        if self._order is None:
            self._order = resolve_cookbook_order(recipes, self.dependencies_of)
        return self._order
