# src/atlas_cookbook/core/pipeline/types.py
"""
Tipos canônicos da compilação de cookbooks do Atlas Cookbook.

Este módulo define as estruturas e enums fundamentais que padronizam
a comunicação entre o compilador, os loaders de segmento e os
colaboradores externos (cookbooks, node, event sink).

Os tipos aqui definidos representam:
    - os tipos de artefato de um cookbook (segmentos)
    - as fases de carga de uma run
    - a identificação de um arquivo de artefato
    - a sintaxe de nomes de recipe (`cookbook::recipe`)

Componentes principais:
    - ArtifactKind → enum de segmentos de um cookbook
    - Phase        → enum de fases de carga (libraries → recipes)
    - ArtifactFile → identificação imutável de um arquivo a carregar
    - parse_recipe_name / qualified_name → sintaxe de nomes qualificados

Invariantes:
    - Enums possuem valores textuais canônicos
    - ArtifactFile é imutável
    - Tipos não dependem de engine, config ou traceability

Limites explícitos:
    - Não lê arquivos
    - Não executa artefatos
    - Não decide ordem de carga
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


RECIPE_NAME_SEPARATOR = "::"


class ArtifactKind(str, Enum):
    """
    Segmentos de um cookbook.

    Os valores coincidem com o nome do diretório do segmento dentro de
    um cookbook e são usados diretamente em eventos e logs.
    """
    LIBRARY = "libraries"
    ATTRIBUTE = "attributes"
    LWRP_PROVIDER = "providers"
    LWRP_RESOURCE = "resources"
    DEFINITION = "definitions"
    RECIPE = "recipes"


class Phase(str, Enum):
    """
    Fases de carga de uma run.

    A sequência de execução é fixa e pertence ao compilador:
    LIBRARIES → LWRPS → ATTRIBUTES → DEFINITIONS → RECIPES.

    Decisões arquiteturais:
        - LWRPS agrupa dois segmentos (providers e resources)
        - RECIPES não é carregada por SegmentLoader, e sim pelo RecipeIncluder
    """
    LIBRARIES = "libraries"
    LWRPS = "lwrps"
    ATTRIBUTES = "attributes"
    DEFINITIONS = "definitions"
    RECIPES = "recipes"

    @property
    def kinds(self) -> Tuple[ArtifactKind, ...]:
        """Segmentos carregados pela fase, na ordem de carga dentro de um cookbook."""
        return _PHASE_KINDS[self]


_PHASE_KINDS = {
    Phase.LIBRARIES: (ArtifactKind.LIBRARY,),
    Phase.LWRPS: (ArtifactKind.LWRP_PROVIDER, ArtifactKind.LWRP_RESOURCE),
    Phase.ATTRIBUTES: (ArtifactKind.ATTRIBUTE,),
    Phase.DEFINITIONS: (ArtifactKind.DEFINITION,),
    Phase.RECIPES: (ArtifactKind.RECIPE,),
}


# Ordem canônica de compilação de uma run.
PHASE_SEQUENCE: Tuple[Phase, ...] = (
    Phase.LIBRARIES,
    Phase.LWRPS,
    Phase.ATTRIBUTES,
    Phase.DEFINITIONS,
    Phase.RECIPES,
)


@dataclass(frozen=True)
class ArtifactFile:
    """
    Arquivo de artefato pronto para despacho ao executor.

    Campos:
        - cookbook: nome do cookbook dono do arquivo
        - kind: segmento do arquivo
        - path: caminho local do arquivo
    """
    cookbook: str
    kind: ArtifactKind
    path: str


def parse_recipe_name(recipe_name: str) -> Tuple[str, str]:
    """
    Separa um nome de recipe em `(cookbook, short_name)`.

    Sintaxe aceita:
        - "cookbook::recipe" → ("cookbook", "recipe")
        - "cookbook"         → ("cookbook", "cookbook")

    Apenas o primeiro separador é considerado; o restante pertence ao
    nome curto.

    Raises:
        ValueError: Se o nome (ou alguma de suas partes) for vazio.
    """
    if not isinstance(recipe_name, str) or not recipe_name.strip():
        raise ValueError("recipe name must be a non-empty string")

    cookbook, sep, short_name = recipe_name.partition(RECIPE_NAME_SEPARATOR)
    if not sep:
        return recipe_name, recipe_name
    if not cookbook or not short_name:
        raise ValueError(f"Invalid recipe name: {recipe_name!r}")
    return cookbook, short_name


def qualified_name(cookbook: str, short_name: str) -> str:
    return f"{cookbook}{RECIPE_NAME_SEPARATOR}{short_name}"
