"""
Atlas Cookbook — Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do Atlas Cookbook.

Objetivo:
- Permitir que o compilador levante exceções semânticas tipadas
- Facilitar o mapeamento determinístico para AtlasErrorPayload
- Evitar ValueError/RuntimeError genéricos nas falhas de carga

Regras:
- Nenhuma recuperação local: toda falha é reportada uma vez e relançada.
- Exceções carregam dados estruturados em `details`.
- Ciclos de dependência NÃO são erro (ver core.engine.resolver).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from atlas_cookbook.core.pipeline.types import ArtifactKind


@dataclass(eq=False)
class AtlasException(Exception):
    """Base class para exceções internas do Atlas.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None
    decision_required: bool = False

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Lookup (cookbooks, recipes, atributos)
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class CookbookNotFound(AtlasException):
    """Cookbook referenciado não existe na coleção da run."""


@dataclass(eq=False)
class AttributeNotFound(AtlasException):
    """Arquivo de atributos não existe no cookbook indicado."""


@dataclass(eq=False)
class RecipeNotFound(AtlasException):
    """Recipe não existe no cookbook indicado (ou o cookbook não existe)."""


# ---------------------------------------------------------------------------
# Carga de arquivos
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class FileLoadFailure(AtlasException):
    """Falha ao carregar um arquivo de artefato.

    `cause` é a exceção original; a mesma exceção também fica encadeada
    em `__cause__` quando levantada via `raise ... from`.
    """

    kind: Optional[ArtifactKind] = None
    path: Optional[str] = None
    cause: Optional[BaseException] = None

    @classmethod
    def wrap(cls, *, kind: ArtifactKind, path: Optional[str], cause: BaseException) -> "FileLoadFailure":
        return cls(
            message=f"could not load {kind.value} file {path}: {cause}",
            details={
                "kind": kind.value,
                "path": path,
                "exception_class": cause.__class__.__name__,
            },
            hint="Corrija o arquivo indicado; nenhuma carga parcial é desfeita",
            kind=kind,
            path=path,
            cause=cause,
        )


def cookbook_not_found(cookbook: str, *, while_loading: Optional[str] = None) -> CookbookNotFound:
    suffix = f" while loading {while_loading}" if while_loading else ""
    return CookbookNotFound(
        message=f"could not find cookbook {cookbook}{suffix}",
        details={"cookbook": cookbook, "while_loading": while_loading},
        hint="Verifique a run-list e as dependências declaradas nos metadados",
    )


def attribute_not_found(cookbook: str, attribute: str) -> AttributeNotFound:
    return AttributeNotFound(
        message=f"could not find filename for attribute {attribute} in cookbook {cookbook}",
        details={"cookbook": cookbook, "attribute": attribute},
        hint="Confira o nome curto do arquivo de atributos",
    )


def recipe_not_found(cookbook: str, recipe: str, *, cookbook_found: bool = True) -> RecipeNotFound:
    if cookbook_found:
        message = f"could not find recipe {recipe} for cookbook {cookbook}"
    else:
        message = f"could not find cookbook {cookbook} while loading recipe {recipe}"
    return RecipeNotFound(
        message=message,
        details={"cookbook": cookbook, "recipe": recipe, "cookbook_found": cookbook_found},
        hint="Confira a run-list e os include_recipe das recipes carregadas",
    )
