"""
Atlas Cookbook — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do Atlas Cookbook.
Erros são considerados artefatos de domínio e fazem parte do contrato operacional
do sistema, devendo ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

Nenhuma decisão implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from atlas_cookbook.core.exceptions import (
    AtlasException,
    AttributeNotFound,
    CookbookNotFound,
    FileLoadFailure,
    RecipeNotFound,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AtlasErrorPayload:
    """
    Payload canônico de erro do Atlas Cookbook.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    - decision_required: indica se a run está bloqueada aguardando decisão humana
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None
    decision_required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        # o chamador deve garantir que details seja serializável
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

COOKBOOK_NOT_FOUND = "COOKBOOK_NOT_FOUND"
ATTRIBUTE_NOT_FOUND = "ATTRIBUTE_NOT_FOUND"
RECIPE_NOT_FOUND = "RECIPE_NOT_FOUND"
FILE_LOAD_FAILED = "FILE_LOAD_FAILED"

# Compilador / Execução
COMPILER_EXECUTION_ERROR = "COMPILER_EXECUTION_ERROR"


_TYPE_BY_EXCEPTION = (
    (CookbookNotFound, COOKBOOK_NOT_FOUND),
    (AttributeNotFound, ATTRIBUTE_NOT_FOUND),
    (RecipeNotFound, RECIPE_NOT_FOUND),
    (FileLoadFailure, FILE_LOAD_FAILED),
)


def exception_to_error(exc: BaseException) -> AtlasErrorPayload:
    """Converte exceções em AtlasErrorPayload (serializável, acionável).

    Regras:
    - AtlasException: já vem com message/details/hint/decision_required.
    - Outras exceções: encapsular como COMPILER_EXECUTION_ERROR sem expor stack trace.
    """
    if isinstance(exc, AtlasException):
        error_type = exc.__class__.__name__
        for exc_class, code in _TYPE_BY_EXCEPTION:
            if isinstance(exc, exc_class):
                error_type = code
                break
        return AtlasErrorPayload(
            type=error_type,
            message=str(exc) or "Erro de compilação",
            details=dict(exc.details or {}),
            hint=exc.hint,
            decision_required=bool(exc.decision_required),
        )

    # Fallback genérico
    return AtlasErrorPayload(
        type=COMPILER_EXECUTION_ERROR,
        message=str(exc) or "Erro inesperado durante a compilação",
        details={
            "exception_class": exc.__class__.__name__,
        },
        hint="Verifique o log da run e o arquivo indicado",
        decision_required=False,
    )
