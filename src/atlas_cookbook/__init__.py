# src/atlas_cookbook/__init__.py
"""
Atlas Cookbook — compilador determinístico de cookbooks.

Este pacote raiz expõe a API pública do Atlas Cookbook: o núcleo que,
antes da convergência de uma run de gerência de configuração, carrega
os artefatos de cookbooks (libraries, LWRPs, atributos, definições e
recipes) na ordem correta.

Princípios centrais:
    - Dependências de um cookbook são carregadas, por fase, antes dele
    - A ordem dentro de um cookbook é determinística
    - Recipes e atributos são carregados no máximo uma vez por run
    - Eventos de ciclo de vida são emitidos para um EventSink externo

Arquitetura em alto nível:
    - core.config       → defaults, carregamento, merge e hashing de configuração
    - core.pipeline     → tipos, protocolos, RunContext e estado da run
    - core.engine       → ordem de cookbooks, fases de segmento e recipes
    - core.traceability → Event Log da compilação

Limites explícitos:
    - Não enumera arquivos de cookbooks
    - Não interpreta o conteúdo dos arquivos (delegado ao ArtifactExecutor)
    - Não converge resources nem entrega notificações
"""
# src/atlas_cookbook/__init__.py
from .core.pipeline.context import RunContext
from .core.pipeline.cookbook import CookbookCollection, CookbookVersion, RunListExpansion
from .core.pipeline.notifications import Notification, NotificationRegistry, Resource
from .core.pipeline.types import ArtifactFile, ArtifactKind, Phase, parse_recipe_name
from .core.engine.compiler import CookbookCompiler
from .core.engine.resolver import CookbookOrderResolver
from .core.exceptions import (
    AttributeNotFound,
    CookbookNotFound,
    FileLoadFailure,
    RecipeNotFound,
)
from .core.traceability import CompileEventLog, NullEventSink

__all__ = [
    "RunContext",
    "CookbookCollection",
    "CookbookVersion",
    "RunListExpansion",
    "Notification",
    "NotificationRegistry",
    "Resource",
    "ArtifactFile",
    "ArtifactKind",
    "Phase",
    "parse_recipe_name",
    "CookbookCompiler",
    "CookbookOrderResolver",
    "AttributeNotFound",
    "CookbookNotFound",
    "FileLoadFailure",
    "RecipeNotFound",
    "CompileEventLog",
    "NullEventSink",
]
