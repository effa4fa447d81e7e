# src/atlas_cookbook/core/pipeline/__init__.py
"""
# Pipeline Core — Atlas Cookbook

Este pacote define os tipos, contratos e estado de uma run de compilação.

## Componentes

- **types**: `ArtifactKind`, `Phase`, `ArtifactFile`, sintaxe `cookbook::recipe`
- **protocols**: colaboradores externos (`Cookbook`, `CookbookCollection`,
  `Node`, `EventSink`, `ExpandedRunList`, `ArtifactExecutor`)
- **cookbook**: implementações em memória dos colaboradores de cookbook
- **context**: `RunContext`, dono de todo o estado da run
- **definitions**: `DefinitionTable` (last-writer-wins)
- **notifications**: `NotificationRegistry` (imediatas e tardias)

## Limites Explícitos

- Não decide ordem de carga (ver `core.engine`)
- Não interpreta conteúdo de arquivos
"""
