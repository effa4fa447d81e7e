# src/atlas_cookbook/core/pipeline/definitions.py
"""
Tabela de definições de resource (macros) de uma run.

Definições são carregadas por cookbook, na ordem resolvida de cookbooks.
Quando dois cookbooks declaram a mesma definição, a última carregada
prevalece (last-writer-wins). A sobrescrita não é erro: o chamador
recebe as chaves sobrescritas para registrá-las em log.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping


class DefinitionTable:
    def __init__(self) -> None:
        self._definitions: Dict[str, Any] = {}

    def merge(self, defines: Mapping[str, Any]) -> List[str]:
        """
        Incorpora as definições de um arquivo.

        Returns:
            List[str]: Nomes que já existiam e foram sobrescritos, na ordem
            do mapeamento recebido.
        """
        overridden: List[str] = []
        for name, body in defines.items():
            if name in self._definitions:
                overridden.append(name)
            self._definitions[name] = body
        return overridden

    def get(self, name: str) -> Any:
        if name not in self._definitions:
            raise KeyError(name)
        return self._definitions[name]

    def names(self) -> List[str]:
        return list(self._definitions)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)
