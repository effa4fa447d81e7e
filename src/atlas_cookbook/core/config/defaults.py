# src/atlas_cookbook/core/config/defaults.py
"""
Configuração padrão do compilador e sua resolução.

Seção `compiler`:
    - log_level: nível mínimo dos registros em `RunContext.log`
    - default_attribute_file: nome curto carregado primeiro na fase de atributos
    - script_extension: extensão removida do arquivo para obter nomes curtos
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Optional

from .errors import InvalidCompilerSettingError
from .merge import deep_merge


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

DEFAULT_CONFIG: Dict[str, Any] = {
    "compiler": {
        "log_level": "INFO",
        "default_attribute_file": "default",
        "script_extension": ".rb",
    },
}


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Valida a seção `compiler` de uma configuração já resolvida.

    Raises:
        InvalidCompilerSettingError: Se algum valor da seção for inválido.
    """
    compiler = config.get("compiler")
    if not isinstance(compiler, dict):
        raise InvalidCompilerSettingError("Seção 'compiler' deve ser um dict")

    level = compiler.get("log_level")
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise InvalidCompilerSettingError(
            f"compiler.log_level inválido: {level!r} (esperado um de {', '.join(LOG_LEVELS)})"
        )

    default_file = compiler.get("default_attribute_file")
    if not isinstance(default_file, str) or not default_file.strip():
        raise InvalidCompilerSettingError("compiler.default_attribute_file deve ser string não vazia")

    if not isinstance(compiler.get("script_extension"), str):
        raise InvalidCompilerSettingError("compiler.script_extension deve ser string")

    return config


def resolve_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Aplica `overrides` sobre `DEFAULT_CONFIG` e valida o resultado."""
    if overrides is None:
        return validate_config(deepcopy(DEFAULT_CONFIG))
    return validate_config(deep_merge(DEFAULT_CONFIG, overrides))


def compiler_setting(config: Dict[str, Any], key: str) -> Any:
    """Lê `compiler.<key>` com fallback para o valor padrão."""
    compiler = (config or {}).get("compiler", {}) or {}
    if key in compiler:
        return compiler[key]
    return DEFAULT_CONFIG["compiler"][key]
