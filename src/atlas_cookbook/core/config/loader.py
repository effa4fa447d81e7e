# src/atlas_cookbook/core/config/loader.py
"""
Loader de configuração do Atlas Cookbook.

A configuração efetiva de uma compilação é resolvida a partir de:
    - `DEFAULT_CONFIG` embutido no pacote
    - um arquivo de defaults do projeto (obrigatório quando informado)
    - um arquivo local de overrides (opcional; ignorado se não existir)

Precedência: local > arquivo de defaults > DEFAULT_CONFIG.

Decisões arquiteturais:
    - YAML (PyYAML, `safe_load`) e JSON são os únicos formatos aceitos
    - Arquivos vazios valem como dicionário vazio
    - Erros estruturais são fatais; nada é inferido

Limites explícitos:
    - Não persiste configuração nem hash
    - Não interage com o compilador
"""

from pathlib import Path
from typing import Any, Dict, Optional
import json

import yaml  # PyYAML

from .defaults import resolve_config
from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo de configuração e garante que a raiz seja um dict.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for YAML/JSON.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_config(
    *,
    defaults_path: Optional[str] = None,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva da compilação.

    Args:
        defaults_path (Optional[str]): Arquivo de defaults do projeto. Quando
            informado, deve existir.
        local_path (Optional[str]): Overrides locais; ignorado se o arquivo
            não existir.

    Returns:
        Dict[str, Any]: Configuração final validada.

    Raises:
        DefaultsNotFoundError: Se `defaults_path` não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
        InvalidCompilerSettingError: Se a seção `compiler` resultante for inválida.
    """
    overrides: Dict[str, Any] = {}

    if defaults_path is not None:
        overrides = _load_file(Path(defaults_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            overrides = deep_merge(overrides, _load_file(local_file))

    return resolve_config(overrides)
