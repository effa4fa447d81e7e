"""
Hash canônico da configuração efetiva.

O hash identifica a configuração usada por uma compilação e é gravado
no cabeçalho do Event Log (`core.traceability.event_log`).

Política (v1): JSON com chaves ordenadas, separadores compactos,
UTF-8, SHA-256.
"""

import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Retorna o SHA-256 hexadecimal (64 caracteres) da configuração.

    Raises:
        TypeError: Se `config` não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical = json.dumps(config, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
