# src/atlas_cookbook/core/config/errors.py
"""
Exceções da camada de configuração do Atlas Cookbook.

Todas herdam de `ConfigError`, separando falhas de configuração das
falhas de compilação (`core.exceptions`).
"""


class ConfigError(Exception):
    """Base para erros de carregamento, merge ou validação de configuração."""


class DefaultsNotFoundError(ConfigError):
    """O arquivo de defaults informado não existe."""


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo não suportada.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do arquivo não é um mapa chave-valor."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"compiler": {"log_level": "INFO"}}
        - override: {"compiler": "DEBUG"}
    """


class InvalidCompilerSettingError(ConfigError):
    """Valor inválido na seção `compiler` (ex.: log_level desconhecido)."""
