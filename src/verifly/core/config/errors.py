# src/verifly/core/config/errors.py
"""
Exceções da camada de configuração do Verifly.

As exceções aqui definidas representam falhas estruturais ao carregar ou
resolver a configuração do motor de callbacks, e não erros de resolução
de ordem ou de execução de callbacks.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de callback ou de grupo
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do Verifly.

    Permite captura genérica de erros de configuração, separando-os das
    exceções de `verifly.core.exceptions`.
    """


class DefaultsNotFoundError(ConfigError):
    """O arquivo de configuração base (defaults) não existe."""


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz da configuração não é um dicionário."""


class InvalidSettingError(ConfigError):
    """Uma chave conhecida da seção `engine` possui valor inválido."""

