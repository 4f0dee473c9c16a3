# src/propstack/core/config/__init__.py

"""
Camada de settings do propstack.

Este pacote carrega, mescla, valida e identifica (hash) os settings que
controlam a descoberta de arquivos pelo resolvedor de propriedades.

Responsabilidades do pacote:
    - Carregamento de settings em YAML ou JSON (defaults + override local)
    - Deep-merge determinístico entre defaults e override
    - Validação de chaves e tipos (`ResolverSettings`)
    - Hash canônico de mapeamentos para rastreabilidade
    - Raiz da hierarquia de exceções (`ConfigError`)

Limites explícitos:
    - Não lê arquivos `.properties`
    - Não aplica precedência entre camadas de propriedades
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSettingsError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config
from .merge import deep_merge
from .settings import ResolverSettings, load_settings

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidSettingsError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "load_config",
    "deep_merge",
    "ResolverSettings",
    "load_settings",
]
