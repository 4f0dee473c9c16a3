# src/propstack/__init__.py
"""
propstack — resolução de propriedades em camadas para árvores de projetos.

Coleta pares chave/valor de fontes com precedências diferentes (arquivos do
projeto e de ambiente, arquivos de projetos ancestrais, arquivos globais do
usuário, variáveis de ambiente, propriedades de sistema e overrides de
linha de comando) e produz, por nó de projeto:

    - o mapa final de propriedades resolvidas
    - o mapa de filter tokens para substituição de texto
    - a propagação de chaves `systemProp.*` como propriedades de sistema

O host (ferramenta de build) fornece a hierarquia de nós, os overrides e os
diretórios; o propstack apenas resolve.
"""

from .core.config import ConfigError, ResolverSettings, load_settings
from .core.properties import (
    ConfigParseError,
    InMemoryState,
    ProcessState,
    ProjectNode,
    PropertyResolver,
    RequiredPropertyMissing,
    Resolution,
    SourceKind,
)

__all__ = [
    "ConfigError",
    "ResolverSettings",
    "load_settings",
    "ConfigParseError",
    "InMemoryState",
    "ProcessState",
    "ProjectNode",
    "PropertyResolver",
    "RequiredPropertyMissing",
    "Resolution",
    "SourceKind",
]
