# src/propstack/core/properties/errors.py
"""
Exceções da resolução de propriedades em camadas.

Todas herdam de `PropertiesError`, que por sua vez herda de `ConfigError`,
permitindo ao host capturar qualquer falha de configuração com um único
`except`.

Invariantes:
    - Arquivo de propriedades ausente NÃO é erro (camada vazia)
    - Nenhuma destas exceções é absorvida pelo resolvedor
    - Cada exceção carrega, como atributos, o arquivo ou a chave envolvida
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from propstack.core.config.errors import ConfigError


class PropertiesError(ConfigError):
    """Base das falhas de resolução de propriedades."""


class ConfigParseError(PropertiesError):
    """
    Linha malformada em um arquivo de propriedades.

    Atributos:
        - path: arquivo (ou rótulo da origem) que contém a linha
        - line_number: número da linha, começando em 1
        - line: conteúdo bruto da linha (sem quebra de linha)
    """

    def __init__(self, path: Union[str, Path], line_number: int, line: str, reason: str):
        self.path = str(path)
        self.line_number = line_number
        self.line = line
        super().__init__(f"{self.path}:{line_number}: {reason}: {line!r}")


class RequiredPropertyMissing(PropertiesError):
    """Propriedade exigida pelo chamador ausente após o merge completo."""

    def __init__(self, key: str, required_by: Optional[str] = None):
        self.key = key
        self.required_by = required_by
        message = f"You must set the '{key}' property"
        if required_by is not None:
            message += f" for '{required_by}'"
        super().__init__(message)


class RequiredFileMissing(PropertiesError):
    """Arquivo do usuário configurado ausente em modo estrito."""

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(f"could not process required file {self.path}")


class EnvironmentFileDirError(PropertiesError):
    """Diretório de arquivos de ambiente inexistente, não-diretório ou ilegível."""

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(
            f"Environment file directory '{self.path}' does not exist, "
            f"or is not a readable directory"
        )


class EnvironmentFilesNotFound(PropertiesError):
    """Nenhum arquivo de ambiente encontrado para um ambiente diferente de "local"."""

    def __init__(self, environment_name: str):
        self.environment_name = environment_name
        super().__init__(
            f"No environment files were found for the '{environment_name}' environment"
        )
