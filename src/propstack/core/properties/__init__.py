# src/propstack/core/properties/__init__.py
"""
Resolução de propriedades em camadas.

Componentes:
    - loader   → Source Loader (descoberta de camadas, sem precedência)
    - merger   → Precedence Merger (fold, propagação, filter tokens, checks)
    - resolver → fachada exposta ao host (`PropertyResolver`)
    - parser   → leitura de arquivos `key=value`
    - state    → acesso injetável ao estado global do processo
    - log      → log estruturado da resolução
"""

from .errors import (
    ConfigParseError,
    EnvironmentFileDirError,
    EnvironmentFilesNotFound,
    PropertiesError,
    RequiredFileMissing,
    RequiredPropertyMissing,
)
from .loader import SourceLoader
from .log import ResolutionLog
from .merger import (
    build_filter_tokens,
    camel_case_to_dot_notation,
    check_recommended,
    check_required,
    check_required_all,
    merge_layers,
    propagate_system_properties,
)
from .parser import load_properties_file, parse_properties
from .resolver import PropertyResolver
from .state import SYSTEM_PROPERTIES, GlobalState, InMemoryState, ProcessState
from .types import ProjectNode, PropertyLayer, Resolution, SourceKind

__all__ = [
    "ConfigParseError",
    "EnvironmentFileDirError",
    "EnvironmentFilesNotFound",
    "PropertiesError",
    "RequiredFileMissing",
    "RequiredPropertyMissing",
    "SourceLoader",
    "ResolutionLog",
    "build_filter_tokens",
    "camel_case_to_dot_notation",
    "check_recommended",
    "check_required",
    "check_required_all",
    "merge_layers",
    "propagate_system_properties",
    "load_properties_file",
    "parse_properties",
    "PropertyResolver",
    "SYSTEM_PROPERTIES",
    "GlobalState",
    "InMemoryState",
    "ProcessState",
    "ProjectNode",
    "PropertyLayer",
    "Resolution",
    "SourceKind",
]
