# src/propstack/core/properties/types.py
"""
Tipos canônicos da resolução de propriedades em camadas.

Componentes principais:
    - SourceKind    → enum das origens de propriedades; a ordem de
                      declaração É a ordem de precedência (menor → maior)
    - PropertyLayer → contribuição imutável de uma origem (chave → valor)
    - ProjectNode   → nó de projeto fornecido pelo host (pai opcional,
                      nome de ambiente opcional)
    - Resolution    → resultado imutável de uma passada de resolução

Invariantes:
    - Camadas e resoluções nunca são alteradas após criadas
    - Os mapeamentos expostos são views somente leitura
    - A precedência de uma camada depende apenas do seu `SourceKind` e,
      nas camadas herdadas, da profundidade do ancestral

Limites explícitos:
    - Não lê arquivos nem estado do processo
    - Não aplica precedência (ver `merger`)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


class SourceKind(str, Enum):
    """
    Origens possíveis de uma camada de propriedades.

    A ordem de declaração abaixo é a ordem de aplicação, da menos para a
    mais autoritativa. Os valores textuais são estáveis e aparecem nos
    eventos de log.
    """

    PARENT_FILE = "parent_file"
    PARENT_ENV_FILE = "parent_env_file"
    HOME_FILE = "home_file"
    USER_FILE = "user_file"
    PROJECT_FILE = "project_file"
    PROJECT_ENV_FILE = "project_env_file"
    ENVIRONMENT_VAR = "environment_var"
    SYSTEM_PROP = "system_prop"
    COMMAND_LINE = "command_line"

    @property
    def precedence(self) -> int:
        return list(SourceKind).index(self)

    @property
    def is_file(self) -> bool:
        return self in _FILE_KINDS

    @property
    def is_inherited(self) -> bool:
        return self in (SourceKind.PARENT_FILE, SourceKind.PARENT_ENV_FILE)


_FILE_KINDS = frozenset(
    {
        SourceKind.PARENT_FILE,
        SourceKind.PARENT_ENV_FILE,
        SourceKind.HOME_FILE,
        SourceKind.USER_FILE,
        SourceKind.PROJECT_FILE,
        SourceKind.PROJECT_ENV_FILE,
    }
)


@dataclass(frozen=True)
class PropertyLayer:
    """
    Contribuição de uma única origem, antes da precedência.

    Campos:
        - kind: origem da camada
        - properties: chave → valor (string); copiado e congelado na criação
        - source: caminho do arquivo ou rótulo da origem (ex.: "environment")
        - found: para camadas de arquivo, False quando o arquivo não existe
        - ancestor_depth: para camadas herdadas, profundidade do ancestral
          que as contribuiu (0 = raiz); cada ancestral ocupa um único slot
          de precedência, com seu arquivo base antes do de ambiente
    """

    kind: SourceKind
    properties: Mapping[str, str] = field(default_factory=dict)
    source: Optional[str] = None
    found: bool = True
    ancestor_depth: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    def relabel(self, kind: SourceKind, *, ancestor_depth: int = 0) -> "PropertyLayer":
        """Mesma camada sob outra origem (usado na herança pai → filho)."""
        return replace(
            self, kind=kind, properties=dict(self.properties), ancestor_depth=ancestor_depth
        )

    def __len__(self) -> int:
        return len(self.properties)


@dataclass(frozen=True)
class ProjectNode:
    """
    Nó de projeto pertencente ao host.

    O resolvedor apenas lê o nó e seus ancestrais; nunca controla o ciclo
    de vida do pai.
    """

    name: str
    project_dir: Path
    parent: Optional["ProjectNode"] = field(default=None, repr=False)
    environment_name: Optional[str] = None

    @property
    def path(self) -> str:
        if self.parent is None:
            return ":"
        parent_path = self.parent.path
        return f"{parent_path}{self.name}" if parent_path == ":" else f"{parent_path}:{self.name}"

    @property
    def depth(self) -> int:
        return 0 if self.parent is None else self.parent.depth + 1

    def ancestors(self) -> List["ProjectNode"]:
        """Ancestrais do nó, da raiz até o pai imediato."""
        chain: List[ProjectNode] = []
        current = self.parent
        while current is not None:
            chain.insert(0, current)
            current = current.parent
        return chain


@dataclass(frozen=True)
class Resolution:
    """
    Resultado atômico de uma passada de resolução para um nó.

    Campos:
        - node: nó resolvido
        - layers: camadas na ordem de descoberta
        - properties: ResolvedProperties (view somente leitura)
        - filter_tokens: FilterTokenMap (view somente leitura)
        - system_properties: propriedades de sistema escritas na propagação
        - properties_hash: SHA-256 canônico de `properties`
        - events: eventos de log emitidos apenas nesta passada
    """

    node: ProjectNode
    layers: Tuple[PropertyLayer, ...]
    properties: Mapping[str, str]
    filter_tokens: Mapping[str, str]
    system_properties: Mapping[str, str]
    properties_hash: str
    events: Tuple[Dict[str, Any], ...] = ()
