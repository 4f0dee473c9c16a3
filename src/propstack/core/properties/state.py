# src/propstack/core/properties/state.py
"""
Acesso ao estado global do processo.

Variáveis de ambiente e propriedades de sistema são estado global mutável.
O resolvedor nunca toca `os.environ` ou o registro de propriedades de
sistema diretamente: recebe um `GlobalState`, o que permite testar a
resolução sem efeitos colaterais e serializar explicitamente resoluções
concorrentes no chamador.

Implementações:
    - ProcessState  → `os.environ` + registro `SYSTEM_PROPERTIES` do processo
    - InMemoryState → dicionários próprios (testes, resoluções isoladas)

Concorrência:
    - Nenhum lock é implementado. Resoluções de nós diferentes no mesmo
      processo devem ser serializadas pelo chamador; sem isso, escritas de
      propriedades de sistema seguem "última escrita vence" sem ordem
      garantida entre nós.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Protocol, runtime_checkable

# Registro de propriedades de sistema do processo. Python não possui um
# equivalente nativo, então o registro vive no nível do módulo.
SYSTEM_PROPERTIES: Dict[str, str] = {}


@runtime_checkable
class GlobalState(Protocol):
    """Contrato mínimo de leitura/escrita do estado global."""

    def environment(self) -> Mapping[str, str]:
        """Snapshot das variáveis de ambiente."""
        ...

    def system_properties(self) -> Mapping[str, str]:
        """Snapshot das propriedades de sistema."""
        ...

    def set_system_property(self, name: str, value: str) -> None:
        ...


class ProcessState:
    """Estado global real do processo."""

    def environment(self) -> Mapping[str, str]:
        return dict(os.environ)

    def system_properties(self) -> Mapping[str, str]:
        return dict(SYSTEM_PROPERTIES)

    def set_system_property(self, name: str, value: str) -> None:
        SYSTEM_PROPERTIES[name] = value


@dataclass
class InMemoryState:
    env: Dict[str, str] = field(default_factory=dict)
    props: Dict[str, str] = field(default_factory=dict)

    def environment(self) -> Mapping[str, str]:
        return dict(self.env)

    def system_properties(self) -> Mapping[str, str]:
        return dict(self.props)

    def set_system_property(self, name: str, value: str) -> None:
        self.props[name] = value
