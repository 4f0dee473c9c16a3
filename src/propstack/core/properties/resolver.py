# src/propstack/core/properties/resolver.py
"""
Fachada de resolução de propriedades exposta ao host.

Pontos de entrada:
    - resolve(node)        → ResolvedProperties
    - filter_tokens(node)  → FilterTokenMap
    - resolve_full(node)   → Resolution (camadas, mapas, propagação, hash)
    - resolve_all(nodes)   → resoluções em ordem pai → filho
    - check_required / check_required_all / check_recommended

Fluxo de uma passada:
    SourceLoader.load → merge_layers → build_filter_tokens
    → propagate_system_properties → Resolution

Decisões arquiteturais:
    - A resolução é atômica para o chamador: o mapa completo é construído
      antes de qualquer escrita em estado global
    - Nenhum cache entre chamadas: resolver o mesmo nó duas vezes com as
      mesmas entradas produz o mesmo mapa, os mesmos tokens e o mesmo hash
    - Erros de parse e propriedades obrigatórias ausentes são propagados
    - O `ResolutionLog` é compartilhado e acumula eventos de todas as
      passadas; `Resolution.events` traz apenas os eventos da própria passada

Concorrência:
    - Síncrono e sem locks. Chamadores que resolvem vários nós no mesmo
      processo devem serializar as chamadas (estado global compartilhado).
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Union

from propstack.core.config.hashing import compute_config_hash
from propstack.core.config.settings import ResolverSettings

from .loader import SourceLoader
from .log import ResolutionLog
from .merger import (
    build_filter_tokens,
    check_recommended,
    check_required,
    check_required_all,
    merge_layers,
    propagate_system_properties,
)
from .state import GlobalState, ProcessState
from .types import ProjectNode, Resolution


class PropertyResolver:
    """
    Resolvedor de propriedades em camadas para nós de projeto.

    Args:
        home_dir: Diretório home global (arquivos HOME_FILE e USER_FILE).
        state: Acesso ao estado global; padrão é o estado real do processo.
        command_line: Overrides explícitos do chamador (sempre vencem).
        settings: Opções de descoberta de arquivos.
        log: Destino dos eventos estruturados; um novo é criado se omitido.
    """

    def __init__(
        self,
        *,
        home_dir: Union[str, Path],
        state: Optional[GlobalState] = None,
        command_line: Optional[Mapping[str, str]] = None,
        settings: Optional[ResolverSettings] = None,
        log: Optional[ResolutionLog] = None,
    ) -> None:
        self.state = state if state is not None else ProcessState()
        self.log = log if log is not None else ResolutionLog()
        self.settings = settings if settings is not None else ResolverSettings()
        self._loader = SourceLoader(
            home_dir=Path(home_dir),
            state=self.state,
            command_line=dict(command_line or {}),
            settings=self.settings,
            log=self.log,
        )

    @property
    def events(self):
        """Todos os eventos do log compartilhado, acumulados entre passadas."""
        return self.log.events

    def resolve_full(self, node: ProjectNode) -> Resolution:
        first_event = len(self.log.events)
        layers = tuple(self._loader.load(node))
        properties = merge_layers(layers)
        tokens = build_filter_tokens(properties)
        written = propagate_system_properties(
            properties, self.state, log=self.log, node=node.path
        )
        return Resolution(
            node=node,
            layers=layers,
            properties=MappingProxyType(properties),
            filter_tokens=tokens,
            system_properties=MappingProxyType(written),
            properties_hash=compute_config_hash(properties),
            events=tuple(self.log.events[first_event:]),
        )

    def resolve(self, node: ProjectNode) -> Mapping[str, str]:
        return self.resolve_full(node).properties

    def filter_tokens(self, node: ProjectNode) -> Mapping[str, str]:
        return self.resolve_full(node).filter_tokens

    def resolve_all(self, nodes: Iterable[ProjectNode]) -> Dict[str, Resolution]:
        """
        Resolve vários nós garantindo que cada pai termine antes dos filhos.

        Returns:
            Dict[str, Resolution]: Resoluções indexadas por `node.path`,
            inseridas em ordem de profundidade (raiz primeiro).
        """
        ordered = sorted(nodes, key=lambda n: (n.depth, n.path))
        return {node.path: self.resolve_full(node) for node in ordered}

    # -----------------------------
    # Verificações para a lógica de build
    # -----------------------------
    @staticmethod
    def check_required(
        properties: Mapping[str, str],
        key: str,
        *,
        required_by: Optional[str] = None,
    ) -> None:
        check_required(properties, key, required_by=required_by)

    @staticmethod
    def check_required_all(
        properties: Mapping[str, str],
        keys: Iterable[str],
        *,
        required_by: Optional[str] = None,
    ) -> None:
        check_required_all(properties, keys, required_by=required_by)

    def check_recommended(
        self,
        properties: Mapping[str, str],
        key: str,
        *,
        node: ProjectNode,
        default_source: Optional[str] = None,
    ) -> Optional[str]:
        """Como `merger.check_recommended`, registrando o aviso sob `node.path`."""
        message = check_recommended(properties, key, default_source=default_source)
        if message is not None:
            self.log.add_warning(node=node.path, message=message)
            self.log.log(node=node.path, level="WARNING", message=message, key=key)
        return message
