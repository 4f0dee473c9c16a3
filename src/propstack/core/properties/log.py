# src/propstack/core/properties/log.py
"""
Log estruturado da resolução de propriedades.

Logs não são strings livres: cada evento é um dicionário com o caminho do
nó, o nível, a mensagem, um timestamp UTC e campos extras (arquivo,
contagem de propriedades, origem). Warnings não fatais (ex.: propriedade
recomendada ausente) são agrupados por nó.

Invariantes:
    - `events` cresce apenas por `log` e só é esvaziado por `clear`
    - Todo evento contém `node`, `level`, `message` e `timestamp`
    - Warnings são indexados pelo caminho do nó

Limites explícitos:
    - Não persiste eventos
    - Não descarta eventos: uma instância compartilhada cresce a cada
      passada até `clear`
    - Não imprime nada; o host decide como apresentar
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass
class ResolutionLog:
    events: List[Dict[str, Any]] = field(default_factory=list)
    warnings: Dict[str, List[str]] = field(default_factory=dict)

    def log(self, *, node: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "node": node,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, node: str, message: str) -> None:
        if node not in self.warnings:
            self.warnings[node] = []
        self.warnings[node].append(message)

    def clear(self) -> None:
        self.events.clear()
        self.warnings.clear()

    def for_node(self, node: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["node"] == node]
