# src/propstack/core/config/hashing.py
"""
Hashing canônico de mapeamentos do propstack.

Usado em dois pontos:
    - identidade dos settings efetivos do resolvedor
    - identidade do mapa de propriedades resolvido de um nó
      (`Resolution.properties_hash`), o que torna verificável a
      idempotência de duas resoluções do mesmo nó

Política:
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256 hexadecimal (64 caracteres)
"""

import hashlib
import json
from typing import Any, Mapping


def compute_config_hash(config: Mapping[str, Any]) -> str:
    """
    Gera um hash determinístico de um mapeamento de configuração.

    Aceita qualquer `Mapping` (inclusive as views somente leitura devolvidas
    pelo resolvedor). O hash independe da ordem original das chaves.

    Raises:
        TypeError: Se o objeto fornecido não for um mapeamento.
    """

    if not isinstance(config, Mapping):
        raise TypeError(
            f"Config para hashing deve ser Mapping, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        dict(config),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
