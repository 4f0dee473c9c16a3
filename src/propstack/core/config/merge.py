# src/propstack/core/config/merge.py
"""
Deep-merge canônico dos settings do resolvedor.

Este módulo combina o arquivo de defaults dos settings com o arquivo local
de override. Não é usado para as camadas de propriedades, que são planas
(chave → string) e seguem o fold de precedência de
`propstack.core.properties.merger`.

Política de merge:
    - dict → merge recursivo por chave
    - list → sobrescrita total
    - escalar → sobrescrita direta
    - None em qualquer lado → sobrescrita direta (valor "não definido")
    - conflito de tipos → erro estrutural explícito

Invariantes:
    - Nenhum input é mutado
    - A mesma entrada sempre produz a mesma saída
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois dicionários de settings.

    Decisões arquiteturais:
        - O merge é puramente funcional (inputs não são mutados)
        - `None` representa ausência de valor e nunca gera conflito de tipo
        - Conflitos estruturais são tratados como falha fatal

    Args:
        base (Dict[str, Any]): Settings base (defaults).
        override (Dict[str, Any]): Overrides explícitos (arquivo local).

    Returns:
        Dict[str, Any]: Novo dicionário resultante do merge.

    Raises:
        ConfigTypeConflictError: Se uma chave tiver tipos incompatíveis.
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        base_value = result.get(key)

        if key not in result or base_value is None or override_value is None:
            result[key] = deepcopy(override_value)
            continue

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        if isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        if type(base_value) is not type(override_value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[key] = deepcopy(override_value)

    return result
