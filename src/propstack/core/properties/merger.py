# src/propstack/core/properties/merger.py
"""
Precedence Merger: fold de camadas, propagação de propriedades de sistema
e construção do mapa de filter tokens.

Política de precedência (menor → maior; a última escrita vence):
    ancestrais (arquivo, ambiente) → home → usuário → projeto
    → ambiente do projeto → variáveis de ambiente → propriedades de sistema
    → linha de comando

Princípios fundamentais:
    - O fold é um left-fold determinístico sobre camadas ordenadas por
      `SourceKind.precedence`; camadas herdadas são ordenadas antes por
      profundidade do ancestral, um slot por nível
    - A propagação de `systemProp.*` ocorre uma única vez, após o fold,
      com os valores já resolvidos
    - Chaves `systemProp.*` nunca aparecem no mapa de tokens

Limites explícitos:
    - Não lê arquivos nem variáveis de ambiente
    - Não valida semântica dos valores
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from .errors import RequiredPropertyMissing
from .log import ResolutionLog
from .state import GlobalState
from .types import PropertyLayer

SYSTEM_PROP_KEY_PREFIX = "systemProp."


def _precedence_key(layer: PropertyLayer) -> Tuple[int, int, int]:
    if layer.kind.is_inherited:
        return (0, layer.ancestor_depth, layer.kind.precedence)
    return (1, 0, layer.kind.precedence)


def merge_layers(layers: Iterable[PropertyLayer]) -> Dict[str, str]:
    """
    Aplica as camadas em ordem de precedência, sobrescrevendo chaves repetidas.

    Camadas herdadas ocupam um slot por ancestral, da raiz ao pai: o
    arquivo de ambiente de um ancestral nunca vence o arquivo base de um
    ancestral mais próximo. `sorted` é estável, então camadas com a mesma
    chave de ordenação mantêm a ordem de descoberta.

    Returns:
        Dict[str, str]: Novo dicionário; as camadas não são alteradas.
    """
    resolved: Dict[str, str] = {}
    for layer in sorted(layers, key=_precedence_key):
        resolved.update(layer.properties)
    return resolved


def propagate_system_properties(
    properties: Mapping[str, str],
    state: GlobalState,
    *,
    log: Optional[ResolutionLog] = None,
    node: str = ":",
) -> Dict[str, str]:
    """
    Escreve cada `systemProp.X` resolvido como propriedade de sistema `X`.

    Deve ser chamada com o mapa já resolvido: uma chave definida em camada
    baixa e sobrescrita em camada alta propaga apenas o valor vencedor.

    Returns:
        Dict[str, str]: Propriedades de sistema escritas (nome sem prefixo → valor).
    """
    written: Dict[str, str] = {}
    for key, value in properties.items():
        if not key.startswith(SYSTEM_PROP_KEY_PREFIX):
            continue
        name = key[len(SYSTEM_PROP_KEY_PREFIX):]
        if not name:
            continue
        state.set_system_property(name, value)
        written[name] = value

    if log is not None and written:
        log.log(
            node=node,
            level="INFO",
            message=f"Set {len(written)} system properties",
            names=sorted(written),
        )
    return written


def camel_case_to_dot_notation(name: str) -> str:
    """
    Converte `myPropertyName` em `my.property.name`.

    Nomes que não começam com letra minúscula não são tratados como camel
    case e retornam inalterados.
    """
    if not name or not name[0].islower():
        return name
    return "".join(f".{c.lower()}" if c.isupper() else c for c in name)


def build_filter_tokens(properties: Mapping[str, str]) -> Mapping[str, str]:
    """
    Constrói o FilterTokenMap a partir das propriedades resolvidas.

    Cada propriedade (exceto `systemProp.*`) gera um token com o mesmo nome
    e, quando o nome é camel case, um token adicional em notação de pontos.
    Em colisão, o nome original de uma propriedade vence o alias de outra.
    """
    eligible = {
        key: value
        for key, value in properties.items()
        if not key.startswith(SYSTEM_PROP_KEY_PREFIX)
    }
    tokens: Dict[str, str] = {}
    for key, value in eligible.items():
        tokens[camel_case_to_dot_notation(key)] = value
    tokens.update(eligible)
    return MappingProxyType(tokens)


def check_required(
    properties: Mapping[str, str],
    key: str,
    *,
    required_by: Optional[str] = None,
) -> None:
    """
    Asserção pura: falha se `key` não estiver nas propriedades resolvidas.

    Raises:
        RequiredPropertyMissing: Quando a chave está ausente.
    """
    if key not in properties:
        raise RequiredPropertyMissing(key, required_by=required_by)


def check_required_all(
    properties: Mapping[str, str],
    keys: Iterable[str],
    *,
    required_by: Optional[str] = None,
) -> None:
    for key in keys:
        check_required(properties, key, required_by=required_by)


def check_recommended(
    properties: Mapping[str, str],
    key: str,
    *,
    default_source: Optional[str] = None,
) -> Optional[str]:
    """
    Verifica uma propriedade recomendada sem falhar.

    Returns:
        Optional[str]: None quando presente; caso contrário a mensagem de
        aviso, indicando de onde o default virá quando informado.
    """
    if key in properties:
        return None
    message = f"'{key}' has no value, using default"
    if default_source is not None:
        message += f" from '{default_source}'"
    return message
