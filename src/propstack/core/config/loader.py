# src/propstack/core/config/loader.py
"""
Loader dos arquivos de settings do resolvedor de propriedades.

Os settings controlam *como* a resolução procura arquivos (diretório dos
arquivos de ambiente, ambiente padrão, nome de usuário, modo estrito), e
não os valores das propriedades em si.

A configuração é resolvida a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional; ausente é aceito)

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides locais nunca mutam os defaults
    - A mesma entrada produz sempre o mesmo resultado

Limites explícitos:
    - Não lê arquivos `.properties`
    - Não valida chaves nem tipos (ver `settings.ResolverSettings`)
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo YAML ou JSON e valida que a raiz é um dicionário.

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de settings não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Raiz dos settings deve ser dict, recebido: {type(data).__name__} ({path})"
        )

    return data


def load_config(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve os settings efetivos (defaults + override local).

    Política de resolução:
        - O arquivo de defaults é obrigatório
        - O arquivo local é opcional; quando existe, tem prioridade
        - A combinação utiliza `deep_merge`

    Args:
        defaults_path (str): Caminho para o arquivo de defaults.
        local_path (Optional[str]): Caminho opcional para overrides locais.

    Returns:
        Dict[str, Any]: Settings resolvidos.

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato não for suportado.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
        ConfigTypeConflictError: Se houver conflito estrutural no merge.
    """

    effective = _load_file(Path(defaults_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return effective
