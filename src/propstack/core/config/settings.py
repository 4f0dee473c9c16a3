# src/propstack/core/config/settings.py
"""
Settings tipados do resolvedor de propriedades.

`ResolverSettings` é a forma validada do dicionário produzido por
`load_config`. Os campos reproduzem as opções do plugin de propriedades
original que não fazem parte das convenções fixas de nomes:

    - environment_file_dir: subdiretório (relativo a cada projeto) onde
      ficam os arquivos `gradle-<ambiente>.properties`; "." = o próprio
      diretório do projeto
    - default_environment: ambiente usado quando o nó não declara um;
      None desativa a camada de arquivo de ambiente
    - user_name: quando definido, carrega `gradle-<user_name>.properties`
      do diretório home
    - strict_files: exige o arquivo do usuário configurado e pelo menos um
      arquivo de ambiente para ambientes diferentes de "local"

Invariantes:
    - Instâncias são imutáveis
    - Chaves desconhecidas e tipos incorretos são rejeitados
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional

from .errors import InvalidSettingsError
from .hashing import compute_config_hash
from .loader import load_config


@dataclass(frozen=True)
class ResolverSettings:
    environment_file_dir: str = "."
    default_environment: Optional[str] = None
    user_name: Optional[str] = None
    strict_files: bool = False

    # hash dos settings efetivos quando carregados de arquivo
    config_hash: Optional[str] = field(default=None, compare=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ResolverSettings":
        """
        Constrói settings a partir de um mapeamento já resolvido.

        Raises:
            InvalidSettingsError: Para chaves desconhecidas ou tipos inválidos.
        """
        known = {f.name for f in fields(cls) if f.name != "config_hash"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidSettingsError(f"Chaves de settings desconhecidas: {unknown}")

        for name in ("environment_file_dir", "default_environment", "user_name"):
            value = data.get(name)
            if value is not None and not isinstance(value, str):
                raise InvalidSettingsError(
                    f"'{name}' deve ser string, recebido: {type(value).__name__}"
                )
        if data.get("environment_file_dir") == "":
            raise InvalidSettingsError("'environment_file_dir' não pode ser vazio")

        strict = data.get("strict_files", False)
        if not isinstance(strict, bool):
            raise InvalidSettingsError(
                f"'strict_files' deve ser bool, recebido: {type(strict).__name__}"
            )

        return cls(
            environment_file_dir=data.get("environment_file_dir") or ".",
            default_environment=data.get("default_environment"),
            user_name=data.get("user_name"),
            strict_files=strict,
            config_hash=compute_config_hash(data),
        )


def load_settings(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> ResolverSettings:
    """Carrega defaults + override local e valida o resultado."""
    return ResolverSettings.from_mapping(
        load_config(defaults_path=defaults_path, local_path=local_path)
    )
