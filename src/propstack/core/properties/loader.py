# src/propstack/core/properties/loader.py
"""
Source Loader: descoberta e leitura das camadas de propriedades de um nó.

O loader produz as camadas disponíveis para um nó, na ordem de
descoberta, sem decidir vencedores. A precedência é aplicada depois, em
`merger.merge_layers`.

Camadas produzidas (ordem de descoberta):
    1. PARENT_FILE / PARENT_ENV_FILE de cada ancestral, da raiz ao pai,
       obtidas por chamada recursiva sobre o pai e marcadas com a
       profundidade do ancestral (`ancestor_depth`)
    2. HOME_FILE         → <home>/gradle.properties
    3. USER_FILE         → <home>/gradle-<user_name>.properties
    4. PROJECT_FILE      → <projeto>/gradle.properties
    5. PROJECT_ENV_FILE  → <projeto>/<env_dir>/gradle-<ambiente>.properties
    6. ENVIRONMENT_VAR   → variáveis `ORG_GRADLE_PROJECT_*` (prefixo removido)
    7. SYSTEM_PROP       → propriedades `org.gradle.project.*` (prefixo removido)
    8. COMMAND_LINE      → overrides do chamador, sem alteração

Decisões arquiteturais:
    - Arquivo ausente produz camada vazia com `found=False`, nunca erro
    - O filho herda apenas as camadas de ARQUIVO do pai; ambiente,
      propriedades de sistema e linha de comando são relidos por nó
    - Cada nó usa o próprio nome de ambiente (ou o padrão dos settings)

Limites explícitos:
    - Não aplica precedência
    - Não escreve estado global
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from propstack.core.config.settings import ResolverSettings

from .errors import EnvironmentFileDirError, EnvironmentFilesNotFound, RequiredFileMissing
from .log import ResolutionLog
from .parser import load_properties_file
from .state import GlobalState
from .types import ProjectNode, PropertyLayer, SourceKind

ENV_VAR_PREFIX = "ORG_GRADLE_PROJECT_"
SYSTEM_PROP_PREFIX = "org.gradle.project."
BASE_FILE_NAME = "gradle.properties"
LOCAL_ENVIRONMENT = "local"


def environment_file_name(environment_name: str) -> str:
    return f"gradle-{environment_name}.properties"


def user_file_name(user_name: str) -> str:
    return f"gradle-{user_name}.properties"


def _strip_prefixed(source: Mapping[str, str], prefix: str) -> Dict[str, str]:
    return {
        key[len(prefix):]: str(value)
        for key, value in source.items()
        if key.startswith(prefix) and len(key) > len(prefix)
    }


@dataclass
class SourceLoader:
    """
    Descobre as camadas de um nó a partir de arquivos e do estado global.

    Campos:
        - home_dir: diretório home global (equivalente ao gradle user home)
        - state: acesso injetado a variáveis de ambiente e propriedades de sistema
        - command_line: overrides explícitos do chamador
        - settings: opções de descoberta (`ResolverSettings`)
        - log: destino dos eventos estruturados
    """

    home_dir: Path
    state: GlobalState
    command_line: Mapping[str, str] = field(default_factory=dict)
    settings: ResolverSettings = field(default_factory=ResolverSettings)
    log: ResolutionLog = field(default_factory=ResolutionLog)

    def load(self, node: ProjectNode) -> List[PropertyLayer]:
        """
        Retorna todas as camadas do nó, na ordem de descoberta.

        Raises:
            ConfigParseError: Linha malformada em algum arquivo.
            EnvironmentFileDirError: Diretório de ambiente inválido.
            RequiredFileMissing: Arquivo do usuário ausente (modo estrito).
            EnvironmentFilesNotFound: Nenhum arquivo de ambiente (modo estrito).
        """
        inherited = self.inherited_layers(node)
        project = self.project_file_layers(node)
        layers = [
            *inherited,
            self._file_layer(SourceKind.HOME_FILE, Path(self.home_dir) / BASE_FILE_NAME, node),
            self.user_layer(node),
            *project,
            self.environment_layer(node),
            self.system_property_layer(node),
            self.command_line_layer(node),
        ]
        self._check_environment_files(node, [*inherited, *project])
        return layers

    def inherited_layers(self, node: ProjectNode) -> List[PropertyLayer]:
        """Camadas de arquivo herdadas dos ancestrais, da raiz ao pai."""
        if node.parent is None:
            return []
        parent_own = self.project_file_layers(node.parent)
        relabeled = [
            parent_own[0].relabel(SourceKind.PARENT_FILE, ancestor_depth=node.parent.depth),
            parent_own[1].relabel(SourceKind.PARENT_ENV_FILE, ancestor_depth=node.parent.depth),
        ]
        return self.inherited_layers(node.parent) + relabeled

    def project_file_layers(self, node: ProjectNode) -> List[PropertyLayer]:
        """PROJECT_FILE e PROJECT_ENV_FILE do próprio nó."""
        base = self._file_layer(
            SourceKind.PROJECT_FILE, Path(node.project_dir) / BASE_FILE_NAME, node
        )
        environment_name = self.environment_name(node)
        if environment_name is None:
            env = PropertyLayer(SourceKind.PROJECT_ENV_FILE, found=False)
        else:
            env_path = self.environment_dir(node) / environment_file_name(environment_name)
            env = self._file_layer(SourceKind.PROJECT_ENV_FILE, env_path, node)
        return [base, env]

    def environment_name(self, node: ProjectNode) -> Optional[str]:
        return node.environment_name or self.settings.default_environment

    def environment_dir(self, node: ProjectNode) -> Path:
        project_dir = Path(node.project_dir)
        if self.settings.environment_file_dir == ".":
            return project_dir
        env_dir = project_dir / self.settings.environment_file_dir
        if not env_dir.is_dir() or not os.access(env_dir, os.R_OK):
            raise EnvironmentFileDirError(env_dir)
        self.log.log(
            node=node.path,
            level="INFO",
            message=f"Using {env_dir} as the source of environment specific files",
            path=str(env_dir),
        )
        return env_dir

    def user_layer(self, node: ProjectNode) -> PropertyLayer:
        user_name = self.settings.user_name
        if user_name is None:
            return PropertyLayer(SourceKind.USER_FILE, found=False)
        path = Path(self.home_dir) / user_file_name(user_name)
        layer = self._file_layer(SourceKind.USER_FILE, path, node)
        if self.settings.strict_files and not layer.found:
            raise RequiredFileMissing(path)
        return layer

    def environment_layer(self, node: ProjectNode) -> PropertyLayer:
        props = _strip_prefixed(self.state.environment(), ENV_VAR_PREFIX)
        self._log_loaded(node, SourceKind.ENVIRONMENT_VAR, len(props), "environment variables")
        return PropertyLayer(SourceKind.ENVIRONMENT_VAR, props, source="environment")

    def system_property_layer(self, node: ProjectNode) -> PropertyLayer:
        props = _strip_prefixed(self.state.system_properties(), SYSTEM_PROP_PREFIX)
        self._log_loaded(node, SourceKind.SYSTEM_PROP, len(props), "system properties")
        return PropertyLayer(SourceKind.SYSTEM_PROP, props, source="system properties")

    def command_line_layer(self, node: ProjectNode) -> PropertyLayer:
        props = {str(k): str(v) for k, v in self.command_line.items()}
        self._log_loaded(node, SourceKind.COMMAND_LINE, len(props), "the command line")
        return PropertyLayer(SourceKind.COMMAND_LINE, props, source="command line")

    # -----------------------------
    # Helpers
    # -----------------------------
    def _file_layer(self, kind: SourceKind, path: Path, node: ProjectNode) -> PropertyLayer:
        props = load_properties_file(path)
        if props is None:
            self.log.log(
                node=node.path,
                level="INFO",
                message=f"Skipping {path} because it does not exist",
                kind=kind.value,
                path=str(path),
            )
            return PropertyLayer(kind, source=str(path), found=False)
        self._log_loaded(node, kind, len(props), str(path))
        return PropertyLayer(kind, props, source=str(path))

    def _log_loaded(self, node: ProjectNode, kind: SourceKind, count: int, origin: str) -> None:
        self.log.log(
            node=node.path,
            level="INFO",
            message=f"Loaded {count} properties from {origin}",
            kind=kind.value,
            count=count,
        )

    def _check_environment_files(self, node: ProjectNode, file_layers: List[PropertyLayer]) -> None:
        if not self.settings.strict_files:
            return
        environment_name = self.environment_name(node)
        if environment_name is None or environment_name == LOCAL_ENVIRONMENT:
            return
        env_kinds = (SourceKind.PARENT_ENV_FILE, SourceKind.PROJECT_ENV_FILE)
        if not any(layer.found for layer in file_layers if layer.kind in env_kinds):
            raise EnvironmentFilesNotFound(environment_name)
