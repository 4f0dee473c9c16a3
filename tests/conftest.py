# tests/conftest.py
"""
Fixtures compartilhados para testes do propstack.

Fornecem:
- estado global em memória (nenhum teste altera `os.environ` ou o
  registro real de propriedades de sistema)
- um helper para escrever arquivos `.properties`
- uma árvore pai/filho de projetos em `tmp_path`
- YAMLs de settings (defaults + override local)

Decisões arquiteturais:
    - Arquivos são criados em `tmp_path`, isolados por teste
    - Os nós de projeto são criados sem arquivos; cada teste escreve
      apenas o que precisa, o que deixa explícito quais camadas existem
"""

from pathlib import Path
from typing import Dict

import pytest

from propstack.core.properties.state import InMemoryState
from propstack.core.properties.types import ProjectNode


def write_properties(path: Path, values: Dict[str, str]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [f"{key}={value}" for key, value in values.items()]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def write_props():
    """Helper `write_props(path, {chave: valor})` para os testes."""
    return write_properties


@pytest.fixture
def state() -> InMemoryState:
    return InMemoryState()


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def root_node(tmp_path: Path) -> ProjectNode:
    project_dir = tmp_path / "parent"
    project_dir.mkdir()
    return ProjectNode(name="parent", project_dir=project_dir)


@pytest.fixture
def child_node(tmp_path: Path, root_node: ProjectNode) -> ProjectNode:
    project_dir = tmp_path / "parent" / "child"
    project_dir.mkdir()
    return ProjectNode(name="child", project_dir=project_dir, parent=root_node)


@pytest.fixture
def settings_defaults_yaml() -> str:
    """
    YAML de defaults dos settings do resolvedor, semelhante ao uso real.

    Invariantes:
        - Contém todas as chaves conhecidas por `ResolverSettings`
        - Valores nulos representam "não definido"
    """
    return """\
environment_file_dir: "."
default_environment: null
user_name: null
strict_files: false
"""


@pytest.fixture
def settings_local_yaml() -> str:
    """YAML de override local: define ambiente padrão, usuário e modo estrito."""
    return """\
default_environment: dev
user_name: ci
strict_files: true
"""
