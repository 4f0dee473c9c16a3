# tests/core/properties/test_source_loader.py
"""
Testes do Source Loader.

Os testes asseguram que:
- cada origem produz uma camada com o `SourceKind` correto
- arquivos ausentes produzem camadas vazias com `found=False`
- prefixos reservados são filtrados e removidos
- o filho herda as camadas de arquivo do pai (raiz primeiro)
- as opções herdadas do plugin original (diretório de ambiente, usuário,
  modo estrito) são respeitadas
"""

from pathlib import Path

import pytest

from propstack.core.config.settings import ResolverSettings
from propstack.core.properties.errors import (
    ConfigParseError,
    EnvironmentFileDirError,
    EnvironmentFilesNotFound,
    RequiredFileMissing,
)
from propstack.core.properties.loader import SourceLoader, environment_file_name
from propstack.core.properties.state import InMemoryState
from propstack.core.properties.types import ProjectNode, SourceKind


def _by_kind(layers):
    out = {}
    for layer in layers:
        out.setdefault(layer.kind, []).append(layer)
    return out


def test_discovery_order_for_root(root_node, home_dir, state):
    loader = SourceLoader(home_dir=home_dir, state=state)
    kinds = [layer.kind for layer in loader.load(root_node)]
    assert kinds == [
        SourceKind.HOME_FILE,
        SourceKind.USER_FILE,
        SourceKind.PROJECT_FILE,
        SourceKind.PROJECT_ENV_FILE,
        SourceKind.ENVIRONMENT_VAR,
        SourceKind.SYSTEM_PROP,
        SourceKind.COMMAND_LINE,
    ]


def test_missing_files_are_empty_layers(root_node, home_dir, state):
    """
    Verifica a tolerância a arquivos ausentes.

    Invariantes:
        - Nenhuma exceção é levantada
        - Camadas de arquivo ficam vazias e marcadas com `found=False`
    """
    loader = SourceLoader(home_dir=home_dir, state=state)
    for layer in loader.load(root_node):
        if layer.kind.is_file:
            assert layer.found is False
            assert len(layer) == 0


def test_skipped_files_are_logged(root_node, home_dir, state):
    loader = SourceLoader(home_dir=home_dir, state=state)
    loader.load(root_node)
    skipped = [e for e in loader.log.events if e["message"].startswith("Skipping")]
    assert {e["kind"] for e in skipped} == {"home_file", "project_file"}


def test_environment_and_system_property_prefixes(root_node, home_dir):
    state = InMemoryState(
        env={"ORG_GRADLE_PROJECT_b": "X", "PATH": "/bin", "ORG_GRADLE_PROJECT_": "empty"},
        props={"org.gradle.project.c": "Y", "user.dir": "/tmp"},
    )
    layers = _by_kind(SourceLoader(home_dir=home_dir, state=state).load(root_node))

    assert dict(layers[SourceKind.ENVIRONMENT_VAR][0].properties) == {"b": "X"}
    assert dict(layers[SourceKind.SYSTEM_PROP][0].properties) == {"c": "Y"}


def test_command_line_is_taken_verbatim(root_node, home_dir, state):
    overrides = {"c": "Z", "systemProp.x": "1"}
    layers = _by_kind(
        SourceLoader(home_dir=home_dir, state=state, command_line=overrides).load(root_node)
    )
    assert dict(layers[SourceKind.COMMAND_LINE][0].properties) == overrides


def test_environment_file_uses_node_environment(tmp_path, home_dir, state, write_props):
    project_dir = tmp_path / "app"
    write_props(project_dir / "gradle-dev.properties", {"env": "dev"})
    write_props(project_dir / "gradle-prod.properties", {"env": "prod"})
    node = ProjectNode(name="app", project_dir=project_dir, environment_name="prod")

    layers = _by_kind(SourceLoader(home_dir=home_dir, state=state).load(node))

    env_layer = layers[SourceKind.PROJECT_ENV_FILE][0]
    assert env_layer.found is True
    assert dict(env_layer.properties) == {"env": "prod"}
    assert env_layer.source == str(project_dir / environment_file_name("prod"))


def test_no_environment_name_means_empty_environment_layer(root_node, home_dir, state, write_props):
    write_props(root_node.project_dir / "gradle-local.properties", {"env": "local"})
    layers = _by_kind(SourceLoader(home_dir=home_dir, state=state).load(root_node))
    assert len(layers[SourceKind.PROJECT_ENV_FILE][0]) == 0


def test_default_environment_from_settings(root_node, home_dir, state, write_props):
    write_props(root_node.project_dir / "gradle-local.properties", {"env": "local"})
    loader = SourceLoader(
        home_dir=home_dir, state=state, settings=ResolverSettings(default_environment="local")
    )
    layers = _by_kind(loader.load(root_node))
    assert dict(layers[SourceKind.PROJECT_ENV_FILE][0].properties) == {"env": "local"}


def test_child_inherits_parent_file_layers(root_node, child_node, home_dir, state, write_props):
    """
    Verifica a herança pai → filho.

    Invariantes:
        - O arquivo base do pai vira PARENT_FILE
        - O arquivo de ambiente do pai vira PARENT_ENV_FILE
        - Ambiente/sistema/linha de comando aparecem uma única vez
    """
    write_props(root_node.project_dir / "gradle.properties", {"a": "1"})
    write_props(child_node.project_dir / "gradle.properties", {"a": "2"})

    layers = SourceLoader(home_dir=home_dir, state=state).load(child_node)
    grouped = _by_kind(layers)

    assert layers[0].kind == SourceKind.PARENT_FILE
    assert dict(grouped[SourceKind.PARENT_FILE][0].properties) == {"a": "1"}
    assert dict(grouped[SourceKind.PROJECT_FILE][0].properties) == {"a": "2"}
    assert len(grouped[SourceKind.PARENT_ENV_FILE]) == 1
    assert len(grouped[SourceKind.ENVIRONMENT_VAR]) == 1


def test_grandchild_inherits_root_first(tmp_path, home_dir, state, write_props):
    root = ProjectNode(name="root", project_dir=tmp_path / "root")
    middle = ProjectNode(name="middle", project_dir=tmp_path / "root" / "middle", parent=root)
    leaf = ProjectNode(name="leaf", project_dir=tmp_path / "root" / "middle" / "leaf", parent=middle)
    write_props(root.project_dir / "gradle.properties", {"level": "root"})
    write_props(middle.project_dir / "gradle.properties", {"level": "middle"})

    parents = [
        layer
        for layer in SourceLoader(home_dir=home_dir, state=state).load(leaf)
        if layer.kind == SourceKind.PARENT_FILE
    ]
    assert [dict(layer.properties) for layer in parents] == [{"level": "root"}, {"level": "middle"}]


def test_inherited_layers_carry_ancestor_depth(tmp_path, home_dir, state):
    root = ProjectNode(name="root", project_dir=tmp_path / "root")
    middle = ProjectNode(name="middle", project_dir=tmp_path / "root" / "middle", parent=root)
    leaf = ProjectNode(name="leaf", project_dir=tmp_path / "root" / "middle" / "leaf", parent=middle)

    inherited = SourceLoader(home_dir=home_dir, state=state).inherited_layers(leaf)

    assert [(layer.kind, layer.ancestor_depth) for layer in inherited] == [
        (SourceKind.PARENT_FILE, 0),
        (SourceKind.PARENT_ENV_FILE, 0),
        (SourceKind.PARENT_FILE, 1),
        (SourceKind.PARENT_ENV_FILE, 1),
    ]


def test_home_and_user_files(root_node, home_dir, state, write_props):
    write_props(home_dir / "gradle.properties", {"home": "h"})
    write_props(home_dir / "gradle-alice.properties", {"user": "u"})
    loader = SourceLoader(home_dir=home_dir, state=state, settings=ResolverSettings(user_name="alice"))

    layers = _by_kind(loader.load(root_node))

    assert dict(layers[SourceKind.HOME_FILE][0].properties) == {"home": "h"}
    assert dict(layers[SourceKind.USER_FILE][0].properties) == {"user": "u"}


def test_missing_user_file_only_fails_in_strict_mode(root_node, home_dir, state):
    lenient = SourceLoader(home_dir=home_dir, state=state, settings=ResolverSettings(user_name="bob"))
    assert _by_kind(lenient.load(root_node))[SourceKind.USER_FILE][0].found is False

    strict = SourceLoader(
        home_dir=home_dir, state=state, settings=ResolverSettings(user_name="bob", strict_files=True)
    )
    with pytest.raises(RequiredFileMissing) as excinfo:
        strict.load(root_node)
    assert excinfo.value.path == str(home_dir / "gradle-bob.properties")


def test_environment_file_dir(root_node, home_dir, state, write_props):
    write_props(root_node.project_dir / "environments" / "gradle-test.properties", {"env": "test"})
    node = ProjectNode(name="parent", project_dir=root_node.project_dir, environment_name="test")
    loader = SourceLoader(
        home_dir=home_dir, state=state, settings=ResolverSettings(environment_file_dir="environments")
    )

    layers = _by_kind(loader.load(node))

    assert dict(layers[SourceKind.PROJECT_ENV_FILE][0].properties) == {"env": "test"}
    assert any(e["message"].startswith("Using ") for e in loader.log.events)


def test_missing_environment_file_dir_raises(root_node, home_dir, state):
    loader = SourceLoader(
        home_dir=home_dir, state=state, settings=ResolverSettings(environment_file_dir="nowhere")
    )
    node = ProjectNode(name="parent", project_dir=root_node.project_dir, environment_name="dev")
    with pytest.raises(EnvironmentFileDirError):
        loader.load(node)


def test_environment_file_dir_that_is_a_file_raises(root_node, home_dir, state):
    (Path(root_node.project_dir) / "envs").write_text("", encoding="utf-8")
    loader = SourceLoader(
        home_dir=home_dir, state=state, settings=ResolverSettings(environment_file_dir="envs")
    )
    node = ProjectNode(name="parent", project_dir=root_node.project_dir, environment_name="dev")
    with pytest.raises(EnvironmentFileDirError):
        loader.load(node)


def test_strict_mode_requires_an_environment_file(root_node, home_dir, state):
    node = ProjectNode(name="parent", project_dir=root_node.project_dir, environment_name="prod")
    strict = SourceLoader(home_dir=home_dir, state=state, settings=ResolverSettings(strict_files=True))
    with pytest.raises(EnvironmentFilesNotFound) as excinfo:
        strict.load(node)
    assert excinfo.value.environment_name == "prod"


def test_strict_mode_accepts_parent_environment_file(root_node, home_dir, state, write_props):
    """O arquivo de ambiente pode existir em qualquer nível da hierarquia."""
    write_props(root_node.project_dir / "gradle-prod.properties", {"env": "prod"})
    parent = ProjectNode(name="parent", project_dir=root_node.project_dir, environment_name="prod")
    child_dir = root_node.project_dir / "child"
    child_dir.mkdir()
    child = ProjectNode(name="child", project_dir=child_dir, parent=parent, environment_name="prod")
    strict = SourceLoader(home_dir=home_dir, state=state, settings=ResolverSettings(strict_files=True))

    layers = _by_kind(strict.load(child))

    assert dict(layers[SourceKind.PARENT_ENV_FILE][0].properties) == {"env": "prod"}


def test_strict_mode_ignores_local_environment(root_node, home_dir, state):
    node = ProjectNode(name="parent", project_dir=root_node.project_dir, environment_name="local")
    strict = SourceLoader(home_dir=home_dir, state=state, settings=ResolverSettings(strict_files=True))
    strict.load(node)


def test_malformed_project_file_propagates(root_node, home_dir, state):
    (root_node.project_dir / "gradle.properties").write_text("oops\n", encoding="utf-8")
    with pytest.raises(ConfigParseError):
        SourceLoader(home_dir=home_dir, state=state).load(root_node)
