# src/propstack/core/config/errors.py
"""
Exceções canônicas da camada de configuração do propstack.

Este módulo define a raiz da hierarquia de exceções usada tanto pelos
settings do resolvedor (arquivos YAML/JSON) quanto pela resolução de
propriedades em camadas (`propstack.core.properties`).

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais são tratados como falhas fatais
    - Mensagens nomeiam o arquivo ou a chave envolvida

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção aqui representa um "arquivo ausente opcional";
      esse caso é uma condição normal, nunca um erro

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende do resolvedor de propriedades
"""


class ConfigError(Exception):
    """
    Exceção base para erros de configuração do propstack.

    Permite captura genérica de qualquer falha de carregamento, merge ou
    resolução, mantendo a distinção entre falhas estruturais (arquivo
    inválido, tipo errado) e falhas de uso (propriedade obrigatória ausente),
    que vivem em subclasses.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de settings base (defaults) não existe.

    Decisões arquiteturais:
        - O arquivo de defaults dos settings é obrigatório quando informado
        - O arquivo local de override continua opcional
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando a extensão do arquivo de settings não é suportada.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)

    Arquivos `.properties` não são settings: são camadas de propriedades
    e passam pelo parser de `propstack.core.properties.parser`.
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando a raiz de um arquivo de settings não é um `dict`.
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando o deep-merge encontra tipos incompatíveis.

    Exemplo de conflito:
        - base:     {"strict_files": false}
        - override: {"strict_files": {"enabled": true}}

    Valores `None` não contam como conflito: representam "não definido"
    e são sempre substituíveis.
    """


class InvalidSettingsError(ConfigError):
    """
    Exceção levantada quando os settings resolvidos contêm chaves
    desconhecidas ou valores com tipo incorreto.

    Decisões arquiteturais:
        - Chaves desconhecidas são rejeitadas (sem ignorar silenciosamente)
        - Nenhuma coerção de tipo é aplicada
    """
