# src/propstack/core/__init__.py
"""
Core do propstack.

Componentes principais:
    - config     → settings do resolvedor (load, merge, validação, hashing)
    - properties → resolução de propriedades em camadas por nó de projeto

Princípios fundamentais:
    - Precedência fixa e orientada a dados
    - Estado global acessado apenas por um `GlobalState` injetado
    - Nenhuma falha é absorvida silenciosamente

Limites explícitos:
    - Não interpreta scripts de build
    - Não executa tarefas nem decide ordem de execução
    - Não valida a semântica dos valores das propriedades
"""
