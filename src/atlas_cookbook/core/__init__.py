# src/atlas_cookbook/core/__init__.py
"""
Core do Atlas Cookbook.

Este pacote contém a implementação canônica do compilador de cookbooks,
independente de coordenador de run, executor de scripts ou sink de eventos.

O core é projetado para ser:
    - determinístico
    - síncrono e sequencial
    - testável de forma isolada
    - orientado a colaboradores injetados

Componentes principais:
    - config       → configuração do compilador (defaults, merge, hashing)
    - pipeline     → tipos, protocolos, RunContext, definições e notificações
    - engine       → ordem de cookbooks, carga de segmentos e inclusão de recipes
    - traceability → Event Log dos eventos de compilação

Limites explícitos:
    - Não converge resources
    - Não resolve precedência de atributos
    - Não enumera arquivos nem executa scripts por conta própria
"""
