# src/atlas_cookbook/core/engine/__init__.py
"""
Engine do Atlas Cookbook.

Este pacote decide a ORDEM de carga e despacha cada arquivo ao
colaborador responsável; nunca interpreta conteúdo.

Componentes principais:
    - resolver → ordem total de cookbooks (dependências primeiro)
    - segments → carga por fase (libraries, LWRPs, atributos, definições)
    - recipes  → inclusão at-most-once de recipes e resolução de atributos
    - compiler → sequência de fases de uma run

Invariantes:
    - Dependências de um cookbook são carregadas antes dele, em cada fase
    - Recipes seguem exatamente a ordem da run-list
    - A primeira falha é reportada uma vez e relançada
"""
