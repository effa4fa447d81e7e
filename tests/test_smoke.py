# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do Atlas Cookbook.

Este módulo garante apenas que:
- o ambiente de testes (pytest) está funcional
- o pacote raiz pode ser importado e expõe a API pública

Limites explícitos:
    - Não testar lógica de compilação
    - Não acumular asserts funcionais
"""


def test_smoke():
    import atlas_cookbook

    for name in atlas_cookbook.__all__:
        assert hasattr(atlas_cookbook, name), name
