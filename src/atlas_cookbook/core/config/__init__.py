# src/atlas_cookbook/core/config/__init__.py

"""
Camada de configuração do Atlas Cookbook.

A configuração controla apenas aspectos ambientais da compilação
(nível de log, nome do arquivo de atributos padrão, extensão de script).
A ordem das fases e a política de erro NÃO são configuráveis.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Deep-merge determinístico sobre `DEFAULT_CONFIG`
    - Validação estrutural da seção `compiler`
    - Hash canônico para rastreabilidade no Event Log

Invariantes:
    - A configuração final é um dicionário puro (dict)
    - A mesma entrada sempre produz a mesma configuração final
"""
