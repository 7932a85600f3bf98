"""
Core do Verifly.

Componentes principais:
    - callbacks  → motor de callbacks ordenados por dependência
    - applicator → adaptação de valores heterogêneos em chamáveis
    - verifier   → dispatcher de regras de verificação
    - config     → carregamento e resolução de configuração
    - exceptions → taxonomia de erros do motor

Limites explícitos:
    - Não persiste definições de callbacks
    - Não agenda execução entre threads
"""
