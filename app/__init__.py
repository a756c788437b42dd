"""Pacote webapp modular para o proxy do Alertmanager -> ntfy.

Este pacote contém:
- constants: variáveis de ambiente e mapas de configuração
- template_funcs: funções expostas aos templates (split, trim, upper, lower, contains)
- templates: compilação/avaliação dos templates Jinja2 em sandbox
- labels: renderização das tags a partir dos labels do alerta
- webhook: validação do payload do Alertmanager
- detection: prioridade e tag de status
- formatters: montagem do payload de notificação
- services: integração com o ntfy
- controller: criação do Flask app e endpoints
"""
