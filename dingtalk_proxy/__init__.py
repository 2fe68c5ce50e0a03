"""Pacote do proxy Alertmanager -> DingTalk.

Este pacote contém:
- constants: variáveis de ambiente e constantes do formato DingTalk
- errors: exceções do despacho
- models: payload do Alertmanager (grupo de alertas)
- utils: helpers de data/hora e de parâmetros
- formatters: validação por alert_type e montagem da mensagem markdown
- services: envio para o webhook do DingTalk
- controller: criação do Flask app e endpoints
"""
