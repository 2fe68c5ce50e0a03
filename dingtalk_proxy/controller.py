import logging

from flask import Flask, Response, request
from werkzeug.exceptions import HTTPException

from .constants import SUCCESS_MESSAGE
from .errors import DispatchError
from .models import decode_message
from .services import send_to_dingtalk
from .utils import parse_bool

logger = logging.getLogger(__name__)


def _text(body, status=200):
    return Response(body, status=status, mimetype="text/plain")


def create_app():
    app = Flask(__name__)

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': 'dingtalk-alert-proxy'}, 200

    @app.route('/dingtalk', methods=['POST'])
    def dingtalk():
        try:
            body = request.get_data(cache=True)
        except (OSError, HTTPException) as exc:
            logger.error(f"Falha ao ler o corpo da requisição: {exc}")
            return _text(str(exc), 500)

        alert_message = decode_message(body)

        try:
            params = request.values
        except (ValueError, HTTPException) as exc:
            logger.error(f"Falha ao ler parâmetros: {exc}")
            return _text(str(exc), 500)

        # Sem webhook/isatall apenas registra e responde vazio (200)
        if 'webhook' not in params:
            logger.error('url argument "webhook" is null')
            return _text('')
        if 'isatall' not in params:
            logger.error('url argument "isatall" is null')
            return _text('')

        webhook = params.getlist('webhook')[0]
        at_mobiles = params.getlist('atmobiles')
        is_at_all = parse_bool(params.getlist('isatall')[0]) or False

        try:
            send_to_dingtalk(alert_message, webhook, at_mobiles, is_at_all)
        except DispatchError as exc:
            logger.error(str(exc))
            return _text(str(exc), 500)

        return _text(SUCCESS_MESSAGE)

    return app
