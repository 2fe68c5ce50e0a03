import json
import logging
from typing import List, Optional

import requests
import urllib3

from .constants import DINGTALK_VERIFY_TLS
from .errors import EncodingError, TransportError
from .formatters import build_markdown_payload, build_title, describe_alert_group, format_alert_report
from .models import AlertGroupMessage

logger = logging.getLogger(__name__)

# Suprime avisos de HTTPS não verificado quando TLS estiver desativado para o DingTalk
if not DINGTALK_VERIFY_TLS:
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)


def send_dingtalk_payload(webhook: str, payload: dict, verify_tls: bool = DINGTALK_VERIFY_TLS):
    """POST único no webhook; status != 200 é apenas registrado."""
    try:
        data = json.dumps(payload, ensure_ascii=False).encode('utf-8')
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"failed to encode dingtalk payload: {exc}") from exc

    logger.debug(f"DingTalk payload: {data[:500]!r}")

    try:
        resp = requests.post(
            webhook,
            data=data,
            headers={"Content-Type": "application/json"},
            verify=verify_tls,
        )
    except requests.RequestException as exc:
        raise TransportError(str(exc)) from exc

    if resp.status_code != 200:
        logger.warning(f"DingTalk respondeu {resp.status_code}: {dict(resp.headers)}")
    return resp


def send_to_dingtalk(
    message: AlertGroupMessage,
    webhook: str,
    at_mobiles: Optional[List[str]] = None,
    is_at_all: bool = False,
):
    description = describe_alert_group(message)
    text = format_alert_report(message, description)
    payload = build_markdown_payload(build_title(message), text, at_mobiles or [], is_at_all)

    send_dingtalk_payload(webhook, payload)
    logger.info(f"Alert message sent to {webhook} successfully")
