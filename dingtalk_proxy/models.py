"""Payload do webhook do Alertmanager (formato de grupo de alertas)."""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List

from .utils import ZERO_TIME, parse_timestamp

logger = logging.getLogger(__name__)


def _string_map(value, name) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"{name} must be an object")
    result = {}
    for key, item in value.items():
        # null vira string vazia, mantendo a chave
        result[key] = _string(item, f"{name}.{key}")
    return result


def _string(value, name) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    return value


@dataclass(frozen=True)
class Alert:
    status: str = ""
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)
    startsAt: datetime = ZERO_TIME
    endsAt: datetime = ZERO_TIME
    generatorURL: str = ""

    @classmethod
    def from_dict(cls, data) -> "Alert":
        if not isinstance(data, dict):
            raise TypeError("alert must be an object")
        return cls(
            status=_string(data.get('status'), 'status'),
            labels=_string_map(data.get('labels'), 'labels'),
            annotations=_string_map(data.get('annotations'), 'annotations'),
            startsAt=parse_timestamp(data.get('startsAt')),
            endsAt=parse_timestamp(data.get('endsAt')),
            generatorURL=_string(data.get('generatorURL'), 'generatorURL'),
        )


@dataclass(frozen=True)
class AlertGroupMessage:
    version: str = ""
    groupKey: str = ""
    status: str = ""
    receiver: str = ""
    groupLabels: Dict[str, str] = field(default_factory=dict)
    commonLabels: Dict[str, str] = field(default_factory=dict)
    commonAnnotations: Dict[str, str] = field(default_factory=dict)
    externalURL: str = ""
    alerts: List[Alert] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data) -> "AlertGroupMessage":
        if not isinstance(data, dict):
            raise TypeError("alert group message must be an object")
        alerts = data.get('alerts') or []
        if not isinstance(alerts, list):
            raise TypeError("alerts must be a list")
        return cls(
            version=_string(data.get('version'), 'version'),
            groupKey=_string(data.get('groupKey'), 'groupKey'),
            status=_string(data.get('status'), 'status'),
            receiver=_string(data.get('receiver'), 'receiver'),
            groupLabels=_string_map(data.get('groupLabels'), 'groupLabels'),
            commonLabels=_string_map(data.get('commonLabels'), 'commonLabels'),
            commonAnnotations=_string_map(data.get('commonAnnotations'), 'commonAnnotations'),
            externalURL=_string(data.get('externalURL'), 'externalURL'),
            alerts=[Alert.from_dict(a) for a in alerts],
        )


def decode_message(body: bytes) -> AlertGroupMessage:
    """Decodifica o corpo da requisição.

    JSON inválido não interrompe a requisição: segue com uma mensagem vazia,
    que depois falha na validação (alert_type ausente).
    """
    try:
        return AlertGroupMessage.from_dict(json.loads(body))
    except (ValueError, TypeError, RecursionError) as exc:
        logger.debug(f"Falha ao decodificar payload, usando mensagem vazia: {exc}")
        return AlertGroupMessage()
