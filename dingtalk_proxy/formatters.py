from collections import namedtuple
from typing import Dict, List

from .constants import (
    ALERT_REPORT_HEADING,
    ALERT_TYPE_LABEL,
    COMMON_LABELS,
    FIRING_STATUS,
    GROUP_ID_LABEL,
    GROUP_LABELS,
    MSG_TYPE,
)
from .errors import MissingField, UnrecognizedAlertType
from .models import AlertGroupMessage
from .utils import format_start_time

# required: lista de (conjunto de labels, chave); describe(group, common) -> frase
AlertTypeRule = namedtuple('AlertTypeRule', ['required', 'describe'])


def _qualified(labels, namespace_key, name_key):
    # namespace + nome sem separador (formato legado, mantido por compatibilidade)
    if namespace_key in labels:
        return labels[namespace_key] + labels[name_key]
    return labels[name_key]


ALERT_TYPE_RULES: Dict[str, AlertTypeRule] = {
    'event': AlertTypeRule(
        [(COMMON_LABELS, 'event_type'), (GROUP_LABELS, 'resource_kind')],
        lambda g, c: f"{c['event_type']} event of {g['resource_kind']} occurred",
    ),
    # Valida component_name mas exibe event_type (comportamento legado)
    'systemService': AlertTypeRule(
        [(GROUP_LABELS, 'component_name')],
        lambda g, c: f"The system component {g.get('event_type', '')} is not running",
    ),
    'nodeHealthy': AlertTypeRule(
        [(GROUP_LABELS, 'node_name')],
        lambda g, c: f"The kubelet on the node {g['node_name']} is not healthy",
    ),
    'nodeCPU': AlertTypeRule(
        [(GROUP_LABELS, 'node_name'), (COMMON_LABELS, 'cpu_threshold')],
        lambda g, c: f"The CPU usage on the node {g['node_name']} is over {c['cpu_threshold']}%",
    ),
    'nodeMemory': AlertTypeRule(
        [(GROUP_LABELS, 'node_name'), (COMMON_LABELS, 'mem_threshold')],
        lambda g, c: f"The memory usage on the node {g['node_name']} is over {c['mem_threshold']}%",
    ),
    'podNotScheduled': AlertTypeRule(
        [(GROUP_LABELS, 'pod_name')],
        lambda g, c: f"The Pod {_qualified(g, 'namespace', 'pod_name')} is not scheduled",
    ),
    'podNotRunning': AlertTypeRule(
        [(GROUP_LABELS, 'pod_name')],
        lambda g, c: f"The Pod {_qualified(g, 'namespace', 'pod_name')} is not running",
    ),
    'podRestarts': AlertTypeRule(
        [(GROUP_LABELS, 'pod_name'), (COMMON_LABELS, 'restart_times'), (COMMON_LABELS, 'restart_interval')],
        lambda g, c: (
            f"The Pod {_qualified(g, 'namespace', 'pod_name')} restarts "
            f"{c['restart_times']} times in {c['restart_interval']} sec"
        ),
    ),
    'workload': AlertTypeRule(
        [(GROUP_LABELS, 'workload_name'), (COMMON_LABELS, 'available_percentage')],
        lambda g, c: (
            f"The workload {_qualified(g, 'workload_namespace', 'workload_name')} "
            f"has available replicas less than {c['available_percentage']}%"
        ),
    ),
    'metric': AlertTypeRule(
        [(COMMON_LABELS, 'alert_name')],
        lambda g, c: f"The metric {c['alert_name']} crossed the threshold",
    ),
}


def describe_alert_group(message: AlertGroupMessage) -> str:
    """Valida as labels exigidas pelo alert_type e monta a frase de descrição.

    Levanta MissingField (labels ausentes) ou UnrecognizedAlertType.
    """
    common = message.commonLabels
    if ALERT_TYPE_LABEL not in common:
        raise MissingField(ALERT_TYPE_LABEL, COMMON_LABELS)

    alert_type = common[ALERT_TYPE_LABEL]
    rule = ALERT_TYPE_RULES.get(alert_type)
    if rule is None:
        raise UnrecognizedAlertType(alert_type)

    sources = {GROUP_LABELS: message.groupLabels, COMMON_LABELS: common}
    for scope, key in rule.required:
        if key not in sources[scope]:
            raise MissingField(key, scope)

    return rule.describe(message.groupLabels, common)


def resolve_group_key(message: AlertGroupMessage) -> str:
    return message.commonLabels.get(GROUP_ID_LABEL) or message.groupKey


def build_title(message: AlertGroupMessage) -> str:
    return f"Alert group: {resolve_group_key(message)} (status: {message.status})"


def format_alert_report(message: AlertGroupMessage, description: str) -> str:
    parts = [
        f"## {ALERT_REPORT_HEADING}\n\n",
        f" ### {build_title(message)}\n\n",
        f"\n > {description}\n\n",
    ]

    for alert in message.alerts:
        if alert.status != FIRING_STATUS:
            continue
        parts.append("-----\n")
        for key, value in alert.labels.items():
            parts.append(f"- {key} : {value}\n")
        parts.append(f"- Start time: {format_start_time(alert.startsAt)}\n")

    return "".join(parts)


def build_markdown_payload(title: str, text: str, at_mobiles: List[str], is_at_all: bool) -> dict:
    return {
        "msgtype": MSG_TYPE,
        "at": {
            "atMobiles": list(at_mobiles or []),
            "isAtAll": bool(is_at_all),
        },
        "markdown": {
            "title": title,
            "text": text,
        },
    }
