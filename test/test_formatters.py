#!/usr/bin/env python3
import os
import sys
import unittest
from datetime import datetime, timezone

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.dirname(__file__))

from dingtalk_proxy.errors import MissingField, UnrecognizedAlertType
from dingtalk_proxy.formatters import (
    ALERT_TYPE_RULES,
    build_markdown_payload,
    build_title,
    describe_alert_group,
    format_alert_report,
)
from dingtalk_proxy.models import Alert, AlertGroupMessage

from alert_fixtures import COMPLETE_LABELS, EXPECTED_DESCRIPTIONS, build_message


class TestDescribeAlertGroup(unittest.TestCase):
    def test_every_alert_type_renders_its_description(self):
        self.assertEqual(set(ALERT_TYPE_RULES), set(COMPLETE_LABELS))
        for alert_type, (group, common) in COMPLETE_LABELS.items():
            with self.subTest(alert_type=alert_type):
                message = build_message(alert_type, group, common)
                self.assertEqual(describe_alert_group(message), EXPECTED_DESCRIPTIONS[alert_type])

    def test_missing_required_key_raises_missing_field(self):
        for alert_type, rule in ALERT_TYPE_RULES.items():
            group, common = COMPLETE_LABELS[alert_type]
            for scope, key in rule.required:
                with self.subTest(alert_type=alert_type, key=key):
                    g, c = dict(group), dict(common)
                    if scope == 'groupLabels':
                        del g[key]
                    else:
                        del c[key]
                    with self.assertRaises(MissingField) as ctx:
                        describe_alert_group(build_message(alert_type, g, c))
                    self.assertEqual(ctx.exception.field, key)
                    self.assertEqual(ctx.exception.scope, scope)
                    self.assertIn(key, str(ctx.exception))

    def test_missing_alert_type(self):
        with self.assertRaises(MissingField) as ctx:
            describe_alert_group(AlertGroupMessage())
        self.assertEqual(ctx.exception.field, 'alert_type')

    def test_unknown_alert_type(self):
        with self.assertRaises(UnrecognizedAlertType) as ctx:
            describe_alert_group(build_message('diskFull'))
        self.assertIn('diskFull', str(ctx.exception))

    def test_system_service_reads_event_type(self):
        """component_name é validado, mas o texto usa event_type (vazio se ausente)"""
        message = build_message('systemService', {'component_name': 'etcd'})
        self.assertEqual(describe_alert_group(message), 'The system component  is not running')

    def test_namespace_is_concatenated_without_separator(self):
        with_ns = build_message('podNotScheduled', {'pod_name': 'web-0', 'namespace': 'prod'})
        self.assertEqual(describe_alert_group(with_ns), 'The Pod prodweb-0 is not scheduled')

        restarts = build_message(
            'podRestarts',
            {'pod_name': 'web-2', 'namespace': 'kube-system'},
            {'restart_times': '3', 'restart_interval': '60'},
        )
        self.assertEqual(describe_alert_group(restarts), 'The Pod kube-systemweb-2 restarts 3 times in 60 sec')

        workload = build_message(
            'workload',
            {'workload_name': 'api', 'workload_namespace': 'prod', 'namespace': 'ignored'},
            {'available_percentage': '75'},
        )
        self.assertEqual(
            describe_alert_group(workload),
            'The workload prodapi has available replicas less than 75%',
        )


class TestFormatAlertReport(unittest.TestCase):
    def setUp(self):
        self.started = datetime(2024, 3, 5, 14, 7, tzinfo=timezone.utc)

    def test_only_firing_alerts_are_listed(self):
        alerts = [
            Alert(status='firing', labels={'severity': 'critical'}, startsAt=self.started),
            Alert(status='resolved', labels={'instance': 'old-node'}, startsAt=self.started),
        ]
        message = build_message('metric', common_labels={'alert_name': 'cpu_spike'}, alerts=alerts)
        text = format_alert_report(message, describe_alert_group(message))

        self.assertIn('The metric cpu_spike crossed the threshold', text)
        self.assertIn('- severity : critical\n', text)
        self.assertNotIn('old-node', text)
        self.assertEqual(text.count('-----\n'), 1)
        self.assertIn('- Start time: Mar 5, 2024 at 2:07pm (UTC)\n', text)

    def test_header_uses_group_id_and_status(self):
        message = build_message(
            'nodeHealthy', {'node_name': 'node-1'}, {'group_id': 'g-7'}, status='resolved'
        )
        text = format_alert_report(message, describe_alert_group(message))
        self.assertIn('Alert group: g-7 (status: resolved)', text)
        self.assertEqual(build_title(message), 'Alert group: g-7 (status: resolved)')

    def test_title_falls_back_to_group_key(self):
        message = build_message('nodeHealthy', {'node_name': 'node-1'})
        self.assertEqual(build_title(message), 'Alert group: group-key (status: firing)')

    def test_no_firing_alerts_keeps_only_header(self):
        message = build_message('nodeHealthy', {'node_name': 'node-1'})
        text = format_alert_report(message, 'desc')
        self.assertNotIn('-----', text)
        self.assertIn('> desc', text)


class TestBuildMarkdownPayload(unittest.TestCase):
    def test_envelope_shape(self):
        payload = build_markdown_payload('title', 'text', ['13800000000'], True)
        self.assertEqual(payload, {
            'msgtype': 'markdown',
            'at': {'atMobiles': ['13800000000'], 'isAtAll': True},
            'markdown': {'title': 'title', 'text': 'text'},
        })

    def test_empty_mentions(self):
        payload = build_markdown_payload('t', 'x', None, False)
        self.assertEqual(payload['at'], {'atMobiles': [], 'isAtAll': False})


if __name__ == '__main__':
    unittest.main()
