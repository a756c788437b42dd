#!/usr/bin/env python3
"""
Testes dos endpoints HTTP (Flask test client), sem acesso real ao ntfy.
"""
import base64
import os
import sys
import unittest
from unittest.mock import Mock, patch

import requests

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.controller import create_app
from app.templates import NotificationTemplates, TemplateCompileError, compile_template

WEBHOOK = {
    "version": "4",
    "status": "firing",
    "receiver": "ntfy",
    "alerts": [
        {
            "status": "firing",
            "labels": {"alertname": "HighCPU", "severity": "critical"},
            "annotations": {"description": "CPU acima de 90%"},
            "startsAt": "2025-10-08T14:33:30Z",
        },
        {
            "status": "resolved",
            "labels": {"alertname": "DiskFull", "severity": "warning"},
            "annotations": {"summary": "Disco cheio"},
            "startsAt": "2025-10-08T14:00:00Z",
            "endsAt": "2025-10-08T15:00:00Z",
        },
    ],
}


def _basic(user, password):
    token = base64.b64encode(f"{user}:{password}".encode()).decode()
    return {'Authorization': f'Basic {token}'}


class ControllerTestCase(unittest.TestCase):
    templates = NotificationTemplates()

    def setUp(self):
        patchers = [
            patch('app.controller.WEBHOOK_USERNAME', None),
            patch('app.controller.WEBHOOK_PASSWORD', None),
            patch.dict('app.detection.STATUS_TAGS', {'firing': 'rotating_light', 'resolved': 'white_check_mark'}),
        ]
        for p in patchers:
            p.start()
            self.addCleanup(p.stop)

        send_patcher = patch('app.controller.send_ntfy_payload')
        self.mock_send = send_patcher.start()
        self.addCleanup(send_patcher.stop)
        self.mock_send.return_value = Mock(ok=True, status_code=200)

        self.client = create_app(templates=self.templates).test_client()

    def sent_payloads(self):
        return [c.args[0] for c in self.mock_send.call_args_list]


class TestEndpoints(ControllerTestCase):
    def test_health(self):
        resp = self.client.get('/health')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json()['status'], 'ok')

    def test_alert_publishes_each_alert(self):
        resp = self.client.post('/alert', json=WEBHOOK)
        self.assertEqual(resp.status_code, 200)
        payloads = self.sent_payloads()
        self.assertEqual(len(payloads), 2)
        self.assertEqual(payloads[0]['title'], '[FIRING] HighCPU')
        self.assertEqual(payloads[0]['tags'], ['rotating_light', 'alertname = HighCPU', 'severity = critical'])
        self.assertEqual(payloads[1]['title'], '[RESOLVED] DiskFull')
        self.assertEqual(payloads[1]['tags'][0], 'white_check_mark')

    def test_empty_alert_list(self):
        resp = self.client.post('/alert', json={"alerts": []})
        self.assertEqual(resp.status_code, 200)
        self.mock_send.assert_not_called()

    def test_invalid_json(self):
        resp = self.client.post('/alert', data='nao é json', content_type='application/json')
        self.assertEqual(resp.status_code, 400)
        self.mock_send.assert_not_called()

    def test_invalid_payload_shape(self):
        resp = self.client.post('/alert', json={"alerts": [{"labels": {"severity": 5}}]})
        self.assertEqual(resp.status_code, 400)
        self.mock_send.assert_not_called()

    def test_ntfy_error_response_returns_502(self):
        self.mock_send.side_effect = [Mock(ok=False, status_code=500), Mock(ok=True, status_code=200)]
        resp = self.client.post('/alert', json=WEBHOOK)
        self.assertEqual(resp.status_code, 502)
        self.assertEqual(self.mock_send.call_count, 2, "deve tentar todos os alertas")

    def test_ntfy_connection_error_returns_502(self):
        self.mock_send.side_effect = [requests.ConnectionError("recusado"), Mock(ok=True, status_code=200)]
        with self.assertLogs('app.controller', level='ERROR'):
            resp = self.client.post('/alert', json=WEBHOOK)
        self.assertEqual(resp.status_code, 502)
        self.assertEqual(self.mock_send.call_count, 2)


class TestLabelsTemplateFlow(ControllerTestCase):
    templates = NotificationTemplates(
        labels=compile_template('{% for key, value in labels.items() %}{{ key }}={{ upper(value) }},{% endfor %}'),
    )

    def test_tags_rendered_with_template(self):
        self.client.post('/alert', json=WEBHOOK)
        self.assertEqual(self.sent_payloads()[0]['tags'], ['rotating_light', 'alertname=HIGHCPU', 'severity=CRITICAL'])


class TestLabelsTemplateFailure(ControllerTestCase):
    templates = NotificationTemplates(labels=compile_template('{{ labels[0] }}'))

    def test_notification_still_sent_without_label_tags(self):
        with self.assertLogs('app.formatters', level='WARNING'):
            resp = self.client.post('/alert', json=WEBHOOK)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([p['tags'] for p in self.sent_payloads()], [['rotating_light'], ['white_check_mark']])


class TestWebhookAuth(ControllerTestCase):
    def setUp(self):
        super().setUp()
        for p in (patch('app.controller.WEBHOOK_USERNAME', 'alertmanager'),
                  patch('app.controller.WEBHOOK_PASSWORD', 'segredo')):
            p.start()
            self.addCleanup(p.stop)

    def test_missing_credentials(self):
        resp = self.client.post('/alert', json=WEBHOOK)
        self.assertEqual(resp.status_code, 401)
        self.assertIn('Basic', resp.headers['WWW-Authenticate'])
        self.mock_send.assert_not_called()

    def test_wrong_credentials(self):
        resp = self.client.post('/alert', json=WEBHOOK, headers=_basic('alertmanager', 'errada'))
        self.assertEqual(resp.status_code, 401)

    def test_valid_credentials(self):
        resp = self.client.post('/alert', json=WEBHOOK, headers=_basic('alertmanager', 'segredo'))
        self.assertEqual(resp.status_code, 200)

    def test_health_is_public(self):
        self.assertEqual(self.client.get('/health').status_code, 200)


class TestCreateApp(unittest.TestCase):
    def test_invalid_template_prevents_startup(self):
        with patch('app.templates.LABELS_TEMPLATE', '{% for %}'):
            with self.assertRaises(TemplateCompileError):
                create_app()


if __name__ == '__main__':
    unittest.main()
