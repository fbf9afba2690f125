"""
Tests for the n8n webhook forwarder. All HTTP calls are mocked.
"""

from unittest.mock import MagicMock, patch

import requests

from solar_lead_relay.tools.webhook_client import send_to_webhook

WEBHOOK_URL = "https://n8n.example.com/webhook/solar-leads"
PAYLOAD = {"userInfo": {"name": "Jane Doe"}, "recommendedPanels": 14}


def _response(status_code):
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = WEBHOOK_URL
    resp._content = b'{"message": "ok"}'
    return resp


class TestSendToWebhook:

    @patch("solar_lead_relay.tools.webhook_client.requests.post")
    def test_success(self, mock_post):
        mock_post.return_value = _response(200)

        result = send_to_webhook(PAYLOAD, WEBHOOK_URL)

        assert result == {"success": True, "statusCode": 200}
        mock_post.assert_called_once_with(WEBHOOK_URL, json=PAYLOAD, timeout=None)

    @patch("solar_lead_relay.tools.webhook_client.requests.post")
    def test_passes_timeout(self, mock_post):
        mock_post.return_value = _response(201)

        result = send_to_webhook(PAYLOAD, WEBHOOK_URL, timeout=3)

        assert result["success"] is True
        assert result["statusCode"] == 201
        assert mock_post.call_args.kwargs["timeout"] == 3

    @patch("solar_lead_relay.tools.webhook_client.requests.post")
    def test_rejected_reports_status(self, mock_post):
        mock_post.return_value = _response(404)

        result = send_to_webhook(PAYLOAD, WEBHOOK_URL)

        assert result["success"] is False
        assert result["statusCode"] == 404
        assert "404" in result["error"]

    @patch("solar_lead_relay.tools.webhook_client.requests.post")
    def test_connection_error_has_no_status(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("connection refused")

        result = send_to_webhook(PAYLOAD, WEBHOOK_URL)

        assert result == {"success": False, "error": "connection refused"}

    @patch("solar_lead_relay.tools.webhook_client.requests.post")
    def test_timeout_is_not_raised(self, mock_post):
        mock_post.side_effect = requests.Timeout("read timed out")

        result = send_to_webhook(PAYLOAD, WEBHOOK_URL, timeout=1)

        assert result["success"] is False
        assert "timed out" in result["error"]
