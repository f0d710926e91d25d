"""Tests for the downstream relay."""

import dataclasses
from unittest.mock import MagicMock

import requests

from adminrelay.whatsapp.relay import send_to_server

from .helpers import make_response

VALUE = {"metadata": {"phone_number_id": "999"}, "messages": []}


class TestSendToServer:
    def test_disabled_without_url(self, settings):
        session = MagicMock()

        assert send_to_server(settings, VALUE, session=session) is False
        session.post.assert_not_called()

    def test_posts_raw_value(self, settings):
        settings = dataclasses.replace(settings, relay_url="http://relay.internal/events")
        session = MagicMock()
        session.post.return_value = make_response({"ok": True})

        assert send_to_server(settings, VALUE, session=session) is True
        args, kwargs = session.post.call_args
        assert args == ("http://relay.internal/events",)
        assert kwargs["json"] == VALUE

    def test_failure_is_not_raised(self, settings):
        settings = dataclasses.replace(settings, relay_url="http://relay.internal/events")
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("down")

        assert send_to_server(settings, VALUE, session=session) is False

    def test_http_error_is_not_raised(self, settings):
        settings = dataclasses.replace(settings, relay_url="http://relay.internal/events")
        session = MagicMock()
        response = make_response(status_code=502)
        response.raise_for_status.side_effect = requests.HTTPError("502")
        session.post.return_value = response

        assert send_to_server(settings, VALUE, session=session) is False
