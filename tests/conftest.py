"""
Pytest configuration and shared fixtures for the Foursquare client tests
"""
import asyncio
import json
import os
import sys
from pathlib import Path
from unittest.mock import AsyncMock

import httpx
import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Keep a developer's .env / environment from leaking into tests
for key in list(os.environ):
    if key.startswith('FOURSQUARE_'):
        del os.environ[key]

from foursquare.core.client import FoursquareClient
from foursquare.core.config import Settings
from foursquare.features.users import UserService

TOKEN = 'test-access-token'


def run(coro):
    """Drive a coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)


class CallbackRecorder:
    """Completion callback that records every invocation."""

    def __init__(self):
        self.calls = []

    def __call__(self, error, result):
        self.calls.append((error, result))

    @property
    def error(self):
        return self.calls[0][0]

    @property
    def result(self):
        return self.calls[0][1]


def envelope(response=None, code=200, error_type=None, error_detail=None, notifications=None):
    """Build a Foursquare-style response body."""
    meta = {'code': code}
    if error_type:
        meta['errorType'] = error_type
    if error_detail:
        meta['errorDetail'] = error_detail
    body = {'meta': meta, 'response': response or {}}
    if notifications is not None:
        body['notifications'] = notifications
    return body


@pytest.fixture
def settings():
    return Settings(_env_file=None, api_url='https://api.example.test/v2', api_version='20140806')


@pytest.fixture
def token():
    return TOKEN


@pytest.fixture
def callback():
    return CallbackRecorder()


@pytest.fixture
def api_client():
    """A FoursquareClient stand-in whose call_api is an AsyncMock."""
    client = AsyncMock(spec=FoursquareClient)
    client.call_api.return_value = {'ok': True}
    return client


@pytest.fixture
def users(api_client):
    return UserService(api_client)


@pytest.fixture
def recorded_requests():
    return []


@pytest.fixture
def make_client(settings, recorded_requests):
    """Build a real FoursquareClient on top of an httpx.MockTransport.

    The handler receives each httpx.Request and returns either an
    httpx.Response or a (status_code, body) tuple; bodies that are dicts
    are JSON-encoded.
    """
    def _make(handler, client_settings=None):
        def _dispatch(request):
            recorded_requests.append(request)
            outcome = handler(request)
            if isinstance(outcome, httpx.Response):
                return outcome
            status_code, body = outcome
            if isinstance(body, (dict, list)):
                return httpx.Response(status_code, content=json.dumps(body).encode('utf-8'),
                                      headers={'Content-Type': 'application/json'})
            return httpx.Response(status_code, content=body)

        return FoursquareClient(
            settings=client_settings or settings,
            transport=httpx.MockTransport(_dispatch),
        )

    return _make
