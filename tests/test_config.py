"""
Tests for Settings, logging setup and the Foursquare facade.
"""
import httpx
import pytest
from loguru import logger
from pydantic import ValidationError

from conftest import envelope, run, TOKEN
from foursquare import Foursquare, create_foursquare, setup_logging
from foursquare.core.config import Settings, get_settings


@pytest.mark.config
class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.api_url == 'https://api.foursquare.com/v2'
        assert settings.api_version == '20140806'
        assert settings.locale is None
        assert settings.request_timeout == 10.0
        assert settings.default_query == {'v': '20140806'}

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv('FOURSQUARE_API_VERSION', '20240101')
        monkeypatch.setenv('FOURSQUARE_LOCALE', 'fr')
        monkeypatch.setenv('FOURSQUARE_REQUEST_TIMEOUT', '2.5')

        settings = Settings(_env_file=None)

        assert settings.api_version == '20240101'
        assert settings.request_timeout == 2.5
        assert settings.default_query == {'v': '20240101', 'locale': 'fr'}

    def test_rejects_malformed_version(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, api_version='2014-08-06')

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, request_timeout=0)

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


@pytest.mark.config
class TestLogging:

    def test_file_sink_added_when_configured(self, tmp_path):
        log_file = tmp_path / 'fsq.log'
        settings = Settings(_env_file=None, log_level='debug', log_file=str(log_file))

        handler_ids = setup_logging(settings)
        try:
            assert len(handler_ids) == 2
            logger.debug('hello from tests')
        finally:
            # removing the file sink closes and flushes it
            setup_logging(Settings(_env_file=None))

        assert 'hello from tests' in log_file.read_text(encoding='utf-8')

    def test_host_application_sinks_are_kept(self):
        messages = []
        host_id = logger.add(messages.append, level='INFO', format='{message}')
        try:
            setup_logging(Settings(_env_file=None))
            setup_logging(Settings(_env_file=None))
            logger.info('still reaches the host sink')
        finally:
            logger.remove(host_id)

        assert any('still reaches the host sink' in str(m) for m in messages)

    def test_repeated_setup_replaces_sinks(self):
        first = setup_logging(Settings(_env_file=None))
        second = setup_logging(Settings(_env_file=None))
        assert len(first) == 1
        assert len(second) == 1
        assert first != second


@pytest.mark.config
class TestFacade:

    def test_users_share_the_client(self, settings):
        fsq = create_foursquare(settings, transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        assert fsq.users.client is fsq.client
        assert fsq.client.settings is settings
        run(fsq.aclose())

    def test_end_to_end_venue_history(self, settings):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=envelope({'venues': {'count': 1, 'items': []}}))

        async def scenario():
            async with Foursquare(settings=settings, transport=httpx.MockTransport(handler)) as fsq:
                return await fsq.users.get_venue_history('42', {}, TOKEN)

        assert run(scenario()) == {'count': 1, 'items': []}
        assert seen[0].url.path == '/v2/users/42/venuehistory'
