"""Tests for the application factory and shared error handling."""
from unittest.mock import MagicMock, patch

from prompt_architect import create_app
from prompt_architect.extensions import EXTENSION_KEY, build_services


class TestCreateApp:

    def test_builds_services_when_not_given(self, services):
        with patch('prompt_architect.extensions.build_services', return_value=services) as mock_build:
            app = create_app()
        mock_build.assert_called_once_with()
        assert app.extensions[EXTENSION_KEY] is services

    def test_registers_api_routes(self, app):
        rules = {rule.rule for rule in app.url_map.iter_rules()}
        assert {
            '/api/chat', '/api/chat/enhanced', '/api/chat/intake',
            '/api/leads', '/api/analytics', '/api/analytics/rate-limits', '/api/health',
        } <= rules


class TestBuildServices:

    def test_wires_injected_clients(self, fake_redis, openai_client):
        services = build_services(redis_client=fake_redis, openai_client=openai_client)
        assert services.store.redis is fake_redis
        assert services.llm.client is openai_client
        assert services.leads.store is services.store
        assert services.leads.analytics is services.analytics
        assert services.instructions.get('claude', 'prompt-architect')


class TestErrorHandlers:

    def test_unknown_api_path_is_json_404(self, client):
        resp = client.get('/api/nope')
        assert resp.status_code == 404
        assert resp.get_json() == {'success': False, 'error': 'Not Found'}

    def test_wrong_method_is_json_405(self, client):
        resp = client.get('/api/chat')
        assert resp.status_code == 405
        assert resp.get_json()['success'] is False

    def test_non_api_path_is_not_json(self, client):
        resp = client.get('/nope')
        assert resp.status_code == 404
        assert resp.get_json(silent=True) is None

    def test_unhandled_error_is_generic_500(self, client, services):
        services.analytics = MagicMock()
        services.analytics.get.side_effect = RuntimeError('connection string leaked')
        resp = client.get('/api/analytics')
        assert resp.status_code == 500
        assert resp.get_json() == {
            'success': False, 'error': 'An unexpected error occurred. Please try again.',
        }
