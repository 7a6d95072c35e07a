"""
Tests for configuration selection and production safeguards.
"""

import pytest

from reviewsite import create_app
from reviewsite.config import DevelopmentConfig, ProductionConfig, config_from_env


class TestConfigSelection:

    def test_defaults_to_development(self, monkeypatch):
        monkeypatch.delenv('REVIEWSITE_ENV', raising=False)
        assert config_from_env() is DevelopmentConfig

    def test_production_selected_from_env(self, monkeypatch):
        monkeypatch.setenv('REVIEWSITE_ENV', 'production')
        assert config_from_env() is ProductionConfig


class TestProductionSafeguards:

    def test_missing_secret_key_fails_fast(self, monkeypatch, tmp_path):
        monkeypatch.setattr(ProductionConfig, 'SECRET_KEY', None)
        with pytest.raises(RuntimeError, match='SECRET_KEY'):
            create_app(ProductionConfig, instance_path=str(tmp_path))

    def test_hsts_outside_debug(self, client):
        response = client.get('/')
        assert 'Strict-Transport-Security' in response.headers

    def test_request_body_limit(self, client):
        response = client.post('/login', data={'email': 'a@x.com', 'password': 'x' * 20000})
        assert response.status_code == 413
