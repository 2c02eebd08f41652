import pytest

from backend.core import config


def test_validate_runtime_config_allows_defaults_outside_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'IS_PRODUCTION', False)

    config.validate_runtime_config()


def test_validate_runtime_config_rejects_default_secrets_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'IS_PRODUCTION', True)
    monkeypatch.setattr(config, 'JWT_SECRET', config.DEFAULT_USER_SECRET)

    with pytest.raises(RuntimeError, match='JWT_SECRET must be set'):
        config.validate_runtime_config()


def test_validate_runtime_config_rejects_shared_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'IS_PRODUCTION', True)
    monkeypatch.setattr(config, 'JWT_SECRET', 'same-secret')
    monkeypatch.setattr(config, 'JWT_ADMIN_SECRET', 'same-secret')

    with pytest.raises(RuntimeError, match='must differ'):
        config.validate_runtime_config()


def test_validate_runtime_config_rejects_weak_samesite(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'COOKIE_SAMESITE', 'none')

    with pytest.raises(RuntimeError, match='COOKIE_SAMESITE'):
        config.validate_runtime_config()
