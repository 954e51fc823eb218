import pytest


@pytest.fixture(scope="session")
def _storefront_domain():
    """Initialize the storefront domain once per session."""
    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain, monkeypatch):
    """Push domain context before each test, cleanup after."""
    from storefront.settings import reset_settings

    for name in ("ORDER_STATUS_POLICY", "CHECKOUT_MAX_ATTEMPTS", "IDEMPOTENCY_WINDOW_MINUTES"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()

    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
    reset_settings()


@pytest.fixture()
def settings_env(monkeypatch):
    """Set storefront environment variables for one test."""
    from storefront.settings import reset_settings

    def _set(**values):
        for name, value in values.items():
            monkeypatch.setenv(name, str(value))
        reset_settings()

    return _set
