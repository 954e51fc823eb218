from protean.domain import Domain
from sqlalchemy import create_engine

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    return [provider for provider in domain.providers.values() if provider.conn_info["provider"] in SQL_PROVIDERS]


def setup_db(domain: Domain) -> int:
    """Create tables for every aggregate and entity on SQL providers.

    Returns the number of providers whose schema was created.
    """
    providers = _sql_providers(domain)
    with domain.domain_context():
        for provider in providers:
            engine = create_engine(provider.conn_info["database_uri"])

            # Touching the DAO registers the model's table on the provider metadata
            for record in list(domain.registry.aggregates.values()) + list(domain.registry.entities.values()):
                if record.cls.meta_.provider == provider.name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)
    return len(providers)


def drop_db(domain: Domain) -> int:
    """Drop all tables on SQL providers. Returns the number of providers touched."""
    providers = _sql_providers(domain)
    with domain.domain_context():
        for provider in providers:
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
    return len(providers)
