"""Runtime settings read from the environment.

Settings are resolved once and cached; tests call ``reset_settings()`` after
changing environment variables.
"""

import os
from dataclasses import dataclass

STATUS_POLICY_ANY = "any"
STATUS_POLICY_FORWARD_ONLY = "forward_only"
STATUS_POLICIES = frozenset({STATUS_POLICY_ANY, STATUS_POLICY_FORWARD_ONLY})


@dataclass(frozen=True)
class Settings:
    """Tunables for the checkout flow and order administration."""

    order_status_policy: str = STATUS_POLICY_ANY
    checkout_max_attempts: int = 3
    idempotency_window_minutes: int = 10


_settings_instance = None


def _load_settings() -> Settings:
    policy = os.environ.get("ORDER_STATUS_POLICY", STATUS_POLICY_ANY).strip().lower()
    if policy not in STATUS_POLICIES:
        raise ValueError(f"Unknown order status policy: {policy}")

    max_attempts = int(os.environ.get("CHECKOUT_MAX_ATTEMPTS", "3"))
    if max_attempts < 1:
        raise ValueError("CHECKOUT_MAX_ATTEMPTS must be at least 1")

    return Settings(
        order_status_policy=policy,
        checkout_max_attempts=max_attempts,
        idempotency_window_minutes=int(os.environ.get("IDEMPOTENCY_WINDOW_MINUTES", "10")),
    )


def get_settings() -> Settings:
    """Return the process-wide settings (singleton)."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = _load_settings()
    return _settings_instance


def reset_settings():
    """Forget cached settings (useful for testing)."""
    global _settings_instance
    _settings_instance = None
