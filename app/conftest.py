"""
Root pytest configuration for the Django project.

This module configures pytest-django and provides project-wide fixtures:
a tenant with a vendor, a retailer and a bank account, which nearly every
ledger and payment test needs. App-specific fixtures are defined in each
app's tests/conftest.py.
"""

import datetime as dt
import os

import pytest

# Ensure Django settings are configured before any tests run
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")


def pytest_configure():
    """Keep tests off Redis: local-memory cache and eager Celery."""
    from django.conf import settings

    settings.CACHES = {
        "default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"}
    }
    settings.PAYMENT_NOTIFICATIONS_ENABLED = False
    settings.PAYMENT_NOTIFICATION_BACKEND = "notifications.backends.LocMemBackend"
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_integration.py, test_scenarios.py → e2e (multi-step workflows)
    - test_services.py, test_tasks.py, test_views.py, etc. → integration
    - test_models.py, test_money.py, test_strategies.py, etc. → unit
    - Unmatched files → integration (safe default for Django)

    Explicit markers on test functions/classes take precedence.
    """
    e2e_patterns = ["test_integration.py", "test_scenarios.py"]

    integration_patterns = [
        "test_views.py",
        "test_services.py",
        "test_tasks.py",
        "test_application.py",
        "test_distribution.py",
        "test_reversal.py",
        "test_balances.py",
    ]

    unit_patterns = [
        "test_models.py",
        "test_money.py",
        "test_exceptions.py",
        "test_validators.py",
        "test_status.py",
        "test_strategies.py",
        "test_types.py",
        "test_messages.py",
        "test_dates.py",
    ]

    for item in items:
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration", "e2e"}:
            continue

        filename = str(item.fspath).split("/")[-1]

        if any(pattern in filename for pattern in e2e_patterns):
            item.add_marker(pytest.mark.e2e)
        elif any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def tenant(db):
    """A tenant with no cash movements."""
    from tenants.tests.factories import TenantFactory

    return TenantFactory()


@pytest.fixture
def vendor(tenant):
    from parties.tests.factories import VendorFactory

    return VendorFactory(tenant=tenant, name="Shree Traders")


@pytest.fixture
def retailer(tenant):
    from parties.tests.factories import RetailerFactory

    return RetailerFactory(tenant=tenant, name="Gupta Stores")


@pytest.fixture
def bank_account(tenant):
    from banking.tests.factories import BankAccountFactory

    return BankAccountFactory(tenant=tenant, name="HDFC Current")


@pytest.fixture
def at():
    """
    Build aware datetimes on a fixed day.

    Usage:
        at(10)          # 2024-04-01 10:00
        at(9, day=2)    # 2024-04-02 09:00
    """
    from django.utils import timezone

    def _at(hour: int = 12, day: int = 1, minute: int = 0) -> dt.datetime:
        return timezone.make_aware(dt.datetime(2024, 4, day, hour, minute))

    return _at
