"""
Pytest Configuration and Fixtures
"""

from datetime import datetime, timezone as dt_timezone

import pytest
from prometheus_client import REGISTRY

from formguard.apps.ratelimit.models import SiteRateLimitConfig

from .factories import AdminUserFactory, UserDefinedFormFactory, UserFactory

FROZEN_NOW = datetime(2026, 3, 2, 12, 0, 0, tzinfo=dt_timezone.utc)


def metric_value(name, labels=None):
    """Current value of a Prometheus sample, 0.0 when it was never recorded"""
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


@pytest.fixture
def frozen_now():
    return FROZEN_NOW


@pytest.fixture
def user(db):
    """Create a regular user for testing"""
    return UserFactory()


@pytest.fixture
def admin_user(db):
    """Create an admin user for testing"""
    return AdminUserFactory()


@pytest.fixture
def site_config(db):
    return SiteRateLimitConfig.load()


@pytest.fixture
def form_page(db):
    return UserDefinedFormFactory()

