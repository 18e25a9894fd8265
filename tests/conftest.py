#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from reprkit import registry
from reprkit.config import ReprConfig


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def fresh_registry(monkeypatch):
    """Isolate the process-wide registry so registrations do not leak between tests."""
    monkeypatch.setattr(registry, "_default_registry", registry.build_registry())
    return registry.default_registry


@pytest.fixture
def hierarchical() -> ReprConfig:
    """Config that renders values as JSON trees."""
    return ReprConfig(formatting_mode="hierarchical")
