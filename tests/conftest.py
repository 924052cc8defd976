"""Pytest configuration and fixtures."""

import pytest

from zapper.pair.registry import PairRegistry
from zapper.zap import Zapper
from tests.helpers.factories import make_registry, make_zapper
from tests.helpers.host import LocalHost


@pytest.fixture
def registry() -> PairRegistry:
    """Fresh registry of the snapshot pairs (luna/ust, astro/ust, bluna/luna)."""
    return make_registry()


@pytest.fixture
def zapper(registry: PairRegistry) -> Zapper:
    """Zapper querying the registry fixture."""
    return make_zapper(registry)


@pytest.fixture
def host(zapper: Zapper, registry: PairRegistry) -> LocalHost:
    """Host executing the zapper's calls against the registry fixture."""
    return LocalHost(zapper, registry)
