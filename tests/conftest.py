#!/usr/bin/env python3
"""
Pytest Configuration and Shared Fixtures

Provides common fixtures and markers for testing the constellation
geometry engine.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


# =============================================================================
# PYTEST MARKERS
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# CONFIGURATION FIXTURES
# =============================================================================

@pytest.fixture
def iridium_config():
    """Default Iridium configuration (distance-only links)."""
    from constellation import create_iridium_config

    return create_iridium_config()


@pytest.fixture
def crosslink_config():
    """Iridium configuration with plane-adjacent crosslinks and 30° spacing."""
    from constellation import create_iridium_crosslink_config

    return create_iridium_crosslink_config()


@pytest.fixture
def small_config():
    """Small constellation for quick tests."""
    from constellation import ConstellationConfig

    return ConstellationConfig(
        num_planes=3,
        sats_per_plane=4,
        altitude=550.0,
        orbital_period=95.6,
        inclination_deg=53.0,
        max_link_distance=6000.0,
    )


# =============================================================================
# ENGINE FIXTURES
# =============================================================================

@pytest.fixture
def iridium_engine(iridium_config):
    """Engine for the default Iridium configuration."""
    from constellation import ConstellationEngine

    return ConstellationEngine(iridium_config)


@pytest.fixture
def sample_times():
    """Elapsed times (minutes) covering several orbits and a day wrap."""
    return [0.0, 7.3, 25.1, 50.2, 100.4, 333.33, 1439.99]
