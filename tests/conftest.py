"""Test configuration and shared fixtures.

Pattern: Pytest fixtures, conftest.py
"""

import pytest

from src.core.config import Settings
from src.references.keys import ReferenceKeyFormatter
from src.references.models import Page
from tests.fakes.fake_clients import FakeConfig, FakeReferenceStore


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with safe defaults."""
    return Settings(
        environment="test",
        log_level="DEBUG",
        reference_store_backend="memory",
        max_result_size=1024,
    )


@pytest.fixture
def enabled_config() -> FakeConfig:
    """Configuration with reference storage enabled."""
    return FakeConfig(reference_storage_enabled=True)


@pytest.fixture
def disabled_config() -> FakeConfig:
    """Configuration with reference storage disabled."""
    return FakeConfig(reference_storage_enabled=False)


# ============================================================================
# Reference Data Fixtures
# ============================================================================

@pytest.fixture
def formatter() -> ReferenceKeyFormatter:
    """Default reference id formatter."""
    return ReferenceKeyFormatter()


@pytest.fixture
def page_seven_references() -> dict:
    """One list, default group, an unnamed and a named reference."""
    return {
        "refs": {
            "0": {
                "": {
                    "": {"key": 1, "text": "First footnote", "count": -1, "number": 1},
                    "note": {"key": 2, "text": "A named note", "count": 0, "number": 2},
                },
            },
        },
        "version": 1,
    }


@pytest.fixture
def multi_list_references() -> dict:
    """Two lists with groups, encoded the way PHP json_encode emits arrays."""
    return {
        "refs": [
            {
                "": [
                    {"key": 1, "text": "Unnamed one"},
                    {"key": 2, "text": "Unnamed two"},
                ],
                "notes": {
                    "smith": {"key": 3, "text": "Smith 2001"},
                },
            },
            {
                "": {
                    "jones": {"key": 4, "text": "Jones 1999"},
                    "5": {"key": 5, "text": "Integer-named"},
                },
            },
        ],
        "version": 1,
    }


@pytest.fixture
def sample_pages() -> list[Page]:
    """Pages 5, 9 and 12, deliberately out of order."""
    return [
        Page(page_id=12, title="Twelve"),
        Page(page_id=5, title="Five"),
        Page(page_id=9, title="Nine"),
    ]


@pytest.fixture
def sample_store(page_seven_references: dict) -> FakeReferenceStore:
    """Store with references for pages 5 and 12; page 9 has none."""
    return FakeReferenceStore({
        5: page_seven_references,
        12: {"refs": {"0": {"": {"solo": {"key": 1, "text": "Only one"}}}}},
    })
