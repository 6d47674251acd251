"""Root pytest configuration.

Every test is collected; tests that need Docker are skipped unless they
are enabled through an environment variable or a command line option.

Test Structure (under tests/):
    wms_config/               settings and logging setup
    wms_identity/unit/        domain, policy and service logic in isolation
    wms_identity/integration/ repository, unit of work and service on a database
    shared/fixtures/          engines, sessions and containers

Integration tests run against in-memory SQLite by default. Tests marked
with @pytest.mark.integration use a Testcontainers PostgreSQL instance.

Environment Variables:
    RUN_INTEGRATION=1    Run @pytest.mark.integration tests
    RUN_ALL_TESTS=1      Run all tests (overrides other settings)

Pytest Options:
    --run-integration    Run integration tests
    --run-all            Run all tests
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from wms_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Same env files as local development
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")
elif (CONFIG_DIR / ".env").exists():
    load_dotenv(CONFIG_DIR / ".env")

# bcrypt at its minimum work factor keeps hashing fast in tests
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")


def _flag_enabled(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


def pytest_addoption(parser):
    """Options enabling the container tests."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run tests marked with @pytest.mark.integration",
    )
    parser.addoption(
        "--run-all",
        action="store_true",
        default=False,
        help="Run all tests regardless of markers",
    )


def pytest_configure(config):
    """Declare the markers used in this suite."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that need a PostgreSQL container (auto-skipped)",
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip container tests unless explicitly enabled."""
    if config.getoption("--run-all") or _flag_enabled("RUN_ALL_TESTS"):
        return

    run_integration = config.getoption("--run-integration") or _flag_enabled(
        "RUN_INTEGRATION",
    )
    if run_integration:
        return

    skip_integration = pytest.mark.skip(
        reason="Integration test - run with --run-integration or RUN_INTEGRATION=1",
    )
    for item in items:
        # Explicit marker only, not folder name
        item_markers = {mark.name for mark in item.iter_markers()}
        if "integration" in item_markers:
            item.add_marker(skip_integration)


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Make every test session start from freshly loaded settings."""
    clear_settings_cache()
    yield
    clear_settings_cache()
