import eliot
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Hypothesis configuration for property-based testing
from hypothesis import HealthCheck, settings
from playlist_history import ItemIdFactory, PlaylistHistoryEngine

# Register Hypothesis profiles
settings.register_profile("fast", max_examples=50, deadline=None)
settings.register_profile("thorough", max_examples=1000, deadline=None)
settings.load_profile("fast")  # Default to fast profile


def pytest_collection_modifyitems(items):
    """Automatically order tests: unit tests first, then property tests.

    Individual tests marked with @pytest.mark.order("last") will run at the very end.
    """
    for item in items:
        # Skip if item already has explicit order marker
        if hasattr(item, 'get_closest_marker') and item.get_closest_marker('order'):
            continue

        # Assign order based on test file name
        test_file = str(item.fspath)
        if 'test_unit_' in test_file:
            item.add_marker(pytest.mark.order(1))
        elif 'test_props_' in test_file:
            item.add_marker(pytest.mark.order(2))


@pytest.fixture
def engine():
    """Create an empty engine with deterministic ids."""
    return PlaylistHistoryEngine(id_factory=ItemIdFactory("item"))


@pytest.fixture
def eliot_messages():
    """Collect eliot messages emitted during a test."""
    messages = []
    eliot.add_destinations(messages.append)
    # Drop anything eliot buffered before its first destination existed
    messages.clear()
    yield messages
    eliot.remove_destination(messages.append)
