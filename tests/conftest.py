"""
Pytest configuration and shared fixtures.
"""

from unittest.mock import Mock

import pytest

SYNC_ENV_VARS = [
    "ACTIONS_API_URL",
    "ACTIONS_API_FUNCTION_KEY",
    "SYNC_TAG_WINDOW",
    "SYNC_PAYLOAD_WARNING_CHARS",
    "SYNC_MAX_UPLOADS",
    "ACTIONS_API_TIMEOUT",
    "GITHUB_STEP_SUMMARY",
]


@pytest.fixture(autouse=True)
def clean_sync_env(monkeypatch):
    """Keep the developer's environment out of configuration tests."""
    for name in SYNC_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_action():
    """A fully populated candidate action."""
    return {
        "owner": "actions",
        "name": "checkout",
        "actionType": {"actionType": "Node", "nodeVersion": "20"},
        "repoInfo": {
            "updated_at": "2024-05-01T10:00:00Z",
            "archived": False,
            "disabled": False,
        },
        "tagInfo": ["v4.1.0", "v4.0.0", "v3.6.0"],
        "releaseInfo": ["v4.1.0", "v4.0.0"],
        "forkFound": True,
        "mirrorLastUpdated": "2024-05-02T08:00:00Z",
        "repoSize": 1234,
        "secretScanningEnabled": True,
        "dependabotEnabled": False,
        "verified": True,
    }


@pytest.fixture
def sample_candidates():
    """Three candidate actions with distinct update times."""
    return [
        {
            "owner": "actions",
            "name": "checkout",
            "repoInfo": {"updated_at": "2024-05-01T10:00:00Z"},
        },
        {
            "owner": "actions",
            "name": "setup-node",
            "repoInfo": {"updated_at": "2024-05-02T10:00:00Z"},
        },
        {
            "owner": "docker",
            "name": "build-push-action",
            "repoInfo": {"updated_at": "2024-05-03T10:00:00Z"},
        },
    ]


@pytest.fixture
def mock_client():
    """Mock marketplace client with an empty catalog."""
    client = Mock()
    client.list_actions.return_value = []
    client.upsert_action.return_value = {"created": True, "updated": False}
    return client
