"""Integration test fixtures (service checks and prerequisites).

Integration tests are skipped if no LM Studio server is running.
"""

import httpx
import pytest

from structured_classifier.llm.lmstudio_client import LMStudioClient

LMSTUDIO_URL = "http://localhost:1234"


@pytest.fixture(scope="session")
def check_lmstudio() -> list[str]:
    """Check if LM Studio is available at localhost:1234.

    Skips tests if the server is not reachable or has no model loaded.
    Returns the loaded model ids.
    """
    try:
        response = httpx.get(f"{LMSTUDIO_URL}/v1/models", timeout=5)
        if response.status_code != 200:
            pytest.skip("LM Studio not available (non-200 status)")
        models = [m["id"] for m in response.json().get("data", [])]
    except Exception as e:
        pytest.skip(f"LM Studio not available: {e}")
    if not models:
        pytest.skip("LM Studio has no model loaded")
    return models


@pytest.fixture
def real_lmstudio_client(check_lmstudio):
    """Real LMStudioClient instance for integration tests."""
    client = LMStudioClient(base_url=LMSTUDIO_URL, timeout=120)
    yield client
    client.close()
