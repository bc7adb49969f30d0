"""Shared fixtures."""

import pytest


@pytest.fixture
def base_event() -> dict:
    return {
        "id": "test-id",
        "pubkey": "test-pubkey",
        "created_at": 1672531200,
        "kind": 30402,
        "tags": [],
        "content": "Product description",
        "sig": "test-sig",
    }
