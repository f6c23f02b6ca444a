"""Shared fixtures for jamf tests."""

import pytest
from bson import ObjectId

from jamf.validation import set_error_map

HEX_ID = "64b7f1c2a1b2c3d4e5f60718"


@pytest.fixture
def hex_id():
    """A valid 24 character hex ObjectId string."""
    return HEX_ID


@pytest.fixture
def object_id():
    """A native ObjectId matching ``hex_id``."""
    return ObjectId(HEX_ID)


@pytest.fixture(autouse=True)
def reset_global_error_map():
    """Tests installing a process-wide error map must not leak it."""
    yield
    set_error_map(None)
