"""
Fixtures for waitlist tests.
"""

import pytest


@pytest.fixture
def make_waitlist_payload():
    """Build a join body; each phone number identifies a different family."""

    def _make(phone: str = "07700 900123", name: str = "Grace Okafor"):
        return {
            "fullName": name,
            "phoneNumber": phone,
            "childrenDetails": "One child, aged 2",
        }

    return _make
