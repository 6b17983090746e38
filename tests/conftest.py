"""Shared fixtures: a scriptable fundraising data source and sample payloads."""

import pytest


def wrap(payload):
    """Wrap a payload the way the fundraising client does."""
    return {"status": 200, "data": {"data": payload}}


class FakeDataSource:
    """In-memory stand-in for FundraisingEndpoints.

    Set `donations_error` / `profile_error` to make a read reject.
    """

    def __init__(self, donations_envelope=None, profile_envelope=None):
        self.donations_envelope = donations_envelope
        self.profile_envelope = profile_envelope
        self.donations_error = None
        self.profile_error = None
        self.donation_queries = []
        self.profile_requests = []

    @property
    def call_count(self) -> int:
        return len(self.donation_queries) + len(self.profile_requests)

    async def fetch_donations(self, query):
        self.donation_queries.append(query)
        if self.donations_error is not None:
            raise self.donations_error
        return self.donations_envelope

    async def fetch_profile(self, profile_uuid):
        self.profile_requests.append(profile_uuid)
        if self.profile_error is not None:
            raise self.profile_error
        return self.profile_envelope


@pytest.fixture
def sample_donation_rows() -> list:
    """Three active subscriptions (7500 cents) and two one-off gifts."""
    return [
        {"amount": 2500, "subscriptionUuid": "sub-1", "profileUuid": "prof-1"},
        {"amount": 1000, "subscriptionUuid": "sub-2", "profileUuid": "prof-1"},
        {"amount": 4000, "subscriptionUuid": "sub-3", "profileUuid": "prof-1"},
        {"amount": 9999, "subscriptionUuid": None, "profileUuid": "prof-1"},
        {"amount": 500, "subscriptionUuid": "", "profileUuid": "prof-1"},
    ]


@pytest.fixture
def profile_with_goal():
    """Profile envelope with a $150 monthly goal."""
    return wrap({"id": "prof-1", "public": {"monthlyHubFundraisingGoal": 150}})


@pytest.fixture
def fake_source(sample_donation_rows, profile_with_goal) -> FakeDataSource:
    return FakeDataSource(
        donations_envelope=wrap(sample_donation_rows),
        profile_envelope=profile_with_goal,
    )
