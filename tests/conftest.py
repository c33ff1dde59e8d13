"""
Shared fakes for the cleanup flow tests.
"""

from datetime import date

import pytest

from user_cleanup.errors import OPCommandError, SignInError
from user_cleanup.models import Account


class FakeClient:
    """In-memory replacement for OnePasswordCLI."""

    account = None

    def __init__(self, records, signed_in=True, sign_in_error=None, failing_deletes=(), failing_gets=()):
        self.records = records
        self.signed_in = signed_in
        self.sign_in_error = sign_in_error
        self.failing_deletes = set(failing_deletes)
        self.failing_gets = set(failing_gets)
        self.calls = []

    def is_signed_in(self):
        self.calls.append(("whoami",))
        return self.signed_in

    def sign_in(self):
        self.calls.append(("signin",))
        if self.sign_in_error:
            raise SignInError(self.sign_in_error)
        self.signed_in = True

    def list_users(self):
        self.calls.append(("list",))
        return [Account.from_json({"id": r["id"], "email": r["email"], "state": r["state"]})
                for r in self.records]

    def get_user(self, user_id):
        self.calls.append(("get", user_id))
        if user_id in self.failing_gets:
            raise OPCommandError(["op", "user", "get", user_id], 1, "[ERROR] boom")
        return Account.from_json(next(r for r in self.records if r["id"] == user_id))

    def delete_user(self, user_id):
        self.calls.append(("delete", user_id))
        if user_id in self.failing_deletes:
            raise OPCommandError(["op", "user", "delete", user_id], 1, "[ERROR] cannot delete")

    @property
    def deleted(self):
        return [c[1] for c in self.calls if c[0] == "delete"]


@pytest.fixture
def today():
    # cutoff = 2023-06-01 with the default 365 days
    return date(2024, 5, 31)


@pytest.fixture
def fake_client():
    return FakeClient


@pytest.fixture
def scenario_records():
    return [
        {"id": "U1", "state": "SUSPENDED", "email": "a@x.com", "last_auth_at": "2022-01-01T00:00:00Z"},
        {"id": "U2", "state": "SUSPENDED", "email": "user1@example.com", "last_auth_at": "2022-01-01T00:00:00Z"},
        {"id": "U3", "state": "ACTIVE", "email": "b@x.com", "last_auth_at": "2022-01-01T00:00:00Z"},
    ]


@pytest.fixture
def answer():
    """Build a prompt function that always replies with the given text."""

    def make(text):
        prompts = []

        def _input(prompt):
            prompts.append(prompt)
            return text

        _input.prompts = prompts
        return _input

    return make
