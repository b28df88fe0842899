"""
Shared fixtures: an in-memory stand-in for the Stripe list/retrieve endpoints.

Stripe resource classes (Charge, Refund, Dispute, Account) are swapped for
fakes with monkeypatch so no test touches the network.
"""
import os
import tempfile
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Optional

os.environ.setdefault(
    "LOG_FILE_PATH", os.path.join(tempfile.gettempdir(), "connect_reports_tests", "app.log")
)

import pytest
import stripe

from connect_reports.models.credential import StripeCredential


def ts(value: str) -> int:
    """Unix timestamp for an ISO-8601 UTC string like '2024-01-02T12:00:00'."""
    return int(datetime.fromisoformat(value).replace(tzinfo=timezone.utc).timestamp())


class FakeListResource:
    """Mimics ``stripe.<Resource>.list`` with created-window filtering and cursors."""

    def __init__(self, name: str, stripe_fake: "FakeStripe") -> None:
        self._name = name
        self._fake = stripe_fake

    def list(self, **kwargs):
        self._fake.calls.append((self._name, kwargs))
        account_id = kwargs.get("stripe_account")
        failure = self._fake.failures.get((self._name, account_id))
        if failure is not None:
            fail_on_call, error = failure
            count = self._fake.call_count(self._name, account_id)
            if count >= fail_on_call:
                raise error

        created = kwargs.get("created", {})
        objects = [
            obj
            for obj in self._fake.objects.get(self._name, {}).get(account_id, [])
            if created.get("gte", float("-inf")) <= obj["created"] <= created.get("lte", float("inf"))
        ]
        # Stripe lists newest first
        objects.sort(key=lambda obj: obj["created"], reverse=True)
        return _page(objects, kwargs)


class FakeAccountResource:
    """Mimics ``stripe.Account.retrieve`` and ``stripe.Account.list``."""

    def __init__(self, stripe_fake: "FakeStripe") -> None:
        self._fake = stripe_fake

    def retrieve(self, account_id, **kwargs):
        self._fake.calls.append(("Account.retrieve", {"id": account_id, **kwargs}))
        if self._fake.account_error is not None:
            raise self._fake.account_error
        for account in self._fake.accounts:
            if account["id"] == account_id:
                return account
        raise stripe.InvalidRequestError(f"No such account: '{account_id}'", "account")

    def list(self, **kwargs):
        self._fake.calls.append(("Account.list", kwargs))
        if self._fake.account_error is not None:
            raise self._fake.account_error
        return _page(list(self._fake.accounts), kwargs)


def _page(objects: list, kwargs: dict):
    starting_after = kwargs.get("starting_after")
    if starting_after:
        ids = [obj["id"] for obj in objects]
        objects = objects[ids.index(starting_after) + 1:]
    limit = kwargs.get("limit", 10)
    return SimpleNamespace(data=objects[:limit], has_more=len(objects) > limit)


class FakeStripe:
    """Holds fake objects per resource and connected account."""

    def __init__(self) -> None:
        self.objects: dict[str, dict[str, list[dict]]] = {}
        self.accounts: list[dict] = []
        self.calls: list[tuple[str, dict]] = []
        self.failures: dict[tuple[str, str], tuple[int, Exception]] = {}
        self.account_error: Optional[Exception] = None
        self._counter = 0

    # -- setup helpers ---------------------------------------------------

    def add_account(self, account_id: str, **fields) -> dict:
        account = {"id": account_id, **fields}
        self.accounts.append(account)
        return account

    def _add(self, resource: str, account_id: str, created: int, amount: int, **fields) -> dict:
        self._counter += 1
        prefix = {"Charge": "ch", "Refund": "re", "Dispute": "dp"}[resource]
        obj = {"id": f"{prefix}_{self._counter:05d}", "created": created, "amount": amount, **fields}
        self.objects.setdefault(resource, {}).setdefault(account_id, []).append(obj)
        return obj

    def add_charge(self, account_id: str, created: int, amount: int, status: str = "succeeded") -> dict:
        return self._add("Charge", account_id, created, amount, status=status)

    def add_failed_charge(self, account_id: str, created: int, amount: int = 1000) -> dict:
        return self._add("Charge", account_id, created, amount, status="failed")

    def add_refund(self, account_id: str, created: int, amount: int) -> dict:
        return self._add("Refund", account_id, created, amount, status="succeeded")

    def add_dispute(self, account_id: str, created: int, amount: int) -> dict:
        return self._add("Dispute", account_id, created, amount, status="needs_response")

    def fail_listing(self, resource: str, account_id: str, on_call: int = 1, error: Optional[Exception] = None) -> None:
        """Make the *on_call*-th (1-based) list call for resource/account raise."""
        self.failures[(resource, account_id)] = (
            on_call,
            error or stripe.APIConnectionError("Network error"),
        )

    # -- inspection helpers ----------------------------------------------

    def call_count(self, resource: str, account_id: Optional[str] = None) -> int:
        return sum(
            1
            for name, kwargs in self.calls
            if name == resource and (account_id is None or kwargs.get("stripe_account") == account_id)
        )


@pytest.fixture
def fake_stripe(monkeypatch) -> FakeStripe:
    """Install a FakeStripe in place of the Stripe resource classes."""
    fake = FakeStripe()
    monkeypatch.setattr(stripe, "Charge", FakeListResource("Charge", fake))
    monkeypatch.setattr(stripe, "Refund", FakeListResource("Refund", fake))
    monkeypatch.setattr(stripe, "Dispute", FakeListResource("Dispute", fake))
    monkeypatch.setattr(stripe, "Account", FakeAccountResource(fake))
    return fake


@pytest.fixture
def credential() -> StripeCredential:
    return StripeCredential(secret_key="sk_test_1234567890abcdef")
