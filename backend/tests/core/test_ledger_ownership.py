"""Ownership flow tests — challenge issue and guarded submit_star.

Tests cover:
    - Challenge embeds address and clock time
    - Submission inside the window with a valid signature commits with owner set
    - Expired challenge short-circuits: no signature check, no append
    - Invalid signature short-circuits: no append
    - Malformed message rejected before any other step, including non-ASCII digits
"""

import pytest

from starchain.core.errors import (
    ChallengeExpiredError, InvalidSignatureError, MalformedChallengeError,
)


def test_request_challenge_embeds_clock_time(ledger):
    assert ledger.request_ownership_challenge("1A2b...") == "1A2b...:1000:starRegistry"


def test_request_challenge_keeps_no_state(ledger):
    ledger.request_ownership_challenge("1A2b")
    assert ledger.current_height() == 0
    assert len(ledger.records()) == 1


def test_submit_within_window_commits(ledger, clock, verifier, address):
    message = ledger.request_ownership_challenge(address)
    clock.advance(200)

    record = ledger.submit_star(address, message, "sig", {"star": {"ra": "1h"}})

    assert ledger.current_height() == 1
    assert record.height == 1
    assert record.owner == address
    assert record.decoded_body() == {"star": {"ra": "1h"}}
    assert record.timestamp == 1200
    assert verifier.calls == [(message, address, "sig")]


def test_submit_after_301_seconds_is_expired(ledger, clock, verifier, address):
    message = ledger.request_ownership_challenge(address)
    clock.advance(301)

    with pytest.raises(ChallengeExpiredError):
        ledger.submit_star(address, message, "sig", {"star": {}})

    assert ledger.current_height() == 0
    assert verifier.calls == []


def test_submit_exactly_at_window_is_expired(ledger, clock, address):
    message = ledger.request_ownership_challenge(address)
    clock.advance(300)
    with pytest.raises(ChallengeExpiredError):
        ledger.submit_star(address, message, "sig", {"star": {}})
    assert ledger.current_height() == 0


def test_submit_with_invalid_signature_appends_nothing(ledger, verifier, address):
    verifier.accept = False
    message = ledger.request_ownership_challenge(address)

    with pytest.raises(InvalidSignatureError) as exc_info:
        ledger.submit_star(address, message, "bad", {"star": {}})

    assert exc_info.value.http_status == 401
    assert ledger.current_height() == 0
    assert len(verifier.calls) == 1


def test_expired_and_invalid_signature_reports_expiry(ledger, clock, verifier, address):
    verifier.accept = False
    message = ledger.request_ownership_challenge(address)
    clock.advance(1000)
    with pytest.raises(ChallengeExpiredError):
        ledger.submit_star(address, message, "bad", {"star": {}})
    assert verifier.calls == []


def test_malformed_message_rejected_before_signature_check(ledger, verifier, address):
    with pytest.raises(MalformedChallengeError):
        ledger.submit_star(address, "garbage", "sig", {"star": {}})
    assert verifier.calls == []
    assert ledger.current_height() == 0


def test_non_ascii_digits_in_message_are_malformed(ledger, verifier, address):
    with pytest.raises(MalformedChallengeError):
        ledger.submit_star(address, f"{address}:²:starRegistry", "sig", {"star": {}})
    assert verifier.calls == []
    assert ledger.current_height() == 0


def test_custom_window_from_constructor(hasher, verifier, clock, address):
    from starchain.core.ledger import Ledger

    ledger = Ledger(hasher, verifier, clock, challenge_window_seconds=10)
    message = ledger.request_ownership_challenge(address)
    clock.advance(10)
    with pytest.raises(ChallengeExpiredError):
        ledger.submit_star(address, message, "sig", {"star": {}})


def test_rejection_is_logged(ledger, clock, address, caplog):
    message = ledger.request_ownership_challenge(address)
    clock.advance(301)
    with caplog.at_level("WARNING", logger="starchain.core.ledger"):
        with pytest.raises(ChallengeExpiredError):
            ledger.submit_star(address, message, "sig", {"star": {}})
    assert any("rejected" in r.getMessage() for r in caplog.records)
