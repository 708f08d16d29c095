"""Tests for env-driven settings and the error taxonomy payloads."""

import pytest

from swap_executor.config import DEFAULT_CHAIN_ID, get_settings
from swap_executor.services.exceptions import (
    ConfigurationError,
    ConfirmationError,
    ExecutorError,
    SubmissionError,
    UpstreamError,
    ValidationError,
)


class TestSettings:
    def test_defaults(self):
        s = get_settings()
        assert s.CHAIN_ID == DEFAULT_CHAIN_ID == 97
        assert s.PRIVATE_KEY == ""
        assert s.ROUTER_ADDRESS == ""
        assert s.BIND_ADDR == "127.0.0.1:8080"
        assert s.GAS_STRATEGY == "buffered"
        assert s.RECEIPT_TIMEOUT_SEC == 120.0

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("CHAIN_ID", "56")
        monkeypatch.setenv("BIND_ADDR", "0.0.0.0:9000")
        monkeypatch.setenv("RECEIPT_TIMEOUT_SEC", "30")
        s = get_settings()
        assert s.CHAIN_ID == 56
        assert s.bind_host_port == ("0.0.0.0", 9000)
        assert s.RECEIPT_TIMEOUT_SEC == 30.0

    def test_unparsable_chain_id_falls_back(self, monkeypatch):
        monkeypatch.setenv("CHAIN_ID", "bsc")
        assert get_settings().CHAIN_ID == 97

    def test_bind_without_host(self, monkeypatch):
        monkeypatch.setenv("BIND_ADDR", ":8081")
        assert get_settings().bind_host_port == ("127.0.0.1", 8081)


@pytest.mark.parametrize("err,status,error_type", [
    (ConfigurationError("x", setting="PRIVATE_KEY"), 400, "CONFIGURATION"),
    (ValidationError("x", field="slippage"), 400, "VALIDATION"),
    (UpstreamError("x"), 502, "UPSTREAM"),
    (SubmissionError("x"), 502, "SUBMISSION_REJECTED"),
    (ConfirmationError("x", tx_hash="0x1"), 502, "CONFIRMATION_FAILED"),
])
def test_error_taxonomy(err, status, error_type):
    assert isinstance(err, ExecutorError)
    assert err.http_status == status
    payload = err.to_payload()
    assert payload["error_type"] == error_type
    assert payload["message"] == "x"


def test_payload_extras():
    assert ValidationError("x", field="buy_amount").to_payload()["field"] == "buy_amount"
    assert "field" not in ValidationError("x").to_payload()
    assert ConfigurationError("x", setting="RPC_URL").to_payload()["setting"] == "RPC_URL"
    assert ConfirmationError("x", tx_hash="0xab").to_payload()["tx_hash"] == "0xab"
