"""Tests for the router facade: config checks, reads, and swap calldata."""

from unittest.mock import patch

import pytest
from web3 import Web3

from swap_executor.adapters.router_v2 import SWAP_FN, RouterGateway
from swap_executor.services.chain_client import ChainClient
from swap_executor.services.exceptions import ConfigurationError, UpstreamError

from tests.conftest import ROUTER, RPC_URL, TARGET, TEST_PRIVATE_KEY, TEST_SENDER, WBNB


@pytest.fixture
def client():
    # real (offline) Web3: contract objects and ABI encoding need no connection
    return ChainClient(RPC_URL, TEST_PRIVATE_KEY, 97, w3=Web3(Web3.HTTPProvider(RPC_URL)))


@pytest.fixture
def gateway(client):
    return RouterGateway(client, ROUTER.lower())


class TestConstruction:
    @pytest.mark.parametrize("addr", [None, "", "0x123", "router"])
    def test_router_address_required(self, client, addr):
        with pytest.raises(ConfigurationError) as exc:
            RouterGateway(client, addr)
        assert exc.value.setting == "ROUTER_ADDRESS"

    def test_address_checksummed(self, gateway):
        assert gateway.address == ROUTER
        assert gateway.contract.address == ROUTER


class TestReads:
    def test_base_asset(self, gateway):
        with patch.object(gateway.client, "call_read", return_value=WBNB.lower()) as call:
            assert gateway.base_asset() == WBNB
        call.assert_called_once_with(gateway.contract, "WETH")

    def test_base_asset_garbage(self, gateway):
        with patch.object(gateway.client, "call_read", return_value="0x00"):
            with pytest.raises(UpstreamError):
                gateway.base_asset()

    def test_base_asset_failure_propagates(self, gateway):
        with patch.object(gateway.client, "call_read", side_effect=UpstreamError("WETH() read failed")):
            with pytest.raises(UpstreamError):
                gateway.base_asset()

    def test_quote(self, gateway):
        with patch.object(gateway.client, "call_read", return_value=(10**16, 5 * 10**20)) as call:
            amounts = gateway.quote(10**16, [WBNB.lower(), TARGET.lower()])
        assert amounts == [10**16, 5 * 10**20]
        call.assert_called_once_with(gateway.contract, "getAmountsOut", 10**16, [WBNB, TARGET])


class TestBuildSwap:
    def test_calldata_and_value(self, gateway):
        tx = gateway.build_swap(
            amount_in=20_000_000_000_000_000,
            amount_out_min=950 * 10**18,
            path=[WBNB, TARGET],
            recipient=TEST_SENDER,
            deadline=1_700_000_060,
        )
        assert tx.to == ROUTER
        assert tx.value == 20_000_000_000_000_000

        fn, params = gateway.contract.decode_function_input(tx.data)
        assert fn.abi["name"] == SWAP_FN
        assert params["amountOutMin"] == 950 * 10**18
        assert list(params["path"]) == [WBNB, TARGET]
        assert params["to"] == TEST_SENDER
        assert params["deadline"] == 1_700_000_060

    def test_submit_hands_off_to_client(self, gateway):
        tx = gateway.build_swap(1, 0, [WBNB, TARGET], TEST_SENDER, 1)
        with patch.object(gateway.client, "send_transaction", return_value="0xabc") as send:
            assert gateway.submit(tx) == "0xabc"
        send.assert_called_once_with(ROUTER, tx.data, 1)
