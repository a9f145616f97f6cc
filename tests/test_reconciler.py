"""
Tests for cart reconciliation at checkout
"""
from decimal import Decimal

import httpx
import pytest

from eventhub.cart import CartReconciler, CartStore, CheckoutLoader
from eventhub.errors import ERROR_LOAD_CART, TransportError
from eventhub.storage import MemoryStorage, StorageKeys


def _events_handler(events, calls):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=events)
    return handler


@pytest.mark.asyncio
async def test_empty_cart_makes_no_request(cart_store, make_api_client):
    calls = []
    api = make_api_client(_events_handler([], calls))

    result = await CartReconciler(cart_store, api).reconcile()

    assert result.items == []
    assert result.total == 0
    assert result.is_empty
    assert calls == []


@pytest.mark.asyncio
async def test_reconciles_two_tickets_in_order(cart_store, make_api_client, sample_event):
    calls = []
    cart_store.set(1, 10, 2)
    cart_store.set(1, 11, 1)
    api = make_api_client(_events_handler([sample_event], calls))

    result = await CartReconciler(cart_store, api).reconcile()

    assert [(item.name, item.unit_price, item.quantity) for item in result.items] == [
        ("Event1 - VIP", Decimal("1000"), 2),
        ("Event1 - Regular", Decimal("500"), 1),
    ]
    assert result.total == Decimal("2500")
    assert result.items[0].tickets_available == 5
    assert result.items[1].tickets_available == 20


@pytest.mark.asyncio
async def test_single_batched_request_with_ids(cart_store, make_api_client, sample_event):
    calls = []
    cart_store.set(1, 10, 1)
    cart_store.set(4, 40, 1)
    cart_store.set(1, 11, 1)
    api = make_api_client(_events_handler([sample_event], calls))

    await CartReconciler(cart_store, api).reconcile()

    assert len(calls) == 1
    assert calls[0].url.path == "/events"
    assert sorted(calls[0].url.params["ids"].split(",")) == ["1", "4"]


@pytest.mark.asyncio
async def test_deleted_ticket_is_skipped(cart_store, make_api_client, sample_event):
    cart_store.set(1, 10, 2)
    cart_store.set(1, 11, 1)
    sample_event["tickets"] = [t for t in sample_event["tickets"] if t["id"] != 11]
    api = make_api_client(_events_handler([sample_event], []))

    result = await CartReconciler(cart_store, api).reconcile()

    assert len(result.items) == 1
    assert result.items[0].ticket_id == 10
    assert result.total == Decimal("2000")


@pytest.mark.asyncio
async def test_deleted_event_is_skipped(cart_store, make_api_client, sample_event):
    cart_store.set(99, 990, 3)
    cart_store.set(1, 10, 1)
    api = make_api_client(_events_handler([sample_event], []))

    result = await CartReconciler(cart_store, api).reconcile()

    assert [item.event_id for item in result.items] == [1]
    assert result.total == Decimal("1000")


@pytest.mark.asyncio
async def test_everything_stale_is_empty_not_error(cart_store, make_api_client):
    cart_store.set(99, 990, 3)
    api = make_api_client(_events_handler([], []))

    result = await CartReconciler(cart_store, api).reconcile()

    assert result.is_empty
    assert result.total == 0


@pytest.mark.asyncio
async def test_uses_fetched_price_and_keeps_quantity_above_stock(cart_store, make_api_client, sample_event):
    cart_store.set(1, 10, 8)
    sample_event["tickets"][0]["price"] = 1200
    api = make_api_client(_events_handler([sample_event], []))

    result = await CartReconciler(cart_store, api).reconcile()

    item = result.items[0]
    assert item.unit_price == Decimal("1200")
    assert item.quantity == 8
    assert item.exceeds_stock
    assert result.total == Decimal("9600")


@pytest.mark.asyncio
async def test_fetch_failure_raises_transport_error(cart_store, make_api_client):
    cart_store.set(1, 10, 1)

    def handler(request):
        return httpx.Response(500, json={"message": "boom"})

    api = make_api_client(handler)

    with pytest.raises(TransportError):
        await CartReconciler(cart_store, api).reconcile()


@pytest.mark.asyncio
@pytest.mark.parametrize("price", ["abc", None, -100, "NaN"])
async def test_unusable_price_is_transport_error(cart_store, make_api_client, sample_event, price):
    cart_store.set(1, 10, 2)
    sample_event["tickets"][0]["price"] = price
    api = make_api_client(_events_handler([sample_event], []))

    with pytest.raises(TransportError):
        await CartReconciler(cart_store, api).reconcile()


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error(cart_store, make_api_client):
    cart_store.set(1, 10, 1)

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    api = make_api_client(handler)

    with pytest.raises(TransportError):
        await CartReconciler(cart_store, api).reconcile()


@pytest.mark.asyncio
async def test_loader_turns_failure_into_retryable_state(cart_store, make_api_client, sample_event):
    cart_store.set(1, 10, 1)
    responses = [httpx.Response(503), httpx.Response(200, json=[sample_event])]

    def handler(request):
        return responses.pop(0)

    loader = CheckoutLoader(CartReconciler(cart_store, make_api_client(handler)))

    failed = await loader.load()
    assert not failed.ok
    assert failed.error == ERROR_LOAD_CART
    assert failed.cart is None

    retried = await loader.load()
    assert retried.ok
    assert retried.cart.total == Decimal("1000")
    assert loader.state is retried


@pytest.mark.asyncio
async def test_non_canonical_keys_fetch_and_price_once(make_api_client, sample_event):
    calls = []
    storage = MemoryStorage({StorageKeys.TICKET_CART: '{"1": {"10": 1}, "01": {"010": 1, "11": 2}}'})
    api = make_api_client(_events_handler([sample_event], calls))

    result = await CartReconciler(CartStore(storage), api).reconcile()

    assert len(calls) == 1
    assert calls[0].url.params["ids"] == "1"
    assert [(item.ticket_id, item.quantity) for item in result.items] == [(10, 2), (11, 2)]
    assert result.total == Decimal("3000")
