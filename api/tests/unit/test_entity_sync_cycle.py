"""
Tests del ciclo de sincronizacion (maquina de estados).

Se usan dobles en memoria para el cliente de Xero y para el store:
- FakeXeroClient retorna un payload fijo (o levanta) y puede bloquearse
  con un asyncio.Event para simular un fetch lento.
- InMemoryStore cuenta llamadas y guarda los registros por remote_id.
"""
from __future__ import annotations

import asyncio
from typing import Any, Optional, Sequence, Set

import pytest

from xero_mirror.domain.repositories.mirror_store import IMirrorStore
from xero_mirror.infrastructure.external.xero_sync.entity_mappings import get_entity_config
from xero_mirror.infrastructure.external.xero_sync.sync_service import EntitySyncCycle
from xero_mirror.shared.constants.sync_constants import SyncCycleState, SyncOutcome
from xero_mirror.shared.exceptions.sync import (
    FetchFailed,
    InvalidRemoteShape,
    PersistConflict,
    PersistFailed,
)


class FakeXeroClient:
    def __init__(self, payload: Any = None, *, error: Optional[Exception] = None):
        self.payload = payload
        self.error = error
        self.calls = 0
        self.gate: Optional[asyncio.Event] = None
        self.started = asyncio.Event()

    async def fetch(self, config):
        self.calls += 1
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.payload


class InMemoryStore(IMirrorStore):
    def __init__(self, *, insert_error: Optional[Exception] = None):
        self.records: dict[str, Any] = {}
        self.load_calls = 0
        self.insert_calls = 0
        self.insert_error = insert_error

    async def load_existing_ids(self, config) -> Set[str]:
        self.load_calls += 1
        return set(self.records)

    async def insert_many(self, config, records: Sequence[Any]) -> int:
        self.insert_calls += 1
        if self.insert_error is not None:
            raise self.insert_error
        for record in records:
            self.records[record.remote_id] = record
        return len(records)


def _invoices(*ids: str) -> dict:
    return {
        "Id": "resp-1",
        "Status": "OK",
        "Invoices": [
            {"InvoiceID": i, "Type": "ACCREC", "Status": "AUTHORISED", "Date": "/Date(1627884000000+0000)/"}
            for i in ids
        ],
    }


def _payment(payment_id: str, *, with_contact: bool = True) -> dict:
    invoice = {"InvoiceID": f"inv-{payment_id}"}
    if with_contact:
        invoice["Contact"] = {"ContactID": "c-1", "Name": "ACME"}
    return {
        "PaymentID": payment_id,
        "Account": {"AccountID": "acc-1", "Code": "090"},
        "Invoice": invoice,
    }


def _cycle(client, store, entity_type: str = "invoices") -> EntitySyncCycle:
    return EntitySyncCycle(config=get_entity_config(entity_type), client=client, store=store)


@pytest.mark.asyncio
async def test_inserts_new_records():
    store = InMemoryStore()
    cycle = _cycle(FakeXeroClient(_invoices("a", "b", "c")), store)

    result = await cycle.run_once()

    assert result.outcome == SyncOutcome.INSERTED
    assert result.fetched == 3
    assert result.new_records == 3
    assert result.inserted == 3
    assert set(store.records) == {"a", "b", "c"}
    assert cycle.state == SyncCycleState.IDLE
    assert cycle.last_result == result


@pytest.mark.asyncio
async def test_second_cycle_with_same_payload_is_a_noop():
    store = InMemoryStore()
    cycle = _cycle(FakeXeroClient(_invoices("a", "b")), store)

    await cycle.run_once()
    snapshot = dict(store.records)
    second = await cycle.run_once()

    assert second.outcome == SyncOutcome.NOOP
    assert second.inserted == 0
    assert store.records == snapshot
    assert store.insert_calls == 1


@pytest.mark.asyncio
async def test_only_missing_records_are_inserted():
    store = InMemoryStore()
    client = FakeXeroClient(_invoices("a", "b"))
    cycle = _cycle(client, store)
    await cycle.run_once()

    client.payload = _invoices("a", "b", "c")
    result = await cycle.run_once()

    assert result.outcome == SyncOutcome.INSERTED
    assert result.new_records == 1
    assert set(store.records) == {"a", "b", "c"}


@pytest.mark.asyncio
async def test_empty_diff_never_calls_insert():
    store = InMemoryStore()
    store.records = {"a": object(), "b": object()}
    cycle = _cycle(FakeXeroClient(_invoices("a", "b")), store)

    result = await cycle.run_once()

    assert result.outcome == SyncOutcome.NOOP
    assert store.insert_calls == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"Invoices": "not-a-list"},
        {"Contacts": []},
        [{"InvoiceID": "a"}],
        None,
    ],
)
async def test_invalid_shape_fails_without_writes(payload):
    store = InMemoryStore()
    cycle = _cycle(FakeXeroClient(payload), store)

    with pytest.raises(InvalidRemoteShape):
        await cycle.run_once()

    assert store.load_calls == 0
    assert store.insert_calls == 0
    assert cycle.state == SyncCycleState.FAILED
    assert cycle.last_result.outcome == SyncOutcome.FAILED
    assert cycle.last_result.failed_stage == SyncCycleState.VALIDATING
    assert cycle.last_result.error_kind == "InvalidRemoteShape"


@pytest.mark.asyncio
async def test_malformed_record_is_dropped_and_rest_inserted():
    store = InMemoryStore()
    payload = {
        "Payments": [
            _payment("p-1"),
            _payment("p-2"),
            _payment("p-3", with_contact=False),
            _payment("p-4"),
            _payment("p-5"),
        ]
    }
    cycle = _cycle(FakeXeroClient(payload), store, "payments")

    result = await cycle.run_once()

    assert result.outcome == SyncOutcome.INSERTED
    assert result.inserted == 4
    assert result.dropped == 1
    assert set(store.records) == {"p-1", "p-2", "p-4", "p-5"}


@pytest.mark.asyncio
async def test_all_records_dropped_is_a_noop():
    store = InMemoryStore()
    payload = {"Payments": [_payment("p-1", with_contact=False)]}
    cycle = _cycle(FakeXeroClient(payload), store, "payments")

    result = await cycle.run_once()

    assert result.outcome == SyncOutcome.NOOP
    assert result.dropped == 1
    assert store.insert_calls == 0


@pytest.mark.asyncio
async def test_overlapping_cycle_is_skipped():
    store = InMemoryStore()
    client = FakeXeroClient(_invoices("a", "b"))
    client.gate = asyncio.Event()
    cycle = _cycle(client, store)

    first = asyncio.create_task(cycle.run_once())
    await client.started.wait()
    assert cycle.is_running

    second = await cycle.run_once()
    assert second.outcome == SyncOutcome.SKIPPED
    assert client.calls == 1

    client.gate.set()
    first_result = await first

    assert first_result.outcome == SyncOutcome.INSERTED
    assert first_result.inserted == 2
    assert len(store.records) == 2
    assert store.insert_calls == 1


@pytest.mark.asyncio
async def test_persist_conflict_is_benign():
    store = InMemoryStore(insert_error=PersistConflict("duplicado", entity_type="invoices"))
    cycle = _cycle(FakeXeroClient(_invoices("a")), store)

    result = await cycle.run_once()

    assert result.outcome == SyncOutcome.CONFLICT
    assert result.success
    assert cycle.state == SyncCycleState.IDLE


@pytest.mark.asyncio
async def test_persist_failed_propagates_on_demand():
    store = InMemoryStore(insert_error=PersistFailed("db caida", entity_type="invoices"))
    cycle = _cycle(FakeXeroClient(_invoices("a")), store)

    with pytest.raises(PersistFailed):
        await cycle.run_once()

    assert cycle.last_result.failed_stage == SyncCycleState.PERSISTING


@pytest.mark.asyncio
async def test_run_safely_logs_and_returns_failed_result():
    store = InMemoryStore()
    client = FakeXeroClient(error=FetchFailed("sin red", entity_type="invoices"))
    cycle = _cycle(client, store)

    result = await cycle.run_safely()

    assert result.outcome == SyncOutcome.FAILED
    assert result.error_kind == "FetchFailed"
    assert result.failed_stage == SyncCycleState.FETCHING
    assert store.load_calls == 0


@pytest.mark.asyncio
async def test_failure_is_not_sticky():
    store = InMemoryStore()
    client = FakeXeroClient(error=FetchFailed("timeout", entity_type="invoices"))
    cycle = _cycle(client, store)
    await cycle.run_safely()

    client.error = None
    client.payload = _invoices("a")
    result = await cycle.run_safely()

    assert result.outcome == SyncOutcome.INSERTED
    assert cycle.state == SyncCycleState.IDLE


@pytest.mark.asyncio
async def test_cancelled_cycle_does_not_stay_in_fetching():
    store = InMemoryStore()
    client = FakeXeroClient(_invoices("a"))
    client.gate = asyncio.Event()
    cycle = _cycle(client, store)

    task = asyncio.create_task(cycle.run_once())
    await client.started.wait()
    assert cycle.state == SyncCycleState.FETCHING

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert cycle.state == SyncCycleState.FAILED
    assert not cycle.is_running
    assert cycle.last_result.outcome == SyncOutcome.FAILED
    assert cycle.last_result.failed_stage == SyncCycleState.FETCHING
    assert cycle.last_result.error_kind == "Cancelled"

    client.gate.set()
    result = await cycle.run_once()
    assert result.outcome == SyncOutcome.INSERTED
