"""Unit tests for kingdom ledgers."""

from __future__ import annotations

import asyncio

import pytest

from reignmaker.domain import models as dm
from reignmaker.domain.enums import ResourceKind
from reignmaker.repository import JsonKingdomRepository
from reignmaker.services.ledger import InMemoryKingdomLedger, RepositoryKingdomLedger


def _kingdom() -> dm.Kingdom:
    kingdom = dm.Kingdom(id=dm.KingdomID(1), name="Stolen Lands")
    kingdom.resources[ResourceKind.GOLD] = 10
    return kingdom


def _spend_one(kingdom: dm.Kingdom) -> int:
    kingdom.resources[ResourceKind.GOLD] -= 1
    return kingdom.resources[ResourceKind.GOLD]


def _fail_halfway(kingdom: dm.Kingdom) -> None:
    kingdom.resources[ResourceKind.GOLD] = 0
    raise ValueError("mutator failed")


@pytest.mark.asyncio
async def test_in_memory_update_returns_mutator_result():
    ledger = InMemoryKingdomLedger(_kingdom())

    remaining = await ledger.atomic_update(_spend_one)

    assert remaining == 9
    assert ledger.get_current_kingdom().resources[ResourceKind.GOLD] == 9


@pytest.mark.asyncio
async def test_in_memory_snapshot_is_detached():
    ledger = InMemoryKingdomLedger(_kingdom())

    snapshot = ledger.get_current_kingdom()
    snapshot.resources[ResourceKind.GOLD] = 0

    assert ledger.get_current_kingdom().resources[ResourceKind.GOLD] == 10


@pytest.mark.asyncio
async def test_in_memory_failed_mutator_leaves_state_untouched():
    ledger = InMemoryKingdomLedger(_kingdom())

    with pytest.raises(ValueError, match="mutator failed"):
        await ledger.atomic_update(_fail_halfway)

    assert ledger.get_current_kingdom().resources[ResourceKind.GOLD] == 10


@pytest.mark.asyncio
async def test_in_memory_concurrent_updates_are_serialized():
    ledger = InMemoryKingdomLedger(_kingdom())

    await asyncio.gather(*(ledger.atomic_update(_spend_one) for _ in range(10)))

    assert ledger.get_current_kingdom().resources[ResourceKind.GOLD] == 0


@pytest.mark.asyncio
async def test_repository_ledger_persists_updates(tmp_path):
    repo = JsonKingdomRepository(tmp_path)
    repo.save(_kingdom())
    ledger = RepositoryKingdomLedger(repo, dm.KingdomID(1))

    await ledger.atomic_update(_spend_one)

    assert repo.load(dm.KingdomID(1)).resources[ResourceKind.GOLD] == 9


@pytest.mark.asyncio
async def test_repository_ledger_failed_mutator_is_not_saved(tmp_path):
    repo = JsonKingdomRepository(tmp_path)
    repo.save(_kingdom())
    ledger = RepositoryKingdomLedger(repo, dm.KingdomID(1))

    with pytest.raises(ValueError):
        await ledger.atomic_update(_fail_halfway)

    assert repo.load(dm.KingdomID(1)).resources[ResourceKind.GOLD] == 10


def test_repository_ledger_missing_kingdom(tmp_path):
    ledger = RepositoryKingdomLedger(JsonKingdomRepository(tmp_path), dm.KingdomID(42))

    assert ledger.get_current_kingdom() is None


@pytest.mark.asyncio
async def test_repository_ledger_update_on_missing_kingdom(tmp_path):
    ledger = RepositoryKingdomLedger(JsonKingdomRepository(tmp_path), dm.KingdomID(9))

    with pytest.raises(FileNotFoundError) as excinfo:
        await ledger.atomic_update(_spend_one)

    assert str(excinfo.value) == "kingdom 9 not found"
