"""Unit tests for the AssetLifecycleService domain service."""

import pytest

from wms.domain.exceptions import ConflictError
from wms.domain.model.asset import Asset, AssetProcess
from wms.domain.model.shipment import Shipment
from wms.domain.service.asset_lifecycle_service import AssetLifecycleService
from tests.fakes import FakeAssetRepository


def _setup(count=2):
    assets = [
        Asset.register(product_id="P1", serial_number=f"SN-{n}", warehouse_id="W1")
        for n in range(count)
    ]
    repo = FakeAssetRepository(assets)
    shipment = Shipment.create("REQ-1", "W1", "S1")
    service = AssetLifecycleService(repo)
    for asset in assets:
        service.reserve_for_shipment(shipment, asset.id)
        shipment.add_item(asset.id)
    return repo, shipment, service, assets


class TestDispatch:

    def test_all_reserved_assets_go_in_transit(self):
        repo, shipment, service, assets = _setup()
        moved = service.dispatch_shipment(shipment)
        assert len(moved) == 2
        for asset in assets:
            stored = repo.get_by_id(asset.id)
            assert stored.process_status == AssetProcess.IN_TRANSIT
            assert stored.warehouse_id is None

    def test_one_bad_asset_blocks_the_batch(self):
        repo, shipment, service, assets = _setup()
        broken = repo.get_by_id(assets[1].id)
        broken.release(shipment.id)
        repo.save(broken)

        with pytest.raises(ConflictError, match="expected RESERVED"):
            service.dispatch_shipment(shipment)
        assert repo.get_by_id(assets[0].id).process_status == AssetProcess.RESERVED


class TestReleaseAndFinalize:

    def test_release_returns_reserved_assets(self):
        repo, shipment, service, assets = _setup()
        released = service.release_shipment(shipment)
        assert len(released) == 2
        assert all(
            repo.get_by_id(a.id).process_status == AssetProcess.AVAILABLE for a in assets
        )

    def test_finalize_installs_at_store(self):
        repo, shipment, service, assets = _setup(1)
        service.dispatch_shipment(shipment)
        service.finalize_delivery(shipment, "S1", "Main Street")
        stored = repo.get_by_id(assets[0].id)
        assert stored.process_status == AssetProcess.INSTALLED
        assert stored.store_id == "S1"

    def test_finalize_requires_in_transit(self):
        _, shipment, service, _ = _setup(1)
        with pytest.raises(ConflictError, match="expected IN_TRANSIT"):
            service.finalize_delivery(shipment, "S1")
