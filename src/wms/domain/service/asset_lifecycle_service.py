"""Domain service: Asset Lifecycle.

Coordinates asset workflow transitions that span a shipment and many
assets.  Bulk operations use a two-phase approach (load and validate
every asset, then mutate and persist) so a single bad asset rejects the
whole batch before anything changes.
"""

from __future__ import annotations

from wms.domain.exceptions import ConflictError, EntityNotFoundError
from wms.domain.model.asset import Asset, AssetProcess
from wms.domain.model.shipment import Shipment
from wms.domain.repository.asset_repository import AssetRepository


class AssetLifecycleService:

    def __init__(self, asset_repo: AssetRepository) -> None:
        self._asset_repo = asset_repo

    def get(self, asset_id: str) -> Asset:
        asset = self._asset_repo.get_by_id(asset_id)
        if asset is None:
            raise EntityNotFoundError(f"Asset '{asset_id}' not found")
        return asset

    def reserve_for_shipment(self, shipment: Shipment, asset_id: str) -> Asset:
        """AVAILABLE -> RESERVED for one asset being added to ``shipment``."""
        asset = self.get(asset_id)
        asset.reserve(shipment.id)
        self._asset_repo.save(asset)
        return asset

    def dispatch_shipment(self, shipment: Shipment) -> list[Asset]:
        """Flip every asset of the shipment from RESERVED to IN_TRANSIT."""
        assets = self._load(shipment, AssetProcess.RESERVED, "dispatched")
        for asset in assets:
            asset.dispatch(shipment.id)
            self._asset_repo.save(asset)
        return assets

    def release_shipment(self, shipment: Shipment) -> list[Asset]:
        """Return RESERVED assets of a cancelled shipment to AVAILABLE."""
        released: list[Asset] = []
        for asset_id in shipment.asset_ids:
            asset = self.get(asset_id)
            if asset.process_status != AssetProcess.RESERVED:
                continue
            asset.release(shipment.id)
            self._asset_repo.save(asset)
            released.append(asset)
        return released

    def finalize_delivery(
        self,
        shipment: Shipment,
        store_id: str,
        store_name: str | None = None,
    ) -> list[Asset]:
        """IN_TRANSIT -> DELIVERED -> INSTALLED at the destination store."""
        assets = self._load(shipment, AssetProcess.IN_TRANSIT, "delivered")
        for asset in assets:
            asset.deliver(store_id, store_name)
            asset.install(store_name)
            self._asset_repo.save(asset)
        return assets

    def _load(self, shipment: Shipment, expected: AssetProcess, verb: str) -> list[Asset]:
        assets = [self.get(asset_id) for asset_id in shipment.asset_ids]
        for asset in assets:
            if asset.process_status != expected:
                raise ConflictError(
                    f"Asset {asset.serial_number} in shipment {shipment.id} cannot be "
                    f"{verb} — status is {asset.process_status.value}, "
                    f"expected {expected.value}"
                )
        return assets
