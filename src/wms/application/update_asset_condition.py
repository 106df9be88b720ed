"""Application service: Update Asset Condition use case.

Condition is informational; the workflow status is left untouched.
"""

from __future__ import annotations

from wms.domain.model.asset import Asset, AssetCondition
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.domain.service.asset_lifecycle_service import AssetLifecycleService


class UpdateAssetConditionHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, asset_id: str, condition: str, note: str | None = None) -> Asset:
        parsed = AssetCondition.parse(condition)
        with self._uow:
            asset = AssetLifecycleService(self._uow.assets).get(asset_id)
            asset.change_condition(parsed, note)
            self._uow.assets.save(asset)
            self._uow.commit()
        return asset
