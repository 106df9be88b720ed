"""Application service: Show Asset use case (query)."""

from __future__ import annotations

from wms.application.dto import AssetDTO, asset_dto
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.repository.unit_of_work import UnitOfWork


class ShowAssetHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, asset_id_or_serial: str) -> AssetDTO:
        with self._uow:
            asset = self._uow.assets.get_by_id(asset_id_or_serial)
            if asset is None:
                asset = self._uow.assets.get_by_serial_number(asset_id_or_serial)
            if asset is None:
                raise EntityNotFoundError(f"Asset '{asset_id_or_serial}' not found")
            return asset_dto(asset)
