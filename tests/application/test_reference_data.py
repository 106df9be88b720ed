"""Integration tests for loading and listing reference data."""

import pytest

from wms.application.load_reference_data import LoadReferenceDataHandler
from wms.application.show_reference_data import ShowReferenceDataHandler
from wms.domain.exceptions import ValidationError
from wms.domain.model.product import Product
from tests.fakes import FakeUnitOfWork

PAYLOAD = {
    "products": [
        {"id": "P2", "name": "printer", "sku": "prn"},
        {"id": "P1", "name": "Scanner", "sku": "scn", "category": "devices"},
    ],
    "warehouses": [{"id": "W1", "name": "Central"}],
    "stores": [{"id": "S1", "name": "Main Street", "address": "1 Main St"}],
}


class TestLoadReferenceData:

    def test_load_counts_and_lists(self):
        uow = FakeUnitOfWork()
        counts = LoadReferenceDataHandler(uow).handle(PAYLOAD)
        assert (counts.products, counts.warehouses, counts.stores) == (2, 1, 1)

        data = ShowReferenceDataHandler(uow).handle()
        assert [p.id for p in data.products] == ["P2", "P1"]
        assert data.stores[0].address == "1 Main St"

    def test_reload_is_idempotent(self):
        uow = FakeUnitOfWork()
        LoadReferenceDataHandler(uow).handle(PAYLOAD)
        LoadReferenceDataHandler(uow).handle(PAYLOAD)
        assert len(uow.products.list_all()) == 2

    def test_sku_owned_by_other_product_rejected(self):
        uow = FakeUnitOfWork(products=[Product(id="P9", name="Old", sku="scn")])
        with pytest.raises(ValidationError, match="SKU 'scn'"):
            LoadReferenceDataHandler(uow).handle(PAYLOAD)
        assert uow.locations.list_warehouses() == []

    def test_malformed_payload_rejected(self):
        with pytest.raises(ValidationError, match="Malformed"):
            LoadReferenceDataHandler(FakeUnitOfWork()).handle({"products": [{"id": "P1"}]})
