"""
Unit tests for MaterialService.

Run: pytest tests/unit/test_material_service.py -v
"""

import pytest
from decimal import Decimal

from services.material_service import MaterialService, get_material_service
from exceptions import DatabaseError

from tests.factories import MaterialFactory


class TestMaterialServiceGetById:
    """Tests for MaterialService.get_by_id()"""

    def test_get_by_id_returns_material(self, mock_db, mock_supabase, sample_material_data):
        """Should return the material with decimal quantities."""
        mock_supabase.set_table_data("materials", [sample_material_data])
        service = MaterialService()

        material = service.get_by_id(sample_material_data["id"])

        assert material is not None
        assert material.name == "Steel Pipe"
        assert material.unit_value == Decimal("2.5")
        assert material.stock_quantity == Decimal("100")

    def test_get_by_id_not_found_returns_none(self, mock_db, mock_supabase):
        """Should return None rather than raise."""
        mock_supabase.set_table_data("materials", [])
        service = MaterialService()

        assert service.get_by_id("missing") is None

    def test_get_by_id_keeps_raw_json_text(self, mock_db, mock_supabase, sample_material_data):
        """Photos stay serialized; parsing is the migration's job."""
        mock_supabase.set_table_data("materials", [sample_material_data])
        service = MaterialService()

        material = service.get_by_id(sample_material_data["id"])

        assert isinstance(material.photos, str)

    def test_get_by_id_loads_invalid_material(self, mock_db, mock_supabase):
        """A negative stock must still load so it can be reported."""
        row = MaterialFactory.create(stock_quantity=-5, name="")
        mock_supabase.set_table_data("materials", [row])
        service = MaterialService()

        material = service.get_by_id(row["id"])

        assert material.stock_quantity == Decimal("-5")

    def test_database_failure_raises_database_error(self, mock_db, mock_supabase):
        mock_supabase.fail_on("materials", "select")
        service = MaterialService()

        with pytest.raises(DatabaseError) as exc_info:
            service.get_by_id("any")

        assert exc_info.value.status_code == 500


class TestMaterialServiceGetAllIds:
    """Tests for MaterialService.get_all_ids()"""

    def test_returns_ids_oldest_first(self, mock_db, mock_supabase):
        materials = MaterialFactory.create_batch(3)
        mock_supabase.set_table_data("materials", list(reversed(materials)))
        service = MaterialService()

        ids = service.get_all_ids()

        assert ids == [m["id"] for m in materials]

    def test_empty_table_returns_empty_list(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("materials", [])

        assert MaterialService().get_all_ids() == []


class TestMaterialServiceGetBatch:
    """Tests for MaterialService.get_batch()"""

    def test_returns_requested_page(self, mock_db, mock_supabase):
        materials = MaterialFactory.create_batch(5)
        mock_supabase.set_table_data("materials", materials)
        service = MaterialService()

        page = service.get_batch(skip=2, take=2)

        assert [m.id for m in page] == [materials[2]["id"], materials[3]["id"]]

    def test_past_the_end_returns_empty(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("materials", MaterialFactory.create_batch(2))

        assert MaterialService().get_batch(skip=10, take=5) == []

    def test_zero_take_returns_empty_without_query(self, mock_db, mock_supabase):
        service = MaterialService()

        assert service.get_batch(skip=0, take=0) == []
        assert mock_supabase.calls == []


class TestMaterialServiceCount:
    """Tests for MaterialService.count()"""

    def test_count_returns_total(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("materials", MaterialFactory.create_batch(4))

        assert MaterialService().count() == 4


class TestMaterialServiceSingleton:
    """Tests for get_material_service()"""

    def test_returns_same_instance(self, mock_db):
        assert get_material_service() is get_material_service()
