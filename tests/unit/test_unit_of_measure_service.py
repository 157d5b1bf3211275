"""
Unit tests for UnitOfMeasureService.

Run: pytest tests/unit/test_unit_of_measure_service.py -v
"""

import pytest

from services.unit_of_measure_service import UnitOfMeasureService
from models.unit_of_measure import UnitOfMeasureCreate
from exceptions import NotFoundError, UnitOfMeasureExistsError

from tests.factories import UnitOfMeasureFactory


class TestUnitOfMeasureServiceReads:
    """Tests for get_by_name(), get_by_id() and get_all()"""

    def test_get_by_name_exact_match(self, mock_db, mock_supabase):
        unit = UnitOfMeasureFactory.create(name="Kilogram")
        mock_supabase.set_table_data("units_of_measure", [unit])
        service = UnitOfMeasureService()

        assert service.get_by_name("Kilogram").id == unit["id"]
        assert service.get_by_name("kilogram") is None

    def test_get_by_id_not_found_raises(self, mock_db, mock_supabase):
        with pytest.raises(NotFoundError) as exc_info:
            UnitOfMeasureService().get_by_id("missing")

        assert exc_info.value.code == "UNIT_OF_MEASURE_NOT_FOUND"

    def test_get_all_ordered_by_name(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("units_of_measure", [
            UnitOfMeasureFactory.create(name="Piece", symbol="pcs", type="Count"),
            UnitOfMeasureFactory.create(name="Gram", symbol="g"),
        ])

        units = UnitOfMeasureService().get_all()

        assert [u.name for u in units] == ["Gram", "Piece"]


class TestUnitOfMeasureServiceCreate:
    """Tests for UnitOfMeasureService.create()"""

    def test_create_unit(self, mock_db, mock_supabase):
        service = UnitOfMeasureService()

        unit = service.create(UnitOfMeasureCreate(name="Box", symbol="box", type="Count"))

        assert unit.id
        assert mock_supabase.get_table_data("units_of_measure")[0]["name"] == "Box"

    def test_create_duplicate_name_raises(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("units_of_measure", [UnitOfMeasureFactory.create(name="Box")])

        with pytest.raises(UnitOfMeasureExistsError) as exc_info:
            UnitOfMeasureService().create(UnitOfMeasureCreate(name="Box", symbol="box", type="Count"))

        assert exc_info.value.status_code == 409


class TestResolveForUnitType:
    """Tests for UnitOfMeasureService.resolve_for_unit_type()"""

    def test_prefers_unit_named_like_raw_string(self, mock_db, mock_supabase):
        """A unit literally named 'kg' wins over the canonical Kilogram."""
        raw_named = UnitOfMeasureFactory.create(name="kg", symbol="kg")
        canonical = UnitOfMeasureFactory.create(name="Kilogram", symbol="kg")
        mock_supabase.set_table_data("units_of_measure", [canonical, raw_named])

        unit = UnitOfMeasureService().resolve_for_unit_type("kg")

        assert unit.id == raw_named["id"]

    def test_reuses_canonical_unit(self, mock_db, mock_supabase):
        canonical = UnitOfMeasureFactory.create(name="Kilogram", symbol="kg")
        mock_supabase.set_table_data("units_of_measure", [canonical])

        unit = UnitOfMeasureService().resolve_for_unit_type("kilograms")

        assert unit.id == canonical["id"]
        assert len(mock_supabase.get_table_data("units_of_measure")) == 1

    def test_creates_canonical_unit_when_missing(self, mock_db, mock_supabase):
        unit = UnitOfMeasureService().resolve_for_unit_type("KG")

        assert (unit.name, unit.symbol, unit.type) == ("Kilogram", "kg", "Weight")

    def test_equivalent_synonyms_share_one_unit(self, mock_db, mock_supabase):
        """kg, kilogram and KILOGRAMS must never create two units."""
        service = UnitOfMeasureService()

        ids = {service.resolve_for_unit_type(raw).id for raw in ["kg", "kilogram", "KILOGRAMS"]}

        assert len(ids) == 1
        assert len(mock_supabase.get_table_data("units_of_measure")) == 1

    def test_unknown_unit_created_as_other(self, mock_db, mock_supabase):
        unit = UnitOfMeasureService().resolve_for_unit_type("bundle")

        assert (unit.name, unit.symbol, unit.type) == ("bundle", "bundle", "Other")

    def test_blank_unit_returns_none(self, mock_db, mock_supabase):
        service = UnitOfMeasureService()

        assert service.resolve_for_unit_type("   ") is None
        assert service.resolve_for_unit_type(None) is None
        assert mock_supabase.get_table_data("units_of_measure") == []

    def test_long_unknown_unit_kept_whole(self, mock_db, mock_supabase):
        raw = "square meters per pallet of forty-two boxes"

        unit = UnitOfMeasureService().resolve_for_unit_type(raw)

        assert (unit.name, unit.symbol, unit.type) == (raw, raw, "Other")
        assert mock_supabase.get_table_data("units_of_measure")[0]["symbol"] == raw
