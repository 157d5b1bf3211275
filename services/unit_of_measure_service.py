"""
Unit of measure service.

Owns the `units_of_measure` table and the lookup-or-create rule used
when a legacy unit string has to become a real unit.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.unit_of_measure import UnitOfMeasureCreate, UnitOfMeasureResponse
from exceptions import DatabaseError, NotFoundError, UnitOfMeasureExistsError
from utils.unit_utils import normalize_unit_type

logger = structlog.get_logger(__name__)


class UnitOfMeasureService:
    """
    Unit of measure business logic.

    Unit names are unique; create() refuses a name that is taken.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "units_of_measure"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self) -> list[UnitOfMeasureResponse]:
        """Get all units ordered by name."""
        try:
            result = self.db.table(self.table).select("*").order("name").execute()
        except Exception as e:
            logger.error("get_units_failed", error=str(e))
            raise DatabaseError("select", str(e))

        return [UnitOfMeasureResponse(**row) for row in result.data]

    def get_by_id(self, unit_id: str) -> UnitOfMeasureResponse:
        """
        Get a unit by ID.

        Raises:
            NotFoundError: If unit doesn't exist
        """
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", unit_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("get_unit_failed", unit_id=unit_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise NotFoundError("Unit of measure", unit_id, code="UNIT_OF_MEASURE_NOT_FOUND")

        return UnitOfMeasureResponse(**result.data[0])

    def get_by_name(self, name: str) -> Optional[UnitOfMeasureResponse]:
        """
        Get a unit by exact name.

        Args:
            name: Unit name, e.g. "Kilogram"

        Returns:
            UnitOfMeasureResponse or None if not found
        """
        logger.debug("getting_unit_by_name", name=name)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("name", name)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("get_unit_by_name_failed", name=name, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            return None

        return UnitOfMeasureResponse(**result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: UnitOfMeasureCreate) -> UnitOfMeasureResponse:
        """
        Create a new unit.

        Raises:
            UnitOfMeasureExistsError: If the name is already taken
        """
        logger.info("creating_unit_of_measure", name=data.name, symbol=data.symbol)

        if self.get_by_name(data.name):
            raise UnitOfMeasureExistsError(data.name)

        try:
            result = (
                self.db.table(self.table)
                .insert({
                    "name": data.name,
                    "symbol": data.symbol,
                    "type": data.type
                })
                .execute()
            )
        except Exception as e:
            logger.error("create_unit_failed", name=data.name, error=str(e))
            raise DatabaseError("insert", str(e))

        unit = UnitOfMeasureResponse(**result.data[0])
        logger.info("unit_of_measure_created", unit_id=unit.id, name=unit.name)
        return unit

    def resolve_for_unit_type(self, raw_unit_type: Optional[str]) -> Optional[UnitOfMeasureResponse]:
        """
        Find or create the unit for a legacy unit string.

        Lookup order:
        1. A unit named exactly like the raw string ("kg")
        2. A unit named like its canonical form ("Kilogram")
        3. Create the canonical unit

        Unknown strings become a unit of type "Other" named after the raw
        string, so the same canonical name never gets a second unit.

        Returns:
            The unit, or None if the raw string is blank
        """
        raw = (raw_unit_type or "").strip()
        if not raw:
            logger.warning("unit_type_blank")
            return None

        existing = self.get_by_name(raw)
        if existing:
            return existing

        definition = normalize_unit_type(raw)

        existing = self.get_by_name(definition.name)
        if existing:
            return existing

        return self.create(UnitOfMeasureCreate(
            name=definition.name,
            symbol=definition.symbol,
            type=definition.type
        ))


# Singleton instance for convenience
_unit_of_measure_service: Optional[UnitOfMeasureService] = None

def get_unit_of_measure_service() -> UnitOfMeasureService:
    """Get or create UnitOfMeasureService instance."""
    global _unit_of_measure_service
    if _unit_of_measure_service is None:
        _unit_of_measure_service = UnitOfMeasureService()
    return _unit_of_measure_service
