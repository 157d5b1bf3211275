"""
Unit type normalization.

Legacy materials store their unit as free text ("kg", "Kilograms",
"pcs"...). This maps those strings onto canonical unit definitions.
"""

from typing import Optional

from models.unit_of_measure import UnitDefinition


KILOGRAM = UnitDefinition("Kilogram", "kg", "Weight")
GRAM = UnitDefinition("Gram", "g", "Weight")
POUND = UnitDefinition("Pound", "lb", "Weight")
LITER = UnitDefinition("Liter", "L", "Volume")
MILLILITER = UnitDefinition("Milliliter", "mL", "Volume")
METER = UnitDefinition("Meter", "m", "Length")
CENTIMETER = UnitDefinition("Centimeter", "cm", "Length")
MILLIMETER = UnitDefinition("Millimeter", "mm", "Length")
PIECE = UnitDefinition("Piece", "pcs", "Count")
BOX = UnitDefinition("Box", "box", "Count")

FALLBACK_UNIT_TYPE = "Other"

# Lowercase synonym -> canonical unit
UNIT_SYNONYMS: dict[str, UnitDefinition] = {
    "kg": KILOGRAM,
    "kilogram": KILOGRAM,
    "kilograms": KILOGRAM,
    "g": GRAM,
    "gram": GRAM,
    "grams": GRAM,
    "lb": POUND,
    "pound": POUND,
    "pounds": POUND,
    "l": LITER,
    "liter": LITER,
    "liters": LITER,
    "ml": MILLILITER,
    "milliliter": MILLILITER,
    "milliliters": MILLILITER,
    "m": METER,
    "meter": METER,
    "meters": METER,
    "cm": CENTIMETER,
    "centimeter": CENTIMETER,
    "centimeters": CENTIMETER,
    "mm": MILLIMETER,
    "millimeter": MILLIMETER,
    "millimeters": MILLIMETER,
    "pcs": PIECE,
    "piece": PIECE,
    "pieces": PIECE,
    "box": BOX,
    "boxes": BOX,
}


def normalize_unit_type(raw_unit_type: Optional[str]) -> UnitDefinition:
    """
    Map a free-text unit onto its canonical definition.

    Matching ignores case and surrounding whitespace:
    - "KG" → Kilogram / kg / Weight
    - " pieces " → Piece / pcs / Count

    Unknown units are not an error; they come back verbatim as both
    name and symbol with type "Other":
    - "bundle" → bundle / bundle / Other

    Args:
        raw_unit_type: Unit string from a legacy material

    Returns:
        UnitDefinition(name, symbol, type)
    """
    raw = (raw_unit_type or "").strip()
    known = UNIT_SYNONYMS.get(raw.lower())
    if known:
        return known
    return UnitDefinition(raw, raw, FALLBACK_UNIT_TYPE)


def is_known_unit_type(raw_unit_type: Optional[str]) -> bool:
    """Check if a unit string is in the synonym table."""
    return (raw_unit_type or "").strip().lower() in UNIT_SYNONYMS
