"""Reference data lookups for weekfit."""

from .equipment_catalog import EquipmentCatalog

__all__ = ["EquipmentCatalog"]
