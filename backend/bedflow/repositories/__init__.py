"""
In-memory registries.
Own the entities and provide a clean lookup interface.
"""
from bedflow.repositories.base import BaseRegistry
from bedflow.repositories.bed_registry import BedRegistry

__all__ = [
    "BaseRegistry",
    "BedRegistry",
]
