"""
Domain errors raised by the repositories
"""
from typing import Dict, List


class CatalogError(Exception):
    """Base class for catalog errors"""


class NotFoundError(CatalogError):
    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class ValidationFailed(CatalogError):
    """Input rejected as a whole; errors maps field name to messages."""

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        super().__init__("The given data was invalid.")
