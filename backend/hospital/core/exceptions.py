"""
Custom exceptions for the application.

Services raise these; ``core/error_handlers.py`` turns them into HTTP
responses with the uniform error body.
"""

from typing import Optional


class EntityNotFoundError(Exception):
    """
    Raised when a referenced entity id (or natural key) does not exist.
    Mapped to HTTP 404.
    """

    def __init__(self, entity_name: str, entity_id: Optional[object] = None):
        if entity_id is None:
            message = entity_name
        else:
            message = f"{entity_name} não encontrado(a) com ID: {entity_id}"
        super().__init__(message)
        self.message = message
        self.entity_name = entity_name
        self.entity_id = entity_id


class BusinessRuleError(Exception):
    """
    Raised when a status, ordering, uniqueness or referential guard fails.
    Mapped to HTTP 400.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
