"""
Core Application - Infrastructure & Base Classes

Domain-agnostic building blocks shared by every app of the back office.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - UUIDPrimaryKeyMixin: UUID as primary key
    - TenantOwnedMixin: Tenant foreign key and tenant-scoped manager

Managers (import from core.managers):
    - TenantQuerySet: for_tenant(), active() and locked()

Services (import from core.services):
    - BaseService: Per-service logger and atomic() with store errors wrapped

Money (import from core.money):
    - to_money, is_settled, is_positive, clamp_non_negative, format_money
    - ZERO, CENT, EPSILON, MAX_AMOUNT

Dates (import from core.dates):
    - to_aware_datetime: Dates and naive datetimes to aware datetimes

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - ValidationError: Input validation failures
    - NotFoundError: Resource not found
    - DatabaseError: Store failures raised inside BaseService.atomic()

Validators (import from core.validators):
    - validate_positive_amount: Normalize and require a positive amount

Note:
    Django models and model mixins are NOT imported here to avoid
    AppRegistryNotReady errors. Import them directly from their modules.
"""

from .exceptions import BaseApplicationError, DatabaseError, NotFoundError, ValidationError
from .services import BaseService

__all__ = [
    "BaseService",
    "BaseApplicationError",
    "ValidationError",
    "NotFoundError",
    "DatabaseError",
]
