"""
Errors raised by the pricing engine.

ValidationFailure, PersistenceFailure and ActivationFailure are outcomes a
caller is expected to handle. OutOfRange, UnknownIdentifier and UnknownField
are programmer errors and are never folded into a ValidationFailure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from printshop_pricing.models.enums import ServiceState

if TYPE_CHECKING:
    from printshop_pricing.models.schemas import PricingConfig


class PricingError(Exception):
    """Base class for pricing lifecycle failures."""


class ValidationFailure(PricingError):
    """The config failed one or more gating checks. Nothing was persisted."""

    def __init__(self, reasons: list[str]):
        self.reasons = list(reasons)
        super().__init__("; ".join(self.reasons) or "Invalid pricing configuration")


class PersistenceFailure(PricingError):
    """Saving the config failed. The service is unchanged."""

    def __init__(self, service_id: str, reason: str):
        self.service_id = service_id
        self.reason = reason
        super().__init__(f"Failed to save pricing configuration for {service_id}: {reason}")


class ActivationFailure(PricingError):
    """The config was saved but the service could not be activated; a draft now exists."""

    state = ServiceState.DRAFT

    def __init__(self, service_id: str, reason: str, config: "PricingConfig"):
        self.service_id = service_id
        self.reason = reason
        self.config = config
        super().__init__(
            f"Pricing configuration for {service_id} was saved as a draft "
            f"but activation failed: {reason}"
        )


class StoreError(Exception):
    """Raised by store backends when a read or write does not go through."""


class OutOfRange(IndexError):
    """Index does not address an entity in the collection."""

    def __init__(self, collection: str, index: int, size: int):
        self.collection = collection
        self.index = index
        self.size = size
        super().__init__(f"{collection} index {index} out of range (size {size})")


class UnknownIdentifier(KeyError):
    """No entity with the given identifier exists in the collection."""

    def __init__(self, collection: str, entity_id: str):
        self.collection = collection
        self.entity_id = entity_id
        super().__init__(f"{collection} has no entry with id '{entity_id}'")

    def __str__(self) -> str:
        return self.args[0]


class UnknownField(AttributeError):
    """An update named a field the entity does not have."""

    def __init__(self, entity: str, fields: list[str]):
        self.entity = entity
        self.fields = fields
        super().__init__(f"{entity} has no field(s): {', '.join(fields)}")
