"""
Data schemas for the pricing engine.

Entities (BaseConfiguration, PricingOption, CustomSpecification) are owned by
a PricingConfig, which is in turn owned by one AgentService. Field names are
snake_case in Python and camelCase on the wire; both are accepted on input.
Amounts are floats on the wire; arithmetic converts them to Decimal.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .enums import BaseConfigurationType, ServiceState, SubCategoryPricingType


class WireModel(BaseModel):
    """Base for records exchanged with the console API (camelCase aliases)."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# ── Pricing entities ─────────────────────────────────────


class BaseConfiguration(WireModel):
    """A mutually exclusive pricing tier, e.g. a paper size."""
    id: str
    name: str
    type: BaseConfigurationType = BaseConfigurationType.PRESET
    unit_price: float = 0.0  # per billable unit (page, sheet, ...)
    custom_value: Optional[str] = None  # only meaningful for CUSTOM tiers


class PricingOption(WireModel):
    """A togglable production attribute, e.g. color vs black & white."""
    id: str
    name: str
    enabled: bool = True
    is_default: bool = Field(default=False, alias="default")
    price_modifier: float = 0.0  # signed per-unit delta


class CustomSpecification(WireModel):
    """An independent additive extra, e.g. lamination."""
    id: str
    name: str
    price_modifier: float = 0.0


REQUIRED_COLLECTIONS = frozenset({"base_configurations", "options"})
COLLECTION_KEYS = frozenset(
    key
    for name in ("base_configurations", "options", "custom_specifications")
    for key in (name, to_camel(name))
)


class PricingConfig(WireModel):
    """Aggregate root. List order is display order only."""
    base_configurations: list[BaseConfiguration] = Field(default_factory=list)
    options: list[PricingOption] = Field(default_factory=list)
    custom_specifications: list[CustomSpecification] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _drop_null_collections(cls, data: Any) -> Any:
        # a null collection is treated as absent and falls back to the empty default
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if not (k in COLLECTION_KEYS and v is None)}
        return data

    def is_structurally_complete(self) -> bool:
        """Both required collections were supplied. Empty lists still count as supplied."""
        return REQUIRED_COLLECTIONS <= self.model_fields_set

    def default_options(self) -> list[PricingOption]:
        return [o for o in self.options if o.enabled and o.is_default]


# ── Agent service projection ─────────────────────────────


class ServiceCategory(WireModel):
    id: str = ""
    name: str = ""


class ServiceSubCategory(WireModel):
    id: str = ""
    category_id: str = ""
    name: str = ""
    pricing_type: Optional[SubCategoryPricingType] = None


class AgentService(WireModel):
    """The offering being priced. Referenced by the engine, never owned by it."""
    id: str
    branch_id: str = ""
    is_active: bool = False
    supports_color: bool = False
    supports_front_back: bool = False
    supports_print_cut: bool = False
    supports_front_only: bool = False
    category: Optional[ServiceCategory] = None
    sub_category: Optional[ServiceSubCategory] = None
    pricing_config: Optional[PricingConfig] = None


# ── Engine results ───────────────────────────────────────


class ValidationResult(WireModel):
    valid: bool = True
    reasons: list[str] = []

    @property
    def first_reason(self) -> str:
        return self.reasons[0] if self.reasons else ""


class BasePricingLine(WireModel):
    id: str
    name: str
    unit_price: Decimal
    display: str


class OptionPricingLine(WireModel):
    id: str
    name: str
    is_default: bool
    price_delta: Decimal
    display: str


class SpecificationPricingLine(WireModel):
    id: str
    name: str
    price_delta: Decimal
    display: str


class PreviewReport(WireModel):
    """Read-only projection of a pricing config for display."""
    base_pricing: list[BasePricingLine] = []
    options: list[OptionPricingLine] = []
    custom_specifications: list[SpecificationPricingLine] = []


class Quote(WireModel):
    """Order-time price for one customer selection."""
    base_configuration_id: str
    option_ids: list[str] = []
    custom_specification_ids: list[str] = []
    quantity: int
    unit_price: Decimal
    total: Decimal


class SaveOutcome(WireModel):
    service_id: str
    state: ServiceState
    config: PricingConfig
    message: str = ""
