"""
Pricing engine — the single boundary the API and CLI use.

    from printshop_pricing.pricing import scaffold, validate, compute_preview, PricingLifecycle
"""

from .scaffold import scaffold, needs_scaffold, default_pricing_config
from .validator import validate
from .calculator import compute_preview, quote
from .lifecycle import PricingLifecycle, lifecycle_state
from .mutations import (
    add_base_configuration,
    update_base_configuration,
    remove_base_configuration,
    index_of_base_configuration,
    add_option,
    update_option,
    remove_option,
    index_of_option,
    add_custom_specification,
    update_custom_specification,
    remove_custom_specification,
    index_of_custom_specification,
    new_base_configuration,
    new_option,
    new_custom_specification,
)

__all__ = [
    "scaffold",
    "needs_scaffold",
    "default_pricing_config",
    "validate",
    "compute_preview",
    "quote",
    "PricingLifecycle",
    "lifecycle_state",
    "add_base_configuration",
    "update_base_configuration",
    "remove_base_configuration",
    "index_of_base_configuration",
    "add_option",
    "update_option",
    "remove_option",
    "index_of_option",
    "add_custom_specification",
    "update_custom_specification",
    "remove_custom_specification",
    "index_of_custom_specification",
    "new_base_configuration",
    "new_option",
    "new_custom_specification",
]
