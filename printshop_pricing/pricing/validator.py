"""
Validator — save-time gating checks for a PricingConfig.

The three gating checks run in a fixed order and the first failure is
reported on its own. Strict mode (PRICING_STRICT_VALIDATION) adds
aggregated data-quality checks that only run once the gating checks pass.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Optional

from printshop_pricing.config import get_settings
from printshop_pricing.models.schemas import PricingConfig, ValidationResult

logger = logging.getLogger(__name__)

NO_BASE_CONFIGURATION = "At least one base configuration is required"
NO_OPTION = "At least one option is required"
NO_DEFAULT_OPTION = "At least one option must be set as default"


def _gating_reason(config: PricingConfig) -> Optional[str]:
    if not config.base_configurations:
        return NO_BASE_CONFIGURATION
    if not config.options:
        return NO_OPTION
    if not any(opt.enabled and opt.is_default for opt in config.options):
        return NO_DEFAULT_OPTION
    return None


def _strict_reasons(config: PricingConfig) -> list[str]:
    reasons: list[str] = []

    collections = {
        "base configuration": config.base_configurations,
        "option": config.options,
        "custom specification": config.custom_specifications,
    }
    for label, items in collections.items():
        counts = Counter(item.id for item in items)
        for entity_id, count in counts.items():
            if count > 1:
                reasons.append(f"Duplicate {label} id '{entity_id}'")
        for position, item in enumerate(items):
            if not item.name.strip():
                reasons.append(f"{label.capitalize()} #{position + 1} has no name")

    for tier in config.base_configurations:
        if tier.unit_price < 0:
            reasons.append(f"Base configuration '{tier.name}' has a negative unit price")

    return reasons


def validate(config: PricingConfig, strict: Optional[bool] = None) -> ValidationResult:
    """
    Check a config against the save-time rules.
    Returns ValidationResult(valid=False, reasons=[...]) on failure.
    """
    if strict is None:
        strict = get_settings().pricing_strict_validation

    reason = _gating_reason(config)
    if reason is not None:
        logger.debug(f"Pricing config rejected: {reason}")
        return ValidationResult(valid=False, reasons=[reason])

    if strict:
        reasons = _strict_reasons(config)
        if reasons:
            logger.debug(f"Pricing config rejected by strict checks: {reasons}")
            return ValidationResult(valid=False, reasons=reasons)

    return ValidationResult(valid=True, reasons=[])
