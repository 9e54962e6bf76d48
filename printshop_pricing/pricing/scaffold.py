"""
Scaffold — initial pricing config for a service that has none yet.

Bond paper services get the A-series size ladder; everything else gets a
single standard tier plus a custom tier, both at zero so the operator fills
in prices. Baseline options are always present; capability flags on the
service add one priced option each.
"""

from __future__ import annotations

import logging

from printshop_pricing.models.enums import BaseConfigurationType
from printshop_pricing.models.schemas import (
    AgentService,
    BaseConfiguration,
    PricingConfig,
    PricingOption,
)

logger = logging.getLogger(__name__)

BOND_PAPER_MARKER = "bond paper"

PRESET = BaseConfigurationType.PRESET
CUSTOM = BaseConfigurationType.CUSTOM

# (id, name, type, unit price)
BOND_PAPER_TIERS = [
    ("a6", "A6", PRESET, 0.40),
    ("a5", "A5", PRESET, 0.50),
    ("a4", "A4", PRESET, 0.60),
    ("a3", "A3", PRESET, 0.80),
    ("custom", "Custom Size", CUSTOM, 1.00),
]

GENERIC_TIERS = [
    ("standard", "Standard Size", PRESET, 0.0),
    ("custom", "Custom Size", CUSTOM, 0.0),
]

# (id, name); always enabled, default and free
BASELINE_OPTIONS = [
    ("black_white", "Black & White"),
    ("front_only", "Front Only"),
]

# (capability flag on AgentService, id, name, per-unit modifier)
CAPABILITY_OPTIONS = [
    ("supports_color", "color", "Color", 0.25),
    ("supports_front_back", "front_back", "Front & Back", 0.10),
    ("supports_print_cut", "print_cut", "Print & Cut", 0.15),
]


def is_bond_paper(service: AgentService) -> bool:
    sub_category = service.sub_category
    if sub_category is None or not sub_category.name:
        return False
    return BOND_PAPER_MARKER in sub_category.name.lower()


def needs_scaffold(service: AgentService) -> bool:
    """True when the service has no pricing config or one missing tiers or options."""
    config = service.pricing_config
    return config is None or not config.is_structurally_complete()


def default_pricing_config(service: AgentService) -> PricingConfig:
    """Build a fresh config from the service's sub-category and capability flags."""
    tiers = BOND_PAPER_TIERS if is_bond_paper(service) else GENERIC_TIERS

    base_configurations = [
        BaseConfiguration(id=tier_id, name=name, type=tier_type, unit_price=price)
        for tier_id, name, tier_type, price in tiers
    ]

    options = [
        PricingOption(id=option_id, name=name, enabled=True, is_default=True, price_modifier=0.0)
        for option_id, name in BASELINE_OPTIONS
    ]
    for flag, option_id, name, modifier in CAPABILITY_OPTIONS:
        if getattr(service, flag):
            options.append(
                PricingOption(
                    id=option_id,
                    name=name,
                    enabled=True,
                    is_default=False,
                    price_modifier=modifier,
                )
            )

    return PricingConfig(
        base_configurations=base_configurations,
        options=options,
        custom_specifications=[],
    )


def scaffold(service: AgentService) -> PricingConfig:
    """
    Return the service's existing config when it is structurally complete,
    otherwise a generated default. Operator work is never overwritten.
    """
    if not needs_scaffold(service):
        return service.pricing_config  # type: ignore[return-value]

    config = default_pricing_config(service)
    logger.info(
        f"Scaffolded pricing config for {service.id}: "
        f"{len(config.base_configurations)} tiers, {len(config.options)} options"
    )
    return config
