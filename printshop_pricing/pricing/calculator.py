"""
Calculator — price preview for operators and order-time quotes.

compute_preview() is a display projection of the config; it knows nothing
about what a customer picked. quote() prices one customer selection:

    unit  = base tier price + selected option modifiers + selected spec modifiers
    total = unit * quantity

Sums are done in Decimal so the result does not depend on selection order.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

from printshop_pricing.config import get_settings
from printshop_pricing.errors import UnknownIdentifier
from printshop_pricing.models.schemas import (
    BasePricingLine,
    OptionPricingLine,
    PreviewReport,
    PricingConfig,
    Quote,
    SpecificationPricingLine,
)
from printshop_pricing.utils.money import format_amount, format_delta, quantize, to_money

FREE_LABEL = "Free"


def compute_preview(config: PricingConfig, currency_symbol: Optional[str] = None) -> PreviewReport:
    """Project a config into display lines. Disabled options are left out."""
    symbol = currency_symbol if currency_symbol is not None else get_settings().currency_symbol

    base_pricing = [
        BasePricingLine(
            id=tier.id,
            name=tier.name,
            unit_price=quantize(to_money(tier.unit_price)),
            display=format_amount(tier.unit_price, symbol),
        )
        for tier in config.base_configurations
    ]

    options = [
        OptionPricingLine(
            id=opt.id,
            name=opt.name,
            is_default=opt.is_default,
            price_delta=quantize(to_money(opt.price_modifier)),
            display=format_delta(opt.price_modifier, symbol, free_label=FREE_LABEL),
        )
        for opt in config.options
        if opt.enabled
    ]

    specifications = [
        SpecificationPricingLine(
            id=spec.id,
            name=spec.name,
            price_delta=quantize(to_money(spec.price_modifier)),
            display=format_delta(spec.price_modifier, symbol),
        )
        for spec in config.custom_specifications
    ]

    return PreviewReport(
        base_pricing=base_pricing,
        options=options,
        custom_specifications=specifications,
    )


def _lookup(items: Iterable, ids: Iterable[str], collection: str) -> list:
    by_id = {item.id: item for item in items}
    selected = []
    for entity_id in ids:
        if entity_id not in by_id:
            raise UnknownIdentifier(collection, entity_id)
        selected.append(by_id[entity_id])
    return selected


def quote(
    config: PricingConfig,
    base_configuration_id: str,
    quantity: int,
    option_ids: Optional[Iterable[str]] = None,
    custom_specification_ids: Optional[Iterable[str]] = None,
) -> Quote:
    """
    Price a customer selection. When option_ids is None the config's
    enabled default options are used. Disabled options cannot be selected.
    """
    if quantity <= 0:
        raise ValueError(f"Quantity must be positive, got {quantity}")

    (tier,) = _lookup(config.base_configurations, [base_configuration_id], "base_configurations")

    if option_ids is None:
        options = config.default_options()
    else:
        # de-duplicate while keeping the caller's order
        options = _lookup(config.options, dict.fromkeys(option_ids), "options")
        disabled = [o.id for o in options if not o.enabled]
        if disabled:
            raise ValueError(f"Options not enabled: {', '.join(disabled)}")

    specifications = _lookup(
        config.custom_specifications,
        dict.fromkeys(custom_specification_ids or []),
        "custom_specifications",
    )

    unit_price = (
        to_money(tier.unit_price)
        + sum((to_money(o.price_modifier) for o in options), Decimal("0"))
        + sum((to_money(s.price_modifier) for s in specifications), Decimal("0"))
    )

    return Quote(
        base_configuration_id=tier.id,
        option_ids=[o.id for o in options],
        custom_specification_ids=[s.id for s in specifications],
        quantity=quantity,
        unit_price=unit_price,
        total=unit_price * quantity,
    )
