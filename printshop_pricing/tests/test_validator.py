"""
Tests: Save-time validation rules.

Run with:
    pytest printshop_pricing/tests/test_validator.py -v
"""

import pytest

from printshop_pricing.config import get_settings
from printshop_pricing.models.schemas import (
    AgentService,
    BaseConfiguration,
    CustomSpecification,
    PricingConfig,
    PricingOption,
)
from printshop_pricing.pricing import scaffold, validate
from printshop_pricing.pricing.validator import (
    NO_BASE_CONFIGURATION,
    NO_DEFAULT_OPTION,
    NO_OPTION,
)


def _tier(tier_id: str = "a4", price: float = 0.6) -> BaseConfiguration:
    return BaseConfiguration(id=tier_id, name=tier_id.upper(), unit_price=price)


def _option(option_id: str = "bw", enabled: bool = True, default: bool = True) -> PricingOption:
    return PricingOption(id=option_id, name=option_id, enabled=enabled, is_default=default)


class TestGatingChecks:
    def test_scaffold_output_is_valid(self):
        result = validate(scaffold(AgentService(id="svc", supports_color=True)))
        assert result.valid
        assert result.reasons == []

    @pytest.mark.parametrize(
        "options",
        [[], [_option()], [_option(default=False)], [_option(enabled=False)]],
    )
    def test_empty_base_configurations_always_reported_first(self, options):
        result = validate(PricingConfig(base_configurations=[], options=options))
        assert not result.valid
        assert result.reasons == [NO_BASE_CONFIGURATION]

    def test_empty_options(self):
        result = validate(PricingConfig(base_configurations=[_tier()], options=[]))
        assert result.reasons == [NO_OPTION]

    def test_enabled_but_not_default(self):
        result = validate(PricingConfig(base_configurations=[_tier()], options=[_option(default=False)]))
        assert result.reasons == [NO_DEFAULT_OPTION]
        assert result.first_reason == NO_DEFAULT_OPTION

    def test_default_but_disabled_does_not_count(self):
        config = PricingConfig(
            base_configurations=[_tier()],
            options=[_option("bw", enabled=False, default=True), _option("color", default=False)],
        )
        assert validate(config).reasons == [NO_DEFAULT_OPTION]

    def test_one_enabled_default_among_many(self):
        config = PricingConfig(
            base_configurations=[_tier()],
            options=[_option("bw", default=False), _option("color", default=True)],
        )
        assert validate(config).valid

    def test_lenient_by_default(self):
        # duplicate ids and negative prices pass unless strict mode is on
        config = PricingConfig(
            base_configurations=[_tier("a4", -1.0), _tier("a4")],
            options=[_option()],
        )
        assert validate(config, strict=False).valid


class TestStrictChecks:
    def _messy(self) -> PricingConfig:
        return PricingConfig(
            base_configurations=[_tier("a4", -0.5), _tier("a4")],
            options=[_option(), PricingOption(id="blank", name="  ")],
            custom_specifications=[CustomSpecification(id="lam", name="Lamination")],
        )

    def test_strict_reports_all_problems(self):
        result = validate(self._messy(), strict=True)

        assert not result.valid
        assert "Duplicate base configuration id 'a4'" in result.reasons
        assert "Option #2 has no name" in result.reasons
        assert "Base configuration 'A4' has a negative unit price" in result.reasons
        assert len(result.reasons) == 3

    def test_gating_checks_still_run_first(self):
        config = PricingConfig(base_configurations=[], options=[PricingOption(id="x", name="")])
        assert validate(config, strict=True).reasons == [NO_BASE_CONFIGURATION]

    def test_strict_mode_from_settings(self, monkeypatch):
        monkeypatch.setenv("PRICING_STRICT_VALIDATION", "true")
        get_settings.cache_clear()
        try:
            assert not validate(self._messy()).valid
        finally:
            monkeypatch.delenv("PRICING_STRICT_VALIDATION")
            get_settings.cache_clear()
