from enum import Enum


class BaseConfigurationType(str, Enum):
    PRESET = "PRESET"
    CUSTOM = "CUSTOM"


class ServiceState(str, Enum):
    """Pricing lifecycle of an agent service."""
    UNCONFIGURED = "UNCONFIGURED"
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"


class PricingCollection(str, Enum):
    """The three ordered collections of a pricing config, as addressed over HTTP."""
    BASE_CONFIGURATIONS = "base-configurations"
    OPTIONS = "options"
    CUSTOM_SPECIFICATIONS = "custom-specifications"


class SubCategoryPricingType(str, Enum):
    AREA_BASED = "AREA_BASED"
    UNIT_ONLY = "UNIT_ONLY"
    AREA_FEET = "AREA_FEET"
    AREA_INCH = "AREA_INCH"
    MIXED = "MIXED"
    CUSTOM_QUOTE = "CUSTOM_QUOTE"
