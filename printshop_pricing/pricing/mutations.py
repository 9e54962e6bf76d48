"""
Mutations — pure add / update / remove operations over a PricingConfig.

Every function returns a new PricingConfig and leaves its input untouched.
Mutations never validate; the validator decides whether a config can be
saved. The one rule enforced here is default exclusivity on options:
marking an option default clears the flag on every other option.
"""

from __future__ import annotations

import uuid
from typing import Any, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from printshop_pricing.errors import OutOfRange, UnknownField, UnknownIdentifier
from printshop_pricing.models.enums import BaseConfigurationType, PricingCollection
from printshop_pricing.models.schemas import (
    BaseConfiguration,
    CustomSpecification,
    PricingConfig,
    PricingOption,
)

# collection -> (attribute on PricingConfig, entity class, id prefix)
COLLECTIONS: dict[PricingCollection, tuple[str, type[BaseModel], str]] = {
    PricingCollection.BASE_CONFIGURATIONS: ("base_configurations", BaseConfiguration, "config"),
    PricingCollection.OPTIONS: ("options", PricingOption, "option"),
    PricingCollection.CUSTOM_SPECIFICATIONS: ("custom_specifications", CustomSpecification, "spec"),
}


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


# ── Constructors (fresh identifiers) ─────────────────────


def new_base_configuration(
    name: str,
    type: BaseConfigurationType = BaseConfigurationType.PRESET,
    unit_price: float = 0.0,
    custom_value: Optional[str] = None,
) -> BaseConfiguration:
    """A new tier. custom_value is kept only for CUSTOM tiers and blank becomes None."""
    if type == BaseConfigurationType.CUSTOM:
        custom_value = (custom_value or "").strip() or None
    else:
        custom_value = None
    return BaseConfiguration(
        id=new_id("config"),
        name=name.strip(),
        type=type,
        unit_price=unit_price,
        custom_value=custom_value,
    )


def new_option(
    name: str,
    enabled: bool = True,
    is_default: bool = False,
    price_modifier: float = 0.0,
) -> PricingOption:
    return PricingOption(
        id=new_id("option"),
        name=name.strip(),
        enabled=enabled,
        is_default=is_default,
        price_modifier=price_modifier,
    )


def new_custom_specification(name: str, price_modifier: float = 0.0) -> CustomSpecification:
    return CustomSpecification(id=new_id("spec"), name=name.strip(), price_modifier=price_modifier)


# ── Internals ────────────────────────────────────────────


def _items(config: PricingConfig, attr: str) -> list[Any]:
    return list(getattr(config, attr))


def _with(config: PricingConfig, attr: str, items: list[Any]) -> PricingConfig:
    return config.model_copy(update={attr: items})


def _check_index(attr: str, items: list[Any], index: int) -> None:
    # Negative indices are rejected rather than counted from the end
    if not 0 <= index < len(items):
        raise OutOfRange(attr, index, len(items))


def _merge(entity: BaseModel, changes: dict[str, Any]) -> BaseModel:
    """Apply a partial field set (python names or wire aliases) and re-validate."""
    model_cls = type(entity)
    fields = model_cls.model_fields
    aliases = {to_camel(name): name for name in fields}
    aliases.update({info.alias: name for name, info in fields.items() if info.alias})

    normalized: dict[str, Any] = {}
    unknown: list[str] = []
    for key, value in changes.items():
        name = key if key in fields else aliases.get(key)
        if name is None:
            unknown.append(key)
        else:
            normalized[name] = value
    if unknown:
        raise UnknownField(model_cls.__name__, unknown)
    if "id" in normalized and normalized["id"] != getattr(entity, "id"):
        raise ValueError(f"{model_cls.__name__} id is immutable")

    data = entity.model_dump()
    data.update(normalized)
    return model_cls.model_validate(data)


def _clear_defaults(options: list[PricingOption], keep: int) -> list[PricingOption]:
    return [
        opt if i == keep or not opt.is_default else opt.model_copy(update={"is_default": False})
        for i, opt in enumerate(options)
    ]


def _add(config: PricingConfig, attr: str, entity: BaseModel) -> PricingConfig:
    items = _items(config, attr)
    items.append(entity)
    return _with(config, attr, items)


def _update(config: PricingConfig, attr: str, index: int, changes: dict[str, Any]) -> PricingConfig:
    items = _items(config, attr)
    _check_index(attr, items, index)
    items[index] = _merge(items[index], changes)
    return _with(config, attr, items)


def _remove(config: PricingConfig, attr: str, index: int) -> PricingConfig:
    items = _items(config, attr)
    _check_index(attr, items, index)
    del items[index]
    return _with(config, attr, items)


def _index_of(config: PricingConfig, attr: str, entity_id: str) -> int:
    for i, entity in enumerate(getattr(config, attr)):
        if entity.id == entity_id:
            return i
    raise UnknownIdentifier(attr, entity_id)


# ── Base configurations ──────────────────────────────────


def add_base_configuration(config: PricingConfig, entity: BaseConfiguration) -> PricingConfig:
    return _add(config, "base_configurations", entity)


def update_base_configuration(config: PricingConfig, index: int, **changes: Any) -> PricingConfig:
    return _update(config, "base_configurations", index, changes)


def remove_base_configuration(config: PricingConfig, index: int) -> PricingConfig:
    return _remove(config, "base_configurations", index)


def index_of_base_configuration(config: PricingConfig, entity_id: str) -> int:
    return _index_of(config, "base_configurations", entity_id)


# ── Options ──────────────────────────────────────────────


def add_option(config: PricingConfig, entity: PricingOption) -> PricingConfig:
    """Append an option; if it is a default, every earlier option loses its default."""
    items = _items(config, "options")
    if entity.is_default:
        items = _clear_defaults(items, keep=-1)
    items.append(entity)
    return _with(config, "options", items)


def update_option(config: PricingConfig, index: int, **changes: Any) -> PricingConfig:
    updated = _update(config, "options", index, changes)
    if updated.options[index].is_default and _touches_default(changes):
        updated = _with(updated, "options", _clear_defaults(updated.options, keep=index))
    return updated


def _touches_default(changes: dict[str, Any]) -> bool:
    # the merged option carries the coerced value
    return any(key in changes for key in ("is_default", "isDefault", "default"))


def remove_option(config: PricingConfig, index: int) -> PricingConfig:
    return _remove(config, "options", index)


def index_of_option(config: PricingConfig, entity_id: str) -> int:
    return _index_of(config, "options", entity_id)


# ── Custom specifications ────────────────────────────────


def add_custom_specification(config: PricingConfig, entity: CustomSpecification) -> PricingConfig:
    return _add(config, "custom_specifications", entity)


def update_custom_specification(config: PricingConfig, index: int, **changes: Any) -> PricingConfig:
    return _update(config, "custom_specifications", index, changes)


def remove_custom_specification(config: PricingConfig, index: int) -> PricingConfig:
    return _remove(config, "custom_specifications", index)


def index_of_custom_specification(config: PricingConfig, entity_id: str) -> int:
    return _index_of(config, "custom_specifications", entity_id)


# ── Collection-addressed dispatch (used by the HTTP layer) ──


def build_entity(collection: PricingCollection, data: dict[str, Any]) -> BaseModel:
    """Validate a new entity from wire data, assigning a fresh id."""
    _, model_cls, prefix = COLLECTIONS[collection]
    payload = {k: v for k, v in data.items() if k != "id"}
    if model_cls is BaseConfiguration:
        entity = model_cls.model_validate({"id": "", "name": "", **payload})
        return new_base_configuration(
            name=entity.name,
            type=entity.type,
            unit_price=entity.unit_price,
            custom_value=entity.custom_value,
        )
    entity = model_cls.model_validate({"id": new_id(prefix), "name": "", **payload})
    return entity.model_copy(update={"name": entity.name.strip()})


def add_entity(config: PricingConfig, collection: PricingCollection, entity: BaseModel) -> PricingConfig:
    if collection == PricingCollection.OPTIONS:
        return add_option(config, entity)  # type: ignore[arg-type]
    return _add(config, COLLECTIONS[collection][0], entity)


def update_entity(
    config: PricingConfig,
    collection: PricingCollection,
    index: int,
    changes: dict[str, Any],
) -> PricingConfig:
    if collection == PricingCollection.OPTIONS:
        return update_option(config, index, **changes)
    return _update(config, COLLECTIONS[collection][0], index, changes)


def remove_entity(config: PricingConfig, collection: PricingCollection, index: int) -> PricingConfig:
    return _remove(config, COLLECTIONS[collection][0], index)
