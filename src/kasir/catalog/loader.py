from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import structlog
import yaml

from ..currency import parse_idr

log = structlog.get_logger(__name__)


class PromotionType(str, Enum):
    PERCENT_OFF = "by%"
    FIXED_AMOUNT_OFF = "discount"
    BULK_UNIT_PRICE = "buy2"


class SurchargeKind(str, Enum):
    PERCENT = "percent"
    FIXED = "fixed"


_PROMOTION_TAGS: dict[str, PromotionType] = {
    "by%": PromotionType.PERCENT_OFF,
    "percent": PromotionType.PERCENT_OFF,
    "percentoff": PromotionType.PERCENT_OFF,
    "discount": PromotionType.FIXED_AMOUNT_OFF,
    "fixed": PromotionType.FIXED_AMOUNT_OFF,
    "fixedamountoff": PromotionType.FIXED_AMOUNT_OFF,
    "buy2": PromotionType.BULK_UNIT_PRICE,
    "bulk": PromotionType.BULK_UNIT_PRICE,
    "bulkunitprice": PromotionType.BULK_UNIT_PRICE,
}


@dataclass(frozen=True, slots=True)
class PromotionRule:
    id: str
    name: str
    type: PromotionType | str
    value: float | None = None
    min_quantity: int | None = None
    bulk_unit_price: int | None = None
    promo_text: str | None = None
    code: str | None = None
    active: bool = True


@dataclass(frozen=True, slots=True)
class Surcharge:
    kind: SurchargeKind
    value: float


@dataclass(frozen=True, slots=True)
class PaymentMethod:
    id: str
    label: str
    surcharge: Surcharge | None = None
    enabled: bool = True


DEFAULT_PAYMENT_METHODS: tuple[PaymentMethod, ...] = (
    PaymentMethod(id="master_visa", label="Master Visa", surcharge=Surcharge(SurchargeKind.PERCENT, 2)),
    PaymentMethod(id="bca_card", label="BCA CARD", surcharge=Surcharge(SurchargeKind.PERCENT, 1)),
)


@dataclass(frozen=True, slots=True)
class Catalog:
    promotions: list[PromotionRule] = field(default_factory=list)
    payment_methods: list[PaymentMethod] = field(default_factory=lambda: list(DEFAULT_PAYMENT_METHODS))

    @classmethod
    def default(cls) -> "Catalog":
        return cls()

    @classmethod
    def load_from_dir(cls, catalog_dir: Path) -> "Catalog":
        promotions = _load_yaml(catalog_dir / "promotions.yml")
        methods = _load_yaml(catalog_dir / "payment_methods.yml")

        catalog = cls(
            promotions=[normalize_promotion(p) for p in ((promotions or {}).get("promotions") or [])],
            payment_methods=[
                normalize_payment_method(m) for m in ((methods or {}).get("payment_methods") or [])
            ],
        )
        log.info(
            "catalog_loaded",
            catalog_dir=str(catalog_dir),
            promotions=len(catalog.promotions),
            payment_methods=len(catalog.payment_methods),
        )
        return catalog


def normalize_promotion(raw: Mapping) -> PromotionRule:
    """Map a stored promotion record, including legacy field names, onto a PromotionRule."""
    raw_type = raw.get("type")
    tag = str(raw_type).strip() if raw_type is not None else ""
    promo_type: PromotionType | str = _PROMOTION_TAGS.get(tag.lower().replace("_", ""), tag)

    value = _number(raw.get("value"))
    if value is None:
        value = _number(raw.get("discount"))

    min_quantity = _number(_first(raw, "minQty", "min_quantity"))
    bulk_price = _number(_first(raw, "price", "bulk_unit_price", "bulkUnitPrice"))

    code = _first(raw, "code", "Code")
    promo_text = _first(raw, "promoText", "promo_text") or code
    active = raw.get("active")

    return PromotionRule(
        id=str(raw.get("id", "")),
        name=str(_first(raw, "name", "Name") or ""),
        type=promo_type,
        value=value,
        min_quantity=int(min_quantity) if min_quantity is not None else None,
        bulk_unit_price=int(bulk_price) if bulk_price is not None else None,
        promo_text=str(promo_text) if promo_text else None,
        code=str(code) if code else None,
        active=active if isinstance(active, bool) else True,
    )


def normalize_payment_method(raw: Mapping | str) -> PaymentMethod:
    if isinstance(raw, str):
        return PaymentMethod(id=raw, label=raw)

    method_id = str(raw["id"])
    surcharge = None
    raw_surcharge = raw.get("surcharge")
    if isinstance(raw_surcharge, Mapping):
        kind = str(_first(raw_surcharge, "kind", "type") or "").strip().lower()
        value = _number(raw_surcharge.get("value"))
        if kind in {k.value for k in SurchargeKind} and value is not None:
            surcharge = Surcharge(kind=SurchargeKind(kind), value=value)

    enabled = raw.get("enabled")
    return PaymentMethod(
        id=method_id,
        label=str(raw.get("label") or method_id),
        surcharge=surcharge,
        enabled=enabled if isinstance(enabled, bool) else True,
    )


def _number(value: object) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return float(value)
        except ValueError:
            return parse_idr(value)
    return None


def _load_yaml(path: Path) -> dict | None:
    if not path.exists():
        raise FileNotFoundError(str(path))
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ValueError(f"Expected a YAML mapping at {path}, got {type(data).__name__}.")
    return data


def _first(raw: Mapping, *keys: str) -> object:
    """First non-null value among ``keys``; stored records mix camelCase and snake_case."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None
