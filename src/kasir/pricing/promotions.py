from __future__ import annotations

from collections.abc import Iterable

import structlog

from ..catalog.loader import PromotionRule, PromotionType
from ..catalog.lookup import find_promotion_by_id
from ..currency import as_fraction, round_half_up
from ..models import InvoiceLine, PriceAdjustment, PricedInvoice, PricedLine
from .totals import compute_totals

log = structlog.get_logger(__name__)

DEFAULT_BULK_MIN_QUANTITY = 2


def adjust_price(rule: PromotionRule | None, quantity: int, base_price: int) -> PriceAdjustment:
    """Price one unit under a promotion for the given quantity.

    The result is computed fresh on every call because the bulk branch depends
    on the quantity currently in the cart. Unknown promotion types never raise;
    they price at the base price so a preview can always render.
    """
    if rule is None:
        return _identity(base_price)

    unit_price = base_price
    discount_per_unit = 0

    if rule.type == PromotionType.PERCENT_OFF:
        pct = as_fraction(rule.value or 0)
        unit_price = max(0, round_half_up(base_price * (100 - pct) / 100))
        discount_per_unit = max(0, base_price - unit_price)
    elif rule.type == PromotionType.FIXED_AMOUNT_OFF:
        unit_price = max(0, base_price - max(0, int(rule.value or 0)))
        discount_per_unit = base_price - unit_price
    elif rule.type == PromotionType.BULK_UNIT_PRICE:
        threshold = rule.min_quantity if rule.min_quantity and rule.min_quantity > 0 else DEFAULT_BULK_MIN_QUANTITY
        if quantity >= threshold:
            # value (nominal discount per unit) wins over bulk_unit_price when both are set
            if rule.value is not None:
                discount_per_unit = max(0, int(rule.value))
                unit_price = max(0, base_price - discount_per_unit)
            elif rule.bulk_unit_price is not None:
                unit_price = max(0, rule.bulk_unit_price)
                discount_per_unit = max(0, base_price - unit_price)
    else:
        log.warning("unknown_promotion_type", promotion_id=rule.id, promotion_type=str(rule.type))
        return _identity(base_price)

    return PriceAdjustment(
        unit_price=unit_price,
        discount_per_unit=discount_per_unit,
        total_discount=discount_per_unit * quantity,
        promotion_id=rule.id,
        promotion_name=rule.name or None,
        promotion_text=rule.promo_text or rule.code,
    )


def _identity(base_price: int) -> PriceAdjustment:
    return PriceAdjustment(unit_price=base_price, discount_per_unit=0, total_discount=0)


def price_line(line: InvoiceLine, rule: PromotionRule | None) -> PricedLine:
    adjustment = adjust_price(rule, line.quantity, line.unit_price)
    return PricedLine(
        label=line.label,
        quantity=line.quantity,
        original_price=line.unit_price,
        unit_price=adjustment.unit_price,
        line_total=adjustment.unit_price * line.quantity,
        adjustment=adjustment,
    )


def price_invoice(
    lines: Iterable[InvoiceLine],
    promotions: Iterable[PromotionRule],
    *,
    currency_prefix: str | None = None,
) -> PricedInvoice:
    catalog = list(promotions)
    priced: list[PricedLine] = []
    for line in lines:
        rule = find_promotion_by_id(line.applied_promotion_id, catalog)
        if rule is None and line.applied_promotion_id:
            log.debug("promotion_unresolved", promotion_id=line.applied_promotion_id, label=line.label)
        priced.append(price_line(line, rule))

    return PricedInvoice(
        lines=priced,
        totals=compute_totals(priced, formatted=True, prefix=currency_prefix),
        total_discount=sum(p.adjustment.total_discount for p in priced),
    )
