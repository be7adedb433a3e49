from __future__ import annotations

from collections.abc import Iterable

from .loader import DEFAULT_PAYMENT_METHODS, PaymentMethod, PromotionRule


def find_promotion_by_id(promotion_id: str | None, promotions: Iterable[PromotionRule]) -> PromotionRule | None:
    if not promotion_id:
        return None
    wanted = str(promotion_id)
    for promo in promotions:
        if promo.id == wanted:
            return promo
    return None


def find_promotion_by_name(query: str | None, promotions: Iterable[PromotionRule]) -> PromotionRule | None:
    """Exact name first, then partial name, then promo text or code. Case-insensitive."""
    if not query:
        return None
    q = query.strip().casefold()
    if not q:
        return None
    active = [p for p in promotions if p.active]

    for promo in active:
        if promo.name.casefold() == q:
            return promo
    for promo in active:
        if q in promo.name.casefold():
            return promo
    for promo in active:
        if q in (promo.promo_text or "").casefold() or q in (promo.code or "").casefold():
            return promo
    return None


def find_method_by_id(
    method_id: str | None, methods: Iterable[PaymentMethod] = DEFAULT_PAYMENT_METHODS
) -> PaymentMethod | None:
    if not method_id:
        return None
    for method in methods:
        if method.id == method_id:
            return method
    return None
