from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from zoneinfo import ZoneInfo

from .bulk.plan import build_print_plan
from .bulk.sampling import SampleResult
from .bulk.timestamps import random_time_between, random_times
from .catalog.loader import Catalog, PromotionRule
from .catalog.lookup import find_method_by_id, find_promotion_by_id, find_promotion_by_name
from .config import EngineSettings
from .logs import configure_logging
from .models import (
    BulkPrintPlan,
    InvoiceLine,
    PaymentEntry,
    PaymentQuote,
    PriceAdjustment,
    PricedInvoice,
    SettlementResult,
)
from .payments.settlement import settle_payments
from .payments.surcharge import quote_payment
from .pricing.promotions import adjust_price, price_invoice


@dataclass(frozen=True, slots=True)
class InvoiceEngine:
    catalog: Catalog = field(default_factory=Catalog.default)
    settings: EngineSettings = field(default_factory=EngineSettings)

    @classmethod
    def from_settings(cls, settings: EngineSettings | None = None) -> "InvoiceEngine":
        settings = settings or EngineSettings.from_env()
        configure_logging(settings.log_level, json=settings.log_json)
        if settings.catalog_dir is not None and settings.catalog_dir.is_dir():
            catalog = Catalog.load_from_dir(settings.catalog_dir)
        else:
            catalog = Catalog.default()
        return cls(catalog=catalog, settings=settings)

    def promotion(self, promotion_id: str | None = None, *, name: str | None = None) -> PromotionRule | None:
        if promotion_id:
            return find_promotion_by_id(promotion_id, self.catalog.promotions)
        return find_promotion_by_name(name, self.catalog.promotions)

    def adjust(self, promotion_id: str | None, quantity: int, base_price: int) -> PriceAdjustment:
        return adjust_price(self.promotion(promotion_id), quantity, base_price)

    def price_invoice(self, lines: Iterable[InvoiceLine]) -> PricedInvoice:
        return price_invoice(
            lines,
            self.catalog.promotions,
            currency_prefix=self.settings.currency_prefix or None,
        )

    def quote(self, due: int, method_id: str | None) -> PaymentQuote:
        return quote_payment(due, find_method_by_id(method_id, self.catalog.payment_methods))

    def settle(self, due: int, entries: Iterable[PaymentEntry]) -> SettlementResult:
        return settle_payments(due, entries, self.catalog.payment_methods)

    def random_time(
        self,
        *,
        day: date | None = None,
        rng: random.Random | None = None,
    ) -> datetime:
        s = self.settings
        return random_time_between(s.day_start, s.day_end, day=day, tz=s.timezone, rng=rng)

    def random_times(
        self,
        count: int,
        *,
        unique: bool = False,
        sort: str | None = None,
        as_string: bool = False,
        day: date | None = None,
        rng: random.Random | None = None,
    ) -> SampleResult:
        s = self.settings
        return random_times(
            s.day_start,
            s.day_end,
            count=count,
            unique=unique,
            sort=sort,
            as_string=as_string,
            day=day,
            tz=s.timezone,
            rng=rng,
        )

    def plan_mass_print(
        self,
        base_invoice: str,
        base_date: datetime,
        count: int,
        due: int,
        *,
        include_cash: bool = True,
        unique_payments: bool = True,
        rng: random.Random | None = None,
    ) -> BulkPrintPlan:
        s = self.settings
        if base_date.tzinfo is None:
            base_date = base_date.replace(tzinfo=ZoneInfo(s.timezone))
        return build_print_plan(
            base_invoice,
            base_date,
            count,
            due,
            methods=[m for m in self.catalog.payment_methods if m.enabled],
            include_cash=include_cash,
            cash_rounding_step=s.cash_rounding_step,
            unique_payments=unique_payments,
            start=s.day_start,
            end=s.day_end,
            min_increment_seconds=s.min_increment_seconds,
            max_increment_seconds=s.max_increment_seconds,
            rng=rng,
        )
