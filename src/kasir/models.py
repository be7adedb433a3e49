from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class InvoiceLine(BaseModel):
    label: str
    quantity: int = Field(gt=0)
    unit_price: int = Field(ge=0)
    applied_promotion_id: str | None = None
    applied_promotion_name: str | None = None


class PriceAdjustment(BaseModel):
    unit_price: int = Field(ge=0)
    discount_per_unit: int = Field(ge=0)
    total_discount: int = Field(ge=0)
    promotion_id: str | None = None
    promotion_name: str | None = None
    promotion_text: str | None = None


class PricedLine(BaseModel):
    label: str
    quantity: int = Field(gt=0)
    original_price: int = Field(ge=0)
    unit_price: int = Field(ge=0)
    line_total: int = Field(ge=0)
    adjustment: PriceAdjustment


class TotalsSummary(BaseModel):
    distinct_line_count: int = 0
    total_quantity: int = 0
    total_amount: int = 0
    formatted_total: str | None = None


class PricedInvoice(BaseModel):
    lines: list[PricedLine] = Field(default_factory=list)
    totals: TotalsSummary
    total_discount: int = 0


class PaymentQuote(BaseModel):
    due: int
    surcharge: int = Field(ge=0)
    gross: int = Field(ge=0)
    method_id: str = "unknown"
    method_label: str = "Unknown"


class PaymentEntry(BaseModel):
    method_id: str
    paid_amount: int


class SettlementEntry(BaseModel):
    method_id: str
    method_label: str
    paid_amount: int
    applied_due: int = Field(ge=0)
    surcharge: int = Field(ge=0)
    gross_expected: int = Field(ge=0)


class SettlementResult(BaseModel):
    due: int
    total_paid: int
    change: int = Field(ge=0)
    remaining_due: int = Field(ge=0)
    per_entry: list[SettlementEntry] = Field(default_factory=list)


class BulkPrintEntry(BaseModel):
    invoice_number: str
    created_at: datetime
    payment_method_id: str | None = None
    paid_amount: int | None = None


class BulkPrintPlan(BaseModel):
    entries: list[BulkPrintEntry] = Field(default_factory=list)
    requested: int = 0
    unique_payments_capped: bool = False


class MemberPoints(BaseModel):
    amount: int
    points: int
    points_value: int
    next_threshold: int
