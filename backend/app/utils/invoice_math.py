"""
Money and line-item arithmetic shared by the invoice engine.

Lines are frozen snapshots of a product taken when the invoice is written;
totals are always derived from them, never accepted from the caller.
"""
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable, List, Optional

from app.exceptions import InvalidInputError

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")

# Money columns are Numeric(12, 2): at most 10 integer digits
MAX_MONEY = Decimal("9999999999.99")
MAX_QTY = 1_000_000


def to_money(value: Any, field_name: str = "amount") -> Decimal:
    """
    Convert a number to a two-place Decimal

    Raises:
        InvalidInputError: value is not a finite number or exceeds MAX_MONEY
    """
    if isinstance(value, bool):
        raise InvalidInputError(f"{field_name} must be a number")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidInputError(f"{field_name} must be a number")
    if not amount.is_finite():
        raise InvalidInputError(f"{field_name} must be a number")
    _check_fits(amount, field_name)
    amount = amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    _check_fits(amount, field_name)
    return amount


def _check_fits(amount: Decimal, field_name: str) -> None:
    if abs(amount) > MAX_MONEY:
        raise InvalidInputError(f"{field_name} cannot exceed {MAX_MONEY}")


def non_negative_money(value: Any, field_name: str) -> Decimal:
    amount = to_money(value, field_name)
    if amount < 0:
        raise InvalidInputError(f"{field_name} cannot be negative")
    return amount


@dataclass(frozen=True)
class LineSnapshot:
    """Product fields copied into an invoice at write time"""
    product_id: int
    product_name: str
    product_desc: Optional[str]
    price: Decimal
    qty: int
    total: Decimal


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    tax: Decimal
    discount: Decimal
    total: Decimal


def check_qty(qty: int) -> int:
    if qty < 1:
        raise InvalidInputError("Quantity must be at least 1")
    if qty > MAX_QTY:
        raise InvalidInputError(f"Quantity cannot exceed {MAX_QTY}")
    return qty


def line_total(price: Decimal, qty: int) -> Decimal:
    total = price * check_qty(qty)
    _check_fits(total, "item total")
    return total.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def snapshot_line(product: Any, qty: int) -> LineSnapshot:
    """Freeze a product's current name, description and price into a line"""
    price = to_money(product.price, "price")
    return LineSnapshot(
        product_id=product.id,
        product_name=product.name,
        product_desc=product.description,
        price=price,
        qty=qty,
        total=line_total(price, qty),
    )


def summarize(
    subtotal: Decimal,
    tax: Optional[Any] = None,
    discount: Optional[Any] = None,
) -> InvoiceTotals:
    """
    Apply tax and discount to a subtotal

    Absent tax/discount count as zero. The resulting total may not be negative.
    """
    tax_amount = non_negative_money(tax, "tax") if tax is not None else ZERO
    discount_amount = non_negative_money(discount, "discount") if discount is not None else ZERO
    _check_fits(subtotal, "subtotal")
    total = subtotal + tax_amount - discount_amount
    if total < 0:
        raise InvalidInputError("Discount cannot exceed subtotal plus tax")
    _check_fits(total, "total")
    return InvoiceTotals(
        subtotal=subtotal,
        tax=tax_amount,
        discount=discount_amount,
        total=total,
    )


def compute_totals(
    lines: Iterable[LineSnapshot],
    tax: Optional[Any] = None,
    discount: Optional[Any] = None,
) -> InvoiceTotals:
    """Subtotal is the sum of line totals; total = subtotal + tax - discount"""
    snapshots: List[LineSnapshot] = list(lines)
    if not snapshots:
        raise InvalidInputError("Invoice must have at least one item")
    subtotal = sum((line.total for line in snapshots), ZERO)
    return summarize(subtotal, tax, discount)
