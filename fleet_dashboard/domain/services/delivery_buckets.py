"""Classification of dispatched invoice amounts into delivery buckets."""

from decimal import Decimal

from fleet_dashboard.domain.constants import NOT_FULFILLED_STATUS


def classify_delivery(
    invoice_total: Decimal,
    dispatch_status: str | None,
    returned_amount: Decimal | None = None,
    concern_variance: Decimal | None = None,
) -> dict[str, Decimal]:
    """Split an invoice amount into exactly one delivery bucket.

    Precedence: not fulfilled, then fulfilled with returns (net of the
    returned amount), then fulfilled with concerns (net of the variance),
    else fulfilled.

    Args:
        invoice_total: Invoice amount.
        dispatch_status: Status of the dispatch line.
        returned_amount: Amount returned, when a return exists.
        concern_variance: Variance recorded, when a concern exists.

    Returns:
        dict[str, Decimal]: Amount per logistics bucket.
    """
    buckets = {
        "fulfilled": Decimal("0"),
        "not_fulfilled": Decimal("0"),
        "fulfilled_with_returns": Decimal("0"),
        "fulfilled_with_concerns": Decimal("0"),
    }
    if (dispatch_status or "").strip() == NOT_FULFILLED_STATUS:
        buckets["not_fulfilled"] = invoice_total
    elif returned_amount is not None:
        buckets["fulfilled_with_returns"] = invoice_total - returned_amount
    elif concern_variance is not None:
        buckets["fulfilled_with_concerns"] = invoice_total - concern_variance
    else:
        buckets["fulfilled"] = invoice_total
    return buckets


__all__ = ["classify_delivery"]
