"""Domain normalization helpers."""


def normalize_investment_key(name: str) -> str:
    """Return the grouping key for an investment name.

    Only the case is folded; surrounding whitespace is kept, so
    ``"Tesouro "`` and ``"Tesouro"`` stay distinct.

    Args:
        name: Raw investment name.

    Returns:
        str: Lower-cased name.
    """
    return name.lower()


def normalize_expense_type(expense_type: str | None) -> str | None:
    """Normalize expense type values.

    Args:
        expense_type: Raw type value from a repository row.

    Returns:
        str | None: Lower-cased type, or None when empty.
    """
    if not expense_type:
        return None
    cleaned = expense_type.strip()
    return cleaned.lower() if cleaned else None


def normalize_payment_method(payment_method: str | None) -> str | None:
    """Normalize payment method values.

    Args:
        payment_method: Raw payment method from a repository row.

    Returns:
        str | None: Lower-cased payment method, or None when empty.
    """
    if not payment_method:
        return None
    cleaned = payment_method.strip()
    return cleaned.lower() if cleaned else None


__all__ = [
    "normalize_investment_key",
    "normalize_expense_type",
    "normalize_payment_method",
]
