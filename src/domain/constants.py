"""Domain constants for the personal finance ledger."""

EXPENSE_TYPE_FIXED = "fixed"
EXPENSE_TYPE_VARIABLE = "variable"
EXPENSE_TYPE_INVESTMENT = "investment"

EXPENSE_TYPES = (
    EXPENSE_TYPE_FIXED,
    EXPENSE_TYPE_VARIABLE,
    EXPENSE_TYPE_INVESTMENT,
)

PAYMENT_METHOD_SALARY = "salary"
PAYMENT_METHOD_EXTRA = "extra"

PAYMENT_METHODS = (
    PAYMENT_METHOD_SALARY,
    PAYMENT_METHOD_EXTRA,
)

SECTIONS = (
    "income",
    "expense",
    "investment",
    "monthly",
    "history",
)

ACTIONS = (
    "create",
    "update",
    "delete",
    "reset",
)

EXPENSE_CATEGORIES = (
    "Alimentação",
    "Transporte",
    "Moradia",
    "Saúde",
    "Educação",
    "Lazer",
    "Roupas",
    "Investimentos",
    "Outros",
)

MONTH_NAMES = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)

DEFAULT_LOG_VIEW_LIMIT = 100
DEFAULT_LOG_CAPACITY = 1000


__all__ = [
    "EXPENSE_TYPE_FIXED",
    "EXPENSE_TYPE_VARIABLE",
    "EXPENSE_TYPE_INVESTMENT",
    "EXPENSE_TYPES",
    "PAYMENT_METHOD_SALARY",
    "PAYMENT_METHOD_EXTRA",
    "PAYMENT_METHODS",
    "SECTIONS",
    "ACTIONS",
    "EXPENSE_CATEGORIES",
    "MONTH_NAMES",
    "DEFAULT_LOG_VIEW_LIMIT",
    "DEFAULT_LOG_CAPACITY",
]
