"""Reference data seeded at startup: supported currencies and default categories.

Currencies use ISO 4217 codes. The list covers the currencies most users
record expenses in; administrators extend it by editing this module and
restarting, since seeding only ever inserts missing codes.
"""

# (code, name, symbol)
SUPPORTED_CURRENCIES: list[tuple[str, str, str]] = [
    ("EUR", "Euro", "€"),
    ("USD", "US Dollar", "$"),
    ("GBP", "British Pound", "£"),
    ("JPY", "Japanese Yen", "¥"),
    ("CAD", "Canadian Dollar", "C$"),
    ("AUD", "Australian Dollar", "A$"),
    ("CHF", "Swiss Franc", "CHF"),
    ("CNY", "Chinese Yuan", "¥"),
    ("HKD", "Hong Kong Dollar", "HK$"),
    ("NZD", "New Zealand Dollar", "NZ$"),
    ("SEK", "Swedish Krona", "kr"),
    ("NOK", "Norwegian Krone", "kr"),
    ("DKK", "Danish Krone", "kr"),
    ("SGD", "Singapore Dollar", "S$"),
    ("KRW", "South Korean Won", "₩"),
    ("INR", "Indian Rupee", "₹"),
]

# (name, color)
DEFAULT_CATEGORIES: list[tuple[str, str]] = [
    ("Food & Dining", "#FF6384"),
    ("Transportation", "#36A2EB"),
    ("Entertainment", "#FFCE56"),
    ("Shopping", "#4BC0C0"),
    ("Bills & Utilities", "#9966FF"),
    ("Health", "#FF9F40"),
    ("Other", "#C9CBCF"),
]

# Expenses of a deleted user category move here
FALLBACK_CATEGORY_NAME = "Other"
