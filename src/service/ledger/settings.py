"""
Ledger Settings.

Tunables for the ledger core: currency rendering, pagination limits and
plan bounds. Environment variables use the LEDGER_ prefix:
    LEDGER_CURRENCY_SYMBOL="US$"
    LEDGER_MAX_INSTALLMENTS=120
    LEDGER_DEFAULT_PAGE_SIZE=25

Usage:
    from src.service.ledger.settings import ledger_settings

    ledger_settings.max_page_size

    # Or build custom settings for tests
    custom = LedgerSettings(thousands_separator=",", decimal_separator=".")
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """
    Configurable parameters for the ledger core.

    All monetary values are in cents.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Currency formatting ===
    currency_symbol: str = Field(
        default="R$",
        description="Symbol prepended to formatted amounts",
    )
    thousands_separator: str = Field(
        default=".",
        max_length=1,
        description="Digit group separator",
    )
    decimal_separator: str = Field(
        default=",",
        min_length=1,
        max_length=1,
        description="Separator between units and cents",
    )

    # === Movement listing ===
    default_page_size: int = Field(
        default=50,
        ge=1,
        description="Page size when the caller does not ask for one",
    )
    max_page_size: int = Field(
        default=500,
        ge=1,
        description="Largest page a caller may request",
    )

    # === Plans ===
    max_installments: int = Field(
        default=360,
        ge=2,
        description="Upper bound for installment and recurrence counts",
    )

    # === Card invoices ===
    invoice_payment_category: str = Field(
        default="Card invoice payment",
        description="Expense category assigned to invoice payments",
    )

    @model_validator(mode="after")
    def validate_separators(self) -> "LedgerSettings":
        if self.thousands_separator == self.decimal_separator:
            raise ValueError("thousands and decimal separators must differ")
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size cannot exceed max_page_size")
        return self


@lru_cache
def get_ledger_settings() -> LedgerSettings:
    """Get cached ledger settings instance."""
    return LedgerSettings()


ledger_settings = get_ledger_settings()
