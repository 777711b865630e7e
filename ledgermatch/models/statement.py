# ledgermatch/models/statement.py

from datetime import date
from typing import Annotated, Optional, Literal, Union
from pydantic import BaseModel, ConfigDict, Field, model_validator


DateFormat = Literal["DD/MM/YYYY", "DD-MM-YYYY", "DD-MMM-YYYY", "YYYY-MM-DD"]


# ============================================
# Amount column strategies
# ============================================

class DebitCreditColumns(BaseModel):
    """Separate debit and credit columns."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["debit_credit"] = "debit_credit"
    debit_column: str
    credit_column: str

    @property
    def columns(self) -> list[str]:
        return [self.debit_column, self.credit_column]

    @property
    def value_columns(self) -> list[str]:
        return [self.debit_column, self.credit_column]


class AmountWithTypeColumns(BaseModel):
    """A single amount column plus a Dr/Cr indicator column."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["amount_with_type"] = "amount_with_type"
    amount_column: str
    type_column: str

    @property
    def columns(self) -> list[str]:
        return [self.amount_column, self.type_column]

    @property
    def value_columns(self) -> list[str]:
        return [self.amount_column]


class AmountColumn(BaseModel):
    """A single signed amount column."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["amount"] = "amount"
    amount_column: str

    @property
    def columns(self) -> list[str]:
        return [self.amount_column]

    @property
    def value_columns(self) -> list[str]:
        return [self.amount_column]


AmountColumns = Annotated[
    Union[DebitCreditColumns, AmountWithTypeColumns, AmountColumn],
    Field(discriminator="kind"),
]


# ============================================
# Bank Format
# ============================================

class BankFormat(BaseModel):
    """Column layout of one bank's CSV statement export."""

    model_config = ConfigDict(frozen=True)

    name: str
    date_column: str
    description_column: str
    amounts: AmountColumns
    reference_column: Optional[str] = None
    balance_column: Optional[str] = None
    date_format: DateFormat = "YYYY-MM-DD"
    skip_rows: int = Field(
        default=1,
        ge=1,
        description="Rows preceding the first transaction, header line included",
    )

    @property
    def type_column(self) -> Optional[str]:
        if isinstance(self.amounts, AmountWithTypeColumns):
            return self.amounts.type_column
        return None

    def required_columns(self) -> list[str]:
        """Columns a statement must carry to be imported with this format."""
        return [self.date_column, self.description_column, *self.amounts.columns]

    def detection_columns(self) -> list[str]:
        """Columns used to recognise this format from a header row."""
        return [self.date_column, self.description_column, *self.amounts.value_columns]

    def optional_columns(self) -> list[str]:
        return [c for c in (self.reference_column, self.balance_column) if c]


# ============================================
# Imported Transaction
# ============================================

class ImportedTransaction(BaseModel):
    """A normalized bank statement line."""

    model_config = ConfigDict(frozen=True)

    transaction_date: date
    description: str = Field(min_length=1)
    reference: Optional[str] = None
    debit_amount: float = Field(default=0.0, ge=0)
    credit_amount: float = Field(default=0.0, ge=0)
    balance: Optional[float] = None
    transaction_type: Optional[str] = None
    raw_data: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_direction(self) -> "ImportedTransaction":
        if self.debit_amount == 0 and self.credit_amount == 0:
            raise ValueError("Transaction must have either debit or credit amount")
        if self.debit_amount > 0 and self.credit_amount > 0:
            raise ValueError("Transaction cannot have both debit and credit amounts")
        return self

    @property
    def amount(self) -> float:
        """Unsigned amount moved, whichever direction."""
        return self.debit_amount if self.debit_amount > 0 else self.credit_amount

    @property
    def is_outgoing(self) -> bool:
        return self.debit_amount > 0


# ============================================
# Import Result
# ============================================

class ImportSummary(BaseModel):
    """Row counts for one import call."""

    model_config = ConfigDict(frozen=True)

    total_rows: int = 0
    valid_transactions: int = 0
    duplicates: int = 0
    errors: int = 0


class ImportResult(BaseModel):
    """Outcome of importing one statement."""

    model_config = ConfigDict(frozen=True)

    success: bool
    transactions: list[ImportedTransaction] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    summary: ImportSummary = Field(default_factory=ImportSummary)
    bank_account_id: Optional[str] = None
    import_batch_id: Optional[str] = None
