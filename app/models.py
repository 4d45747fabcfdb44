"""Pydantic models for the cross-border transfer screening API."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator


def _amount_as_text(value):
    """Keep numeric JSON amounts as entered text; parsing happens later."""
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return str(value)
    return value


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    RESTRICTED = "RestrictedCurrency"


class RiskTier(str, Enum):
    """Coarse classification of the recipient country."""
    UNKNOWN = "Unknown"
    LOW = "Low"
    HIGH = "High"


class VerificationStatus(str, Enum):
    """KYC lifecycle of an account, in the only order it can advance."""
    UNREGISTERED = "Unregistered"
    REGISTERED = "Registered"
    DOCUMENTS_SUBMITTED = "DocumentsSubmitted"
    VERIFIED = "Verified"


class TransferRequest(BaseModel):
    """A single transfer attempt, exactly as entered by the sender.

    The amount is kept as text and only parsed when the attempt is
    processed, so an empty or non-numeric entry can still be submitted.
    """
    model_config = ConfigDict(frozen=True)

    source_currency: Currency = Currency.USD
    target_currency: Currency = Currency.EUR
    amount: str
    recipient_country_risk_tier: RiskTier = RiskTier.UNKNOWN

    coerce_amount = field_validator("amount", mode="before")(_amount_as_text)


class TransferSubmission(TransferRequest):
    """Transfer request body accepted by the API, with an optional clock override."""
    timestamp: Optional[AwareDatetime] = None


class ConversionResult(BaseModel):
    """Outcome of a successful currency conversion. Derived, never stored."""
    converted_amount: Decimal
    target_currency: Currency
    source_currency: Currency
    rate: Decimal


class ConversionRequest(BaseModel):
    source_currency: Currency
    target_currency: Currency
    amount: str

    coerce_amount = field_validator("amount", mode="before")(_amount_as_text)


class ConversionResponse(BaseModel):
    converted: bool
    result: Optional[ConversionResult] = None


class VelocityState(BaseModel):
    """Per-account transaction counter and time of the last approved transfer."""
    model_config = ConfigDict(frozen=True)

    transaction_count: int = 0
    last_transaction_at: Optional[datetime] = None


class LedgerEntry(BaseModel):
    """A committed (approved) transfer."""
    model_config = ConfigDict(frozen=True)

    transaction_id: str
    amount: Decimal  # requested amount, before conversion
    converted_amount: Decimal
    source_currency: Currency
    target_currency: Currency
    timestamp: datetime


class Ledger:
    """Append-only, ordered sequence of ledger entries."""

    def __init__(self) -> None:
        self._entries: list[LedgerEntry] = []

    def append(self, entry: LedgerEntry) -> None:
        self._entries.append(entry)

    @property
    def entries(self) -> Tuple[LedgerEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class Account(BaseModel):
    """A sender account with its KYC status, velocity state and ledger."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    account_id: str
    email: Optional[str] = None
    verification_status: VerificationStatus = VerificationStatus.UNREGISTERED
    document_ref: Optional[str] = None
    velocity: VelocityState = Field(default_factory=VelocityState)
    ledger: Ledger = Field(default_factory=Ledger, exclude=True)


# --- Decisions -------------------------------------------------------------


class Approved(BaseModel):
    outcome: Literal["APPROVED"] = "APPROVED"
    transaction_id: str
    amount: Decimal
    currency: Currency


class BlockedCompliance(BaseModel):
    outcome: Literal["BLOCKED_COMPLIANCE"] = "BLOCKED_COMPLIANCE"
    reason: str


class BlockedRisk(BaseModel):
    """High-risk ceiling breach. Both messages are shown separately."""
    outcome: Literal["BLOCKED_RISK"] = "BLOCKED_RISK"
    risk_warning: str
    compliance_message: str


class BlockedSuspicious(BaseModel):
    outcome: Literal["BLOCKED_SUSPICIOUS"] = "BLOCKED_SUSPICIOUS"
    reason: str


class BlockedInsufficientFunds(BaseModel):
    outcome: Literal["BLOCKED_INSUFFICIENT_FUNDS"] = "BLOCKED_INSUFFICIENT_FUNDS"
    reason: str


Decision = Annotated[
    Union[
        Approved,
        BlockedCompliance,
        BlockedRisk,
        BlockedSuspicious,
        BlockedInsufficientFunds,
    ],
    Field(discriminator="outcome"),
]


class VerificationRequired(BaseModel):
    """Identity gate refusal: the account is not yet Verified."""
    outcome: Literal["VERIFICATION_REQUIRED"] = "VERIFICATION_REQUIRED"
    verification_status: VerificationStatus
    prompt: str


class NoConversion(BaseModel):
    """The amount could not be converted, so no evaluation took place."""
    outcome: Literal["NO_CONVERSION"] = "NO_CONVERSION"
    reason: str


TransferOutcome = Annotated[
    Union[
        Approved,
        BlockedCompliance,
        BlockedRisk,
        BlockedSuspicious,
        BlockedInsufficientFunds,
        VerificationRequired,
        NoConversion,
    ],
    Field(discriminator="outcome"),
]


# --- Accounts API ----------------------------------------------------------


class RegistrationRequest(BaseModel):
    email: str
    password: str


class DocumentSubmission(BaseModel):
    """Reference to an uploaded KYC document. The content is never read."""
    document_ref: str = Field(min_length=1)


class AccountView(BaseModel):
    """Account as returned to API consumers, with the current KYC prompt."""
    account_id: str
    email: Optional[str] = None
    verification_status: VerificationStatus
    prompt: str
    velocity: VelocityState
    ledger_size: int


# --- Audit & configuration -------------------------------------------------


class AuditEntry(BaseModel):
    """One transfer attempt linked to the outcome it produced."""
    account_id: str
    timestamp: datetime
    request: TransferRequest
    outcome: str
    transaction_id: Optional[str] = None


class RulesConfig(BaseModel):
    """Tunable thresholds for the compliance rule chain."""
    restricted_currencies: list[Currency] = [Currency.RESTRICTED]
    high_risk_limit: Decimal = Decimal("10000")
    funds_limit: Decimal = Decimal("1000")
    velocity_window_ms: int = 5000
    velocity_min_count: int = 3
