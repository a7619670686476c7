# This project was developed with assistance from AI tools.
"""Customer financial profile schemas."""

from datetime import datetime

from db.enums import RiskLevel, TransactionStatus, TransactionType
from pydantic import BaseModel, ConfigDict, Field

from . import Pagination
from .verification import CustomerInfoView


class _FromRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class CreditUtilizationView(_FromRecord):
    total_credit: float
    used_credit: float
    utilization_percentage: float


class PaymentHistoryView(_FromRecord):
    on_time_percentage: float
    recent_late_payments: int


class CreditBureauReportView(_FromRecord):
    score: int
    grade: str
    last_updated: str
    utilization: CreditUtilizationView
    payment_history: PaymentHistoryView


class CreditSummaryView(_FromRecord):
    average_score: int
    score_variance: int
    overall_grade: str
    risk_level: RiskLevel
    primary_bureau: str
    major_discrepancies: list[str]


class CreditReportResponse(BaseModel):
    reports: dict[str, CreditBureauReportView]
    summary: CreditSummaryView | None = None


class BankAccountView(_FromRecord):
    account_id: str
    bank_name: str
    account_type: str
    account_number: str
    balance: float
    currency: str
    opened_date: str
    available_balance: float | None = None
    routing_number: str | None = None


class FinancialSummaryView(_FromRecord):
    total_balance: float
    monthly_income: float
    monthly_expenses: float
    net_cash_flow: float
    account_age: int
    overdraft_count: int


class RiskIndicatorsView(_FromRecord):
    irregular_income_pattern: bool
    high_overdraft_frequency: bool
    gambling_activity: bool
    cryptocurrency_activity: bool
    large_unexplained_deposits: bool


class CustomerSummary(BaseModel):
    """Row in the customer list."""

    customer_id: str
    full_name: str
    email: str
    phone_number: str
    average_score: int | None = None
    risk_level: RiskLevel | None = None
    total_balance: float
    verification_id: str | None = None
    last_updated: datetime


class CustomerListResponse(BaseModel):
    data: list[CustomerSummary]
    pagination: Pagination


class CustomerProfileResponse(BaseModel):
    customer_id: str
    customer_info: CustomerInfoView
    credit: CreditReportResponse
    bank_accounts: list[BankAccountView]
    financial_summary: FinancialSummaryView
    risk_indicators: RiskIndicatorsView
    verification_id: str | None = None
    last_updated: datetime


class TransactionView(_FromRecord):
    id: str
    account_id: str
    amount: float
    date: datetime
    description: str
    category: list[str]
    type: TransactionType
    status: TransactionStatus
    merchant_name: str | None = None


class TransactionListResponse(BaseModel):
    data: list[TransactionView]
    pagination: Pagination


class TransactionFilters(BaseModel):
    search: str = ""
    account_id: str | None = None
    type: TransactionType | None = None
    status: TransactionStatus | None = None
    category: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class IncomeSource(BaseModel):
    source: str
    total: float
    count: int
    average_amount: float
    last_amount: float
    last_date: datetime


class MonthlyAmount(BaseModel):
    month: str
    amount: float


class IncomeAnalysis(BaseModel):
    total_income: float
    monthly_average: float
    sources: list[IncomeSource]
    monthly: list[MonthlyAmount]


class SpendingCategory(BaseModel):
    category: str
    amount: float
    percentage: float
    transaction_count: int


class SpendingAnalysis(BaseModel):
    total_spending: float
    monthly_average: float
    categories: list[SpendingCategory]
    monthly: list[MonthlyAmount]


class NoteCreate(BaseModel):
    content: str = Field(min_length=1, max_length=5000)


class NoteView(_FromRecord):
    id: str
    customer_id: str
    content: str
    agent_id: str
    created_at: datetime


class FlagCreate(BaseModel):
    type: str = Field(min_length=1, max_length=50)
    reason: str = Field(min_length=1, max_length=2000)


class FlagView(_FromRecord):
    id: str
    customer_id: str
    type: str
    reason: str
    agent_id: str
    created_at: datetime
