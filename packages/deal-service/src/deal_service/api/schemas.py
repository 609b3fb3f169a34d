from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field

FormValue = Union[str, int, float]


class DealRequest(BaseModel):
    """Raw deal form values. Currency fields may carry display formatting ("2,500,000")."""

    asking_price: FormValue = Field(..., alias="askingPrice", description="Asking price ($)")
    annual_revenue: FormValue = Field(..., alias="revenue", description="Annual revenue ($)")
    ebitda: FormValue = Field(..., description="EBITDA ($)")
    owner_salary: FormValue = Field(..., alias="ownerSalary", description="Owner's salary ($)")
    recurring_revenue: FormValue = Field(..., alias="recurringRevenue", description="Recurring revenue ($)")
    top_customer_revenue: FormValue = Field(
        ..., alias="topCustomerRevenue", description="Revenue from the largest customer ($)"
    )
    years_in_business: FormValue = Field(..., alias="yearsInBusiness", description="Years in business")
    down_payment_pct: FormValue = Field(..., alias="downPayment", description="Down payment (% of price)")
    seller_note_pct: FormValue = Field(..., alias="sellerNote", description="Seller note (% of price)")
    interest_rate_pct: FormValue = Field(
        ..., alias="interestRate", description="Annual interest rate (whole percentage points)"
    )
    loan_term_years: FormValue = Field(..., alias="loanTerm", description="Loan term (years)")
    industry: str = Field(..., description="One of tech, services, retail, manufacturing, construction, healthcare, food, other")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "askingPrice": "2,500,000",
                "revenue": "3,000,000",
                "ebitda": "450,000",
                "ownerSalary": "150,000",
                "recurringRevenue": "900,000",
                "topCustomerRevenue": "300,000",
                "yearsInBusiness": "15",
                "downPayment": "5",
                "sellerNote": "5",
                "interestRate": "10",
                "loanTerm": "10",
                "industry": "services",
            }
        },
    )


class IndustryItem(BaseModel):
    code: str
    label: str
    risk_adjustment: float
    market_score: float
    position_base: float
    vulnerability: float
    opportunities: List[str]
    threats: List[str]
    weaknesses: List[str]


class IndustryListResponse(BaseModel):
    results: List[IndustryItem]


class DealListResponse(BaseModel):
    source: str
    deals: List[str]
