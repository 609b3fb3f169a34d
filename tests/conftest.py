import pytest

HVAC_FORM = {
    "askingPrice": "2,500,000",
    "revenue": "3,000,000",
    "ebitda": "450,000",
    "ownerSalary": "150,000",
    "recurringRevenue": "900,000",
    "topCustomerRevenue": "300,000",
    "yearsInBusiness": "15",
    "downPayment": "5",
    "sellerNote": "5",
    "interestRate": "10.5",
    "loanTerm": "10",
    "industry": "services",
}


@pytest.fixture
def hvac_form():
    return dict(HVAC_FORM)
