from typing import Any, Dict, List

from .base import BaseDealSource, DealSourceFactory

# Sample deals pre-filled in the deal form.
PRESET_DEALS: Dict[str, Dict[str, str]] = {
    "hvac-services": {
        "askingPrice": "2,500,000",  # 2.5M typical for an established HVAC business
        "revenue": "3,000,000",
        "ebitda": "450,000",  # 15% EBITDA margin
        "ownerSalary": "150,000",
        "recurringRevenue": "900,000",  # 30% service contracts
        "topCustomerRevenue": "300,000",  # 10% concentration
        "yearsInBusiness": "15",
        "downPayment": "5",  # SBA 7(a) minimum
        "sellerNote": "5",
        "interestRate": "10.5",  # Prime (7%) + 3.5% spread
        "loanTerm": "10",
        "industry": "services",
    },
}

DEFAULT_DEAL_ID = "hvac-services"


class PresetDealSource(BaseDealSource):
    """Built-in sample deals."""

    def get_deal(self, deal_id: str) -> Dict[str, Any]:
        deal = PRESET_DEALS.get(deal_id)
        if deal is None:
            raise ValueError(f"Deal '{deal_id}' not found in preset deals.")
        return dict(deal)

    def list_deals(self) -> List[str]:
        return list(PRESET_DEALS)


# Register the source
DealSourceFactory.register("preset", PresetDealSource)
