from abc import ABC, abstractmethod
from typing import Any, Dict, List, Type


class BaseDealSource(ABC):
    """Abstract base class for deal sources."""

    @abstractmethod
    def get_deal(self, deal_id: str) -> Dict[str, Any]:
        """
        Fetch the raw form values for one deal.
        Returns a dictionary keyed like the deal form:
        - askingPrice, revenue, ebitda, ownerSalary (formatted currency strings)
        - recurringRevenue, topCustomerRevenue
        - yearsInBusiness, downPayment, sellerNote, interestRate, loanTerm
        - industry
        Raises ValueError if the deal does not exist.
        """
        pass

    @abstractmethod
    def list_deals(self) -> List[str]:
        """Return the ids of every deal this source can provide."""
        pass


class DealSourceFactory:
    """Simple factory to manage deal sources (Singleton Pattern)."""

    _source_classes: Dict[str, Type[BaseDealSource]] = {}
    _instances: Dict[str, BaseDealSource] = {}

    @classmethod
    def register(cls, name: str, source_cls: Type[BaseDealSource]) -> None:
        cls._source_classes[name] = source_cls
        # A re-registered name must not keep serving the old instance.
        cls._instances.pop(name, None)

    @classmethod
    def get_source(cls, name: str) -> BaseDealSource:
        # Check cache first
        if name in cls._instances:
            return cls._instances[name]

        # Create new instance if registered
        source_cls = cls._source_classes.get(name)
        if not source_cls:
            raise ValueError(f"Deal source '{name}' not found.")

        instance = source_cls()
        cls._instances[name] = instance
        return instance

    @classmethod
    def available(cls) -> List[str]:
        return sorted(cls._source_classes)
