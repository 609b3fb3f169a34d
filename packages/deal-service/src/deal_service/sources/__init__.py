from deal_service.sources.base import BaseDealSource, DealSourceFactory
from deal_service.sources.preset import PresetDealSource
from deal_service.sources.spreadsheet import CsvDealSource

__all__ = ["BaseDealSource", "DealSourceFactory", "PresetDealSource", "CsvDealSource"]
