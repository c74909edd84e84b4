"""Domain services for tile estimation."""

from .accounting import PricingOptions, PurchaseSummary, cm2_to_m2, compute_purchase_summary
from .consumption import (
    ConsumptionEngine,
    ConsumptionOptions,
    ConsumptionResult,
    UsageRecord,
    effective_request,
)
from .cut_analysis import CutAnalysis, CutAnalysisConfig, CutShapeAnalyzer
from .geometry import bounding_box, multi_polygon_area, polygon_area, ring_area
from .offcut_inventory import OffcutInventory, TakeResult, fits, guillotine_remainders
from .pairing import PairingConfig, find_complementary_pairs, pair_aware_order

__all__ = [
    "ConsumptionEngine",
    "ConsumptionOptions",
    "ConsumptionResult",
    "CutAnalysis",
    "CutAnalysisConfig",
    "CutShapeAnalyzer",
    "OffcutInventory",
    "PairingConfig",
    "PricingOptions",
    "PurchaseSummary",
    "TakeResult",
    "UsageRecord",
    "bounding_box",
    "cm2_to_m2",
    "compute_purchase_summary",
    "effective_request",
    "find_complementary_pairs",
    "fits",
    "guillotine_remainders",
    "multi_polygon_area",
    "pair_aware_order",
    "polygon_area",
    "ring_area",
]
