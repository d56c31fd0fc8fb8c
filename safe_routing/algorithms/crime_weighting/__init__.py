"""
Hotspot-based risk weighting.
"""

from .hotspot_risk_field import HotspotRiskField, RiskAssessment

__all__ = [
    'HotspotRiskField',
    'RiskAssessment'
]
