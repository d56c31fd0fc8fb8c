"""
Incident clustering.
"""

from .hotspot_analyzer import HotspotAnalyzer

__all__ = [
    'HotspotAnalyzer'
]
