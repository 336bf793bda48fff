"""
Defect Insight: metrics aggregation and anomaly detection for manufacturing defects.
"""

__version__ = "0.1.0"
