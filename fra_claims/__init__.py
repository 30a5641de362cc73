"""Forest Rights Act claim intake.

Simulated FORM-A recognition with entity back-fill, synthetic parcel
boundaries for map display, and claim dashboards over the results.
"""

__version__ = "1.0.0"
