"""
Curtain Pricing Package

Order-intake pricing for a made-to-measure fabric and curtain shop.
Converts raw measurements to centimeters, prices curtain and yardage
line items, and aggregates them into order totals.
"""

__version__ = "1.0.0"
