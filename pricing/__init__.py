"""
Pricing and totals engine.

Pure functions only, no model imports. Views, models and the cost breakdown
call into these modules with already-fetched numbers.
"""
