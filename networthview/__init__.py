"""
NetworthView - Source Package

Personal finance tracking core: transactions, categories, budgets and
the dashboard reports built from them.

DESIGN PRINCIPLES:
1. The calculation core is pure and never raises on well-typed input
2. Garbage is rejected at the boundary, loudly
3. Data access is injected, never global
4. Every report is recomputed from source records
"""

__version__ = "0.1.0"
