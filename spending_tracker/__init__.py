"""
Spending Tracker - Source Package

The domain core of a personal expense tracker: spending records,
categories, and the monthly aggregates derived from them.

DESIGN PRINCIPLES:
1. In-memory state is authoritative for the session
2. Derived data is rebuilt from scratch, never patched
3. Persistence is best-effort and never blocks a mutation
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Spending Tracker Team"
