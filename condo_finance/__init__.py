"""
Condo Finance - Source Package

Turns the three CSV exports kept by the building administration
(monthly category expenses, investment fund positions and ordinary
account balance snapshots) into a monthly financial timeline.

DESIGN PRINCIPLES:
1. Parsing degrades gracefully, it never interrupts the caller
2. Revenue is derived from balances, never read from a file
3. Derivation is a pure function of (data, year, reference date)
4. Each source is replaced independently, never merged
"""

__version__ = "1.0.0"
__author__ = "Condo Finance Team"
