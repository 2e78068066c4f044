"""Household finance ledger: monthly income, expenses, yearly CSV files and a console menu."""

__version__ = "0.1.0"
__all__ = ["__version__"]