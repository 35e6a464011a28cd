"""Reconcile budget report exports against a spreadsheet ledger."""

__version__ = "0.1.0"
