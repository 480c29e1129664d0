"""
Club Ledger: event, kitchen and expense bookkeeping API for a nonprofit club.
"""
__version__ = "0.1.0"
