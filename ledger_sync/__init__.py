"""Spreadsheet ledger ingestion for the bookkeeping dashboard."""
