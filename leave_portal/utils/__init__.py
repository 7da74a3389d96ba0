"""
Shared helpers for dates and spreadsheet output.
"""
