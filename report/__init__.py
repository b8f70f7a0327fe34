"""
Report package: rendering and spreadsheet export of work summaries.
"""
