"""
Normalize package: typed issue and time-entry records built from raw export rows.
"""
