"""Attendance division splitter.

Reorganizes an attendance export into one worksheet per division, with records
grouped under their date banners and sorted by roll number.
"""

__version__ = "0.1.0"
