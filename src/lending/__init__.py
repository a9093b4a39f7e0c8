"""Lending catalog backend.

Book intake with call-sign allocation, circulation state for copies, and the
search and detail views built on top of them.
"""

__version__ = "0.1.0"
