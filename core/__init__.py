"""
Core package - Shared building blocks.
Contains the service base class and the value helpers (ids, loose equality,
quantities, dates, password digests).
"""
