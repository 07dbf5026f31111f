"""
Core domain models, contracts, and the error taxonomy.

This module contains the foundational building blocks that are independent
of external systems (storage, identity, call transport).
"""
