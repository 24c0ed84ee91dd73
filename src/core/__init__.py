"""
Core domain models, cryptographic primitives, and contracts.

This module contains the foundational building blocks of the topology
builder that are independent of the test harness (identities, key material,
group parameter entries, network descriptor).
"""
