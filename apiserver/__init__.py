"""
jsau-apiserver — Application Package Initializer
=================================================

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │        Services (Business Logic)    │  ← catalog and favorites rules
    ├─────────────────────────────────────┤
    │            Schemas (Data)           │  ← Pydantic record models
    ├─────────────────────────────────────┤
    │     Record Stores (Persistence)     │  ← JSON array files
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
