"""
Ledger Kernel

The double-entry core of a multi-tenant bookkeeping application:
- Admission of balanced transactions scoped to one tenant
- Atomic persistence of a transaction with all of its entries
- Pure balance evaluation over posted entries
- Tenant-scoped read selectors feeding the financial statements
"""

__version__ = "0.1.0"
