"""
FinanceManager backend.

Two FastAPI services sharing one code base:
- catalog: accounts, banks, currencies, categories, registry holders, exchange rates
- transactions: transactions and transfers over data replicated from the catalog
"""
__version__ = "0.1.0"
