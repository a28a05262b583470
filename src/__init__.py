"""
ERP Finance Gateway - Cash-Flow Ledger & Stock Service

A FastAPI-based service that keeps the company's financial entries,
expands installment plans, projects account statements, builds credit
card invoices and tracks warehouse stock.
"""

__version__ = "0.1.0"
