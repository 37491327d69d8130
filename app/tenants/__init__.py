"""
Tenants app: the businesses that own every back-office record.

Each Tenant row also anchors its cashbook: cash ledger appends lock the
tenant row, and Tenant.cash_balance mirrors the cashbook tail.
"""
