"""
Expenses app: money paid out for running the business.

ExpenseService records each expense together with its cashbook or
bankbook entry and removes both on delete.
"""
