"""
Banking app: a tenant's bank accounts and the movements between cash and bank.

Each BankAccount anchors one bankbook partition: appends to that
partition lock the account row, and BankAccount.balance mirrors the
bankbook tail. BankingService records opening balances, deposits and
withdrawals through the ledger.
"""
