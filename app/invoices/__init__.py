"""
Invoices app: purchase invoices (owed to vendors) and sales invoices (owed by retailers).

Invoice money fields and status are mutated only by the payment engines
and InvoiceService; status always follows the epsilon rule in
invoices.status.
"""
