"""
Parties app: the vendors a tenant buys from and the retailers it sells to.

Vendor.balance tracks outstanding payables. Retailer carries its running
account balance plus the udhaar (outstanding credit) and shortfall
(written-off) aggregates.
"""
