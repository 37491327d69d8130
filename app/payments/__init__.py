"""
Payments app for vendor and retailer payments.

This app handles:
- Applying a payment to one purchase or sales invoice
- FIFO distribution of a lump sum across a party's open invoices
- Reversing payments (single or whole batches)
- Cash and bank ledgers with running balances (payments.ledger)

Related apps:
    - invoices: Purchase and sales invoices being settled
    - parties: Vendor and retailer aggregates
    - banking: Bank accounts and non-payment movements
    - notifications: Payment notices sent after commit

Usage:
    from payments.services import PaymentApplicationService

    result = PaymentApplicationService.apply_payment(
        tenant_id=tenant.id,
        side="purchase",
        invoice_id=invoice.id,
        amount="1000.00",
        payment_mode=PaymentMode.CASH,
    )
"""
