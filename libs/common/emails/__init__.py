"""
FurniCraft Email Package.

Modules:
- core: Base send_email function (SMTP)
- contact: Contact form notifications (staff alert + customer acknowledgement)
"""
