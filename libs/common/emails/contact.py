"""
Contact form emails.
"""

from libs.common.config import get_settings
from libs.common.emails.core import send_email


async def send_contact_notification_email(contact) -> bool:
    """Alert the shop that a new contact form came in."""
    settings = get_settings()
    to_email = settings.ADMIN_NOTIFICATION_EMAIL or settings.DEFAULT_FROM_EMAIL
    subject = f"New Contact Form Submission - {contact.subject.value}"
    body = f"""New contact form submission:

Name: {contact.name}
Email: {contact.email}
Phone: {contact.phone or "Not provided"}
Subject: {contact.subject.value}
Preferred Contact: {contact.preferred_contact.value}
Urgency: {contact.urgency.value}

Message:
{contact.message}

Submitted at: {contact.created_at:%Y-%m-%d %H:%M UTC}
"""
    return await send_email(to_email=to_email, subject=subject, body=body)


async def send_contact_acknowledgement_email(contact) -> bool:
    """Confirm receipt to the person who wrote in."""
    subject = "Thank you for contacting FurniCraft"
    body = f"""Dear {contact.name},

Thank you for contacting FurniCraft! We have received your message and will get back to you soon.

Your message details:
Subject: {contact.subject.value}
Message: {contact.message}

We typically respond within 24 hours.

Best regards,
The FurniCraft Team
"""
    return await send_email(to_email=contact.email, subject=subject, body=body)
