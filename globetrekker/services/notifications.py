"""Subjects and HTML bodies for the transactional mails."""

from html import escape

from globetrekker.models import Registration


def welcome_email() -> tuple[str, str]:
    subject = "🎉 Welcome to GlobeTrekker!"
    html = "<p>Thank you for subscribing to GlobeTrekker updates 🌍</p>"
    return subject, html


def contact_email(name: str, email: str, message: str) -> tuple[str, str]:
    subject = "New Contact Message - GlobeTrekker"
    html = (
        "<h3>Message Received</h3>\n"
        f"<p><b>Name:</b> {escape(name)}</p>\n"
        f"<p><b>Email:</b> {escape(email)}</p>\n"
        f"<p><b>Message:</b> {escape(message)}</p>"
    )
    return subject, html


def registration_email(reg: Registration) -> tuple[str, str]:
    subject = f"New Trip Registration - {reg.destination}"
    rows = [
        ("Name", reg.name),
        ("Email", reg.email),
        ("Phone", reg.phone),
        ("Gender", reg.gender),
        ("Destination", reg.destination),
        ("Package", reg.package),
        ("Date", reg.date),
        ("Notes", reg.notes or "-"),
    ]
    html = "<h3>New Registration</h3>\n" + "\n".join(
        f"<p><b>{label}:</b> {escape(str(value))}</p>" for label, value in rows
    )
    return subject, html
