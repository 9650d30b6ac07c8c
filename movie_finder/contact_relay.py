"""
Contact form relay.
Sanitizes and validates a portfolio contact form post, then forwards it as a plain-text email.

Flow for one POST:
1) every field is cleaned (trim, un-escape backslashes, HTML-encode)
2) a filled honeypot field short-circuits to the success page without sending
3) all validation failures are collected and reported together
4) a valid submission is mailed to a fixed recipient with Reply-To set to the sender
"""

import html  # entity encoding for fields and the error page
import re  # email syntax and backslash un-escaping
import smtplib  # mail transport
from datetime import datetime  # timestamp in the email footer
from email.message import EmailMessage  # plain-text message builder
from typing import List, Mapping, Optional, Protocol  # type hints

from .config import Settings  # recipient, redirect targets, SMTP settings
from .models import ContactSubmission, RelayOutcome  # sanitized form and handler result

from loguru import logger  # console logger

DEFAULT_SUBJECT = 'Portfolio Contact Form'
SUBJECT_PREFIX = 'Portfolio Contact: '
VALIDATION_ERROR_PREFIX = 'Please correct the following errors: '
SEND_FAILED_MESSAGE = (
	"Sorry, there was an error sending your message. "
	"Please try again or email me directly."
)

# Something@something.tld with no whitespace and a single @ on each side
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
# A backslash followed by any character (or nothing at the end of the string)
_BACKSLASH_ESCAPE = re.compile(r'\\(.?)', re.DOTALL)


class MailTransportError(Exception):
	"""Raised when the mail server refuses or cannot be reached."""

	def __init__(self, message: str):
		super().__init__(message)
		self.message = message


class MailTransport(Protocol):
	def send(self, msg: EmailMessage) -> None: ...


def clean_input(value: Optional[str]) -> str:
	"""Trim, drop escaping backslashes, and HTML-encode a single form value."""
	if value is None:
		return ''
	value = str(value).strip()
	value = _BACKSLASH_ESCAPE.sub(r'\1', value)  # "\'" -> "'", "\\" -> "\"
	return html.escape(value, quote=True)


def parse_submission(form: Mapping[str, str]) -> ContactSubmission:
	"""Clean every known field of a posted form."""
	subject = clean_input(form.get('subject'))
	return ContactSubmission(
		name=clean_input(form.get('name')),
		email=clean_input(form.get('email')),
		subject=subject or DEFAULT_SUBJECT,  # optional field
		message=clean_input(form.get('message')),
		website=clean_input(form.get('website')),
	)


def validate_submission(sub: ContactSubmission) -> List[str]:
	"""Return every violated rule, in form order; an empty list means valid."""
	errors = []
	if not sub.name:
		errors.append('Name is required')
	if not sub.email:
		errors.append('Email is required')
	elif not EMAIL_PATTERN.match(sub.email):
		errors.append('Invalid email format')
	if not sub.message:
		errors.append('Message is required')
	return errors


def compose_email(
	sub: ContactSubmission,
	host: str,
	ip: str,
	now: datetime,
	settings: Settings,
) -> EmailMessage:
	"""Build the plain-text notification for a valid submission."""
	body = "You have received a new message from your portfolio contact form.\n\n"
	body += f"Name: {sub.name}\n"
	body += f"Email: {sub.email}\n"
	body += f"Subject: {sub.subject}\n\n"
	body += f"Message:\n{sub.message}\n\n"
	body += "---\n"
	body += f"Sent from: {host}\n"
	body += f"IP Address: {ip}\n"
	body += f"Date: {now.strftime('%Y-%m-%d %H:%M:%S')}\n"

	msg = EmailMessage()
	msg['Subject'] = SUBJECT_PREFIX + ' '.join(sub.subject.split())  # headers can't hold newlines
	msg['From'] = settings.contact_from_email
	msg['To'] = settings.contact_to_email
	msg['Reply-To'] = sub.email
	msg.set_content(body, charset='utf-8')
	return msg


class SmtpTransport:
	"""Sends messages through an SMTP server, with optional STARTTLS and login."""

	def __init__(self, settings: Settings):
		self.settings = settings

	def send(self, msg: EmailMessage) -> None:
		s = self.settings
		try:
			with smtplib.SMTP(s.smtp_host, s.smtp_port, timeout=s.smtp_timeout_s) as smtp:
				if s.smtp_starttls:
					smtp.starttls()
				if s.smtp_username:
					smtp.login(s.smtp_username, s.smtp_password or '')
				smtp.send_message(msg)
		except (smtplib.SMTPException, OSError) as e:
			raise MailTransportError(str(e)) from e


class ContactRelay:
	"""Handles one contact form post at a time; holds no per-request state."""

	def __init__(self, settings: Settings, transport: MailTransport):
		self.settings = settings
		self.transport = transport

	def handle(
		self,
		form: Mapping[str, str],
		host: str,
		ip: str,
		now: Optional[datetime] = None,
	) -> RelayOutcome:
		sub = parse_submission(form)

		# Bots fill every field; pretend it worked
		if sub.website:
			logger.info(f"[Relay] Honeypot filled from {ip}; discarding submission")
			return RelayOutcome(redirect_to=self.settings.contact_success_url, honeypot=True)

		errors = validate_submission(sub)
		if errors:
			logger.info(f"[Relay] Rejected submission from {ip}: {errors}")
			return RelayOutcome(error_message=VALIDATION_ERROR_PREFIX + ', '.join(errors))

		msg = compose_email(sub, host, ip, now or datetime.now(), self.settings)
		try:
			self.transport.send(msg)
		except MailTransportError as e:
			logger.error(f"[Relay] Mail transport failed: {e.message}")
			return RelayOutcome(error_message=SEND_FAILED_MESSAGE)

		logger.info(f"[Relay] Forwarded message from {ip} to {self.settings.contact_to_email}")
		return RelayOutcome(redirect_to=self.settings.contact_success_url, sent=True)


def render_error_page(message: str, settings: Settings) -> str:
	"""Inline HTML shown when a submission is rejected or could not be sent."""
	to_email = html.escape(settings.contact_to_email)
	return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Contact Form Error</title>
  <link rel="stylesheet" href="css/styles.css">
</head>
<body>
  <section class="hero">
    <div class="container">
      <div class="hero-content" style="text-align: center;">
        <h1>Oops!</h1>
        <p class="tagline">Message Not Sent</p>
        <p class="description">{html.escape(message)}</p>
        <div class="hero-buttons">
          <a href="{html.escape(settings.contact_form_url)}" class="btn-primary">&larr; Try Again</a>
          <a href="mailto:{to_email}" class="btn-secondary">Email Directly</a>
        </div>
      </div>
    </div>
  </section>
</body>
</html>
"""
