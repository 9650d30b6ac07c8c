"""
Runtime configuration.
Values come from the environment (optionally a local .env file) and are frozen into a Settings object.
"""

import os  # environment access
from dataclasses import dataclass  # immutable settings record
from typing import Optional  # optional credentials

from dotenv import load_dotenv  # read .env into the process environment


def _get_env_int(key: str, default: int) -> int:
	"""Read an integer variable; unset or empty falls back to the default."""
	raw = os.getenv(key)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except ValueError as exc:
		raise ValueError(f"Environment variable {key} must be an integer, got {raw!r}") from exc


def _get_env_float(key: str, default: float) -> float:
	"""Read a float variable; unset or empty falls back to the default."""
	raw = os.getenv(key)
	if raw is None or raw == "":
		return default
	try:
		return float(raw)
	except ValueError as exc:
		raise ValueError(f"Environment variable {key} must be a number, got {raw!r}") from exc


def _get_env_bool(key: str, default: bool) -> bool:
	"""Read a boolean variable; accepts true/false/1/0/yes/no/on/off."""
	raw = os.getenv(key)
	if raw is None or raw == "":
		return default
	return raw.strip().lower() in {"1", "true", "y", "yes", "on"}


@dataclass(frozen=True)
class Settings:
	# Movie catalog (OMDb)
	omdb_base_url: str = "http://www.omdbapi.com/"
	omdb_api_key: str = ""
	omdb_timeout_s: float = 10.0

	# Where the "remember my search" value lives between runs
	remember_file: str = "data/remembered_search.json"

	# Contact relay
	contact_to_email: str = "hello@example.com"
	contact_from_email: str = "no-reply@example.com"
	contact_success_url: str = "thank-you.html"
	contact_form_url: str = "index.html#contact"

	# Mail transport
	smtp_host: str = "localhost"
	smtp_port: int = 25
	smtp_username: Optional[str] = None
	smtp_password: Optional[str] = None
	smtp_starttls: bool = False
	smtp_timeout_s: float = 10.0


def load_settings(env_file: Optional[str] = None) -> Settings:
	"""Build Settings from the environment, loading a .env file first if present."""
	load_dotenv(env_file)  # silently does nothing when no .env exists
	defaults = Settings()
	return Settings(
		omdb_base_url=os.getenv("OMDB_BASE_URL", defaults.omdb_base_url),
		omdb_api_key=os.getenv("OMDB_API_KEY", defaults.omdb_api_key),
		omdb_timeout_s=_get_env_float("OMDB_TIMEOUT_S", defaults.omdb_timeout_s),
		remember_file=os.getenv("REMEMBER_FILE", defaults.remember_file),
		contact_to_email=os.getenv("CONTACT_TO_EMAIL", defaults.contact_to_email),
		contact_from_email=os.getenv("CONTACT_FROM_EMAIL", defaults.contact_from_email),
		contact_success_url=os.getenv("CONTACT_SUCCESS_URL", defaults.contact_success_url),
		contact_form_url=os.getenv("CONTACT_FORM_URL", defaults.contact_form_url),
		smtp_host=os.getenv("SMTP_HOST", defaults.smtp_host),
		smtp_port=_get_env_int("SMTP_PORT", defaults.smtp_port),
		smtp_username=os.getenv("SMTP_USERNAME") or None,
		smtp_password=os.getenv("SMTP_PASSWORD") or None,
		smtp_starttls=_get_env_bool("SMTP_STARTTLS", defaults.smtp_starttls),
		smtp_timeout_s=_get_env_float("SMTP_TIMEOUT_S", defaults.smtp_timeout_s),
	)
