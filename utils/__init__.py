"""Utility modules for Sleep Monitor."""
from utils.logger import setup_logging
from utils.formatters import format_minutes, format_optional, format_night
from utils.http_client import HTTPClient, APIError
