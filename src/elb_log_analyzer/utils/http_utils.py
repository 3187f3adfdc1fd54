"""
HTTP utility functions.

Helpers for interpreting the string-valued HTTP fields of access log records.
"""

from typing import Optional

STATUS_SUCCESS = "2xx_success"
STATUS_REDIRECT = "3xx_redirect"
STATUS_CLIENT_ERROR = "4xx_client_error"
STATUS_SERVER_ERROR = "5xx_server_error"


def parse_status_code(value: Optional[str]) -> Optional[int]:
    """
    Convert a status code field to an integer.

    Args:
        value: Status code as logged (e.g., "200", or "-" when the
            load balancer did not get a response)

    Returns:
        Integer status code, or None if the value is not numeric
    """
    if not value or value == "-":
        return None
    try:
        return int(value)
    except ValueError:
        return None


def get_status_category(status_code: Optional[int]) -> Optional[str]:
    """
    Categorize an HTTP status code.

    Categories:
        - '2xx_success': Successful responses (200-299)
        - '3xx_redirect': Redirection messages (300-399)
        - '4xx_client_error': Client errors (400-499)
        - '5xx_server_error': Server errors (500-599)

    Examples:
        >>> get_status_category(200)
        '2xx_success'
        >>> get_status_category(460)
        '4xx_client_error'
        >>> get_status_category(None)
    """
    if status_code is None:
        return None

    if 200 <= status_code < 300:
        return STATUS_SUCCESS
    elif 300 <= status_code < 400:
        return STATUS_REDIRECT
    elif 400 <= status_code < 500:
        return STATUS_CLIENT_ERROR
    elif 500 <= status_code < 600:
        return STATUS_SERVER_ERROR
    return None


def strip_port(address: str) -> str:
    """
    Drop the port from an ``ip:port`` address.

    Bracketed IPv6 addresses ([2001:db8::1]:443) keep their full address;
    unbracketed ones lose only the last group.
    """
    if not address or address == "-":
        return ""
    if address.startswith("["):
        bracket_end = address.find("]")
        if bracket_end != -1:
            return address[1:bracket_end]
        return address
    return address.rsplit(":", 1)[0]
