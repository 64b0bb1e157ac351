"""Keys that must never reach the logs in clear text."""

# Credentials for the generation providers plus personal details a user may
# type into the planning form.
SENSITIVE_KEYS: set[str] = {
    "password",
    "secret",
    "token",
    "authorization",
    "api_key",
    "apikey",
    "bearer",
    "cookie",
    "x-api-key",
    "connection_string",
    "email",
    "phone",
    "address",
    "birthday_person_name",
    "birthdaypersonname",
}


def is_sensitive_key(key: str) -> bool:
    """Check if a key should be considered sensitive and redacted.

    Args:
        key: The key name to check

    Returns:
        True if the key should be redacted, False otherwise
    """
    key_lower = key.lower()
    return any(sensitive in key_lower for sensitive in SENSITIVE_KEYS)
