import re

EMAIL_PATTERN = re.compile(r'\S+@\S+\.\S+')
MIN_PASSWORD_LENGTH = 6


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None
