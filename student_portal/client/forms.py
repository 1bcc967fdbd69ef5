from student_portal.core.validation import MIN_PASSWORD_LENGTH, is_valid_email


def validate_signup_form(name: str, email: str, password: str, confirm_password: str) -> dict[str, str]:
    errors = {}

    if not name.strip():
        errors['name'] = 'Name is required'

    if not email.strip():
        errors['email'] = 'Email is required'
    elif not is_valid_email(email.strip()):
        errors['email'] = 'Email is invalid'

    if not password:
        errors['password'] = 'Password is required'
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors['password'] = f'Password must be at least {MIN_PASSWORD_LENGTH} characters'

    if password != confirm_password:
        errors['confirm_password'] = 'Passwords do not match'

    return errors


def validate_login_form(email: str, password: str) -> dict[str, str]:
    errors = {}
    if not email.strip():
        errors['email'] = 'Email is required'
    if not password:
        errors['password'] = 'Password is required'
    return errors
