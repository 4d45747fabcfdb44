"""Identity provider collaborator.

Registration credentials are checked here, outside the verification
state machine, so a real identity service can replace this class
without touching the KYC lifecycle.
"""

import re

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 8


class RegistrationRejected(ValueError):
    """The identity provider refused the supplied credentials."""


class IdentityProvider:
    """Minimal credential checks: email shape and password strength."""

    def validate_registration(self, email: str, password: str) -> None:
        """Raise RegistrationRejected describing every problem found."""
        problems: list[str] = []

        if not EMAIL_PATTERN.match(email.strip()):
            problems.append("email address is not valid")

        if len(password) < MIN_PASSWORD_LENGTH:
            problems.append(
                f"password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if not re.search(r"[A-Za-z]", password) or not re.search(r"\d", password):
            problems.append("password must contain letters and digits")

        if problems:
            raise RegistrationRejected("; ".join(problems))
