"""
Sign-in and sign-out for the admin back-office.

Failures are reported as :class:`SignInError` carrying one of the ``kind``
codes below, each with its own user-facing message.
"""
import logging

from django.conf import settings
from django.contrib.auth import authenticate, get_user_model, login, logout
from django.core.cache import cache
from django.db import DatabaseError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = 'invalid_credentials'
RATE_LIMITED = 'rate_limited'
NETWORK = 'network'
USER_NOT_FOUND = 'user_not_found'
UNKNOWN = 'unknown'

SIGN_IN_MESSAGES = {
    INVALID_CREDENTIALS: 'Incorrect email or password. Please try again.',
    RATE_LIMITED: 'Too many failed attempts. Please wait a moment before trying again.',
    NETWORK: 'Could not reach the server. Please check your connection and try again.',
    USER_NOT_FOUND: 'There is no account associated with this email.',
    UNKNOWN: 'Sign-in failed. Please try again later.',
}


class SignInError(Exception):
    def __init__(self, kind):
        self.kind = kind
        super().__init__(SIGN_IN_MESSAGES[kind])

    @property
    def message(self):
        return SIGN_IN_MESSAGES[self.kind]


def _failures_key(email):
    return f"signin-failures:{email.strip().lower()}"


def is_rate_limited(email):
    return cache.get(_failures_key(email), 0) >= settings.LOGIN_MAX_FAILED_ATTEMPTS


def record_failed_attempt(email):
    key = _failures_key(email)
    cache.add(key, 0, timeout=settings.LOGIN_LOCKOUT_SECONDS)
    try:
        return cache.incr(key)
    except ValueError:
        # expired between add() and incr()
        cache.set(key, 1, timeout=settings.LOGIN_LOCKOUT_SECONDS)
        return 1


def reset_failed_attempts(email):
    cache.delete(_failures_key(email))


def sign_in(request, email, password, remember_me=False):
    """Authenticate an admin and open a session on ``request``"""
    email = (email or '').strip()

    if is_rate_limited(email):
        logger.warning(f"Sign-in blocked for {email}: too many failed attempts")
        raise SignInError(RATE_LIMITED)

    try:
        user = authenticate(request, email=email, password=password)
        known = user is not None or get_user_model().objects.filter(email__iexact=email).exists()
    except DatabaseError as exc:
        logger.error(f"Sign-in backend failure for {email}: {exc}")
        raise SignInError(NETWORK) from exc

    if user is None:
        raise SignInError(INVALID_CREDENTIALS if known else USER_NOT_FOUND)

    if not user.is_admin:
        record_failed_attempt(email)
        logger.warning(f"Non-admin account {email} tried to open the back-office")
        raise SignInError(INVALID_CREDENTIALS)

    login(request, user)
    # Without "remember me" the session simply ends with the browser
    request.session.set_expiry(settings.REMEMBER_ME_AGE if remember_me else 0)
    request.session['remember_me'] = bool(remember_me)
    return user


def sign_out(request):
    logout(request)
