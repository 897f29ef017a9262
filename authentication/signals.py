# Session-change notifications for the back-office
from django.contrib.auth.signals import user_logged_in, user_logged_out, user_login_failed
from django.dispatch import receiver
import logging

from .services import record_failed_attempt, reset_failed_attempts

logger = logging.getLogger(__name__)


@receiver(user_logged_in)
def on_signed_in(sender, request, user, **kwargs):
    """Clear the failure counter once the admin gets in"""
    reset_failed_attempts(user.email)
    logger.info(f"Admin signed in: {user.email}")


@receiver(user_logged_out)
def on_signed_out(sender, request, user, **kwargs):
    if user is not None:
        logger.info(f"Admin signed out: {user.email}")


@receiver(user_login_failed)
def on_sign_in_failed(sender, credentials, request=None, **kwargs):
    email = credentials.get('email') or credentials.get('username')
    if email:
        attempts = record_failed_attempt(email)
        logger.warning(f"Failed sign-in for {email} (attempt {attempts})")
