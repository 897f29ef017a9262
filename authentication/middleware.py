# =============== MIDDLEWARE FOR THE ADMIN SESSION GATE ===============
from django.conf import settings
from django.contrib.auth.views import redirect_to_login
from django.urls import reverse
import logging

logger = logging.getLogger(__name__)


class AdminGateMiddleware:
    """
    Redirect anonymous or non-admin visitors away from admin pages to the login screen
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if self.is_gated(request.path) and not self.has_admin_session(request):
            logger.info(f"Redirecting anonymous request for {request.path} to login")
            return redirect_to_login(request.get_full_path(), reverse(settings.LOGIN_URL))

        response = self.get_response(request)
        return response

    def is_gated(self, path):
        prefix = getattr(settings, 'ADMIN_URL_PREFIX', '/admin/')
        if not path.startswith(prefix):
            return False
        return path != reverse(settings.LOGIN_URL)

    def has_admin_session(self, request):
        user = getattr(request, 'user', None)
        return bool(user and user.is_authenticated and user.is_admin)
