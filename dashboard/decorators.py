from functools import wraps

from django.contrib import messages
from django.contrib.auth import logout
from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect


def admin_access(view_func):
    """Let only signed-in admins through; everybody else goes back to the login page"""
    @wraps(view_func)
    def wrapper_func(request, *args, **kwargs):
        user = request.user
        if not user.is_authenticated:
            messages.info(request, 'Please login to access this page')
            return redirect_to_login(request.get_full_path())

        if not user.is_admin:
            logout(request)
            messages.error(request, 'Admin access required.')
            return redirect('admin_login')

        return view_func(request, *args, **kwargs)

    return wrapper_func
