from django.contrib import messages
from django.shortcuts import render, redirect
from django.utils.http import url_has_allowed_host_and_scheme
from drf_spectacular.utils import extend_schema, OpenApiExample
from rest_framework import permissions
from rest_framework_simplejwt.views import TokenObtainPairView

from .forms import SignInForm
from .serializers import AdminTokenObtainPairSerializer
from .services import SignInError, sign_in, sign_out

# =============== SESSION LOGIN (BACK-OFFICE PAGES) ===============


def signin(request):
    if request.user.is_authenticated and request.user.is_admin:
        return redirect('dashboard')

    form = SignInForm(request.POST or None)
    if request.method == "POST":
        if not form.is_valid():
            messages.error(request, 'Please fill in all fields.')
        else:
            try:
                sign_in(
                    request,
                    form.cleaned_data['email'],
                    form.cleaned_data['password'],
                    remember_me=form.cleaned_data['remember_me'],
                )
            except SignInError as e:
                messages.error(request, e.message)
            else:
                messages.success(request, 'Signed in successfully!')
                next_url = request.POST.get('next') or request.GET.get('next')
                if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
                    return redirect(next_url)
                return redirect('dashboard')

    context = {
        'form': form,
        'next': request.GET.get('next', ''),
    }
    return render(request, 'authentication/login.html', context)


def signout(request):
    sign_out(request)
    return redirect('admin_login')


# =============== TOKEN LOGIN (API CLIENTS) ===============

class AdminTokenObtainPairView(TokenObtainPairView):
    """
    JWT authentication endpoint for API clients of the admin back-office.
    """
    serializer_class = AdminTokenObtainPairSerializer
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        summary="Admin login with JWT token",
        description="Authenticate an admin with email and password and receive an access/refresh pair.",
        request=AdminTokenObtainPairSerializer,
        responses={
            200: {
                'type': 'object',
                'properties': {
                    'refresh': {'type': 'string', 'description': 'JWT refresh token'},
                    'access': {'type': 'string', 'description': 'JWT access token'},
                    'user': {'type': 'object', 'description': 'User information'},
                }
            },
            400: {'description': 'Account is not an admin'},
            401: {'description': 'Invalid credentials'},
        },
        examples=[
            OpenApiExample(
                'Admin Login',
                value={
                    "email": "admin@cafeteca.ro",
                    "password": "SecurePassword123!"
                }
            )
        ]
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)
