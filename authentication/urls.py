from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from . import views

urlpatterns = [
    # =============== BACK-OFFICE SESSION ===============
    path('admin/login/', views.signin, name='admin_login'),
    path('admin/logout/', views.signout, name='admin_logout'),

    # =============== API AUTHENTICATION ===============
    path('api/auth/login/', views.AdminTokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/auth/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
]
