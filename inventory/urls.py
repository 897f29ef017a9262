from django.urls import path
from . import views


urlpatterns = [
    # Category URLs
    path('categories/', views.CategoryListCreateView.as_view(), name='category-list-create'),
    path('categories/<uuid:pk>/', views.CategoryRetrieveUpdateDestroyView.as_view(), name='category-detail'),
    path('categories/<uuid:pk>/toggle-status/', views.toggle_category_status, name='category-toggle-status'),

    # Product URLs
    path('products/', views.ProductListCreateView.as_view(), name='product-list-create'),
    path('products/<uuid:pk>/', views.ProductRetrieveUpdateDestroyView.as_view(), name='product-detail'),
]
