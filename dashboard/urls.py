from django.urls import path
from . import views

urlpatterns = [
    path("", views.dashboard, name="dashboard"),

    path('categories/', views.list_categories, name='list_categories'),
    path('categories/add/', views.add_category, name='add_category'),
    path('categories/<uuid:pk>/edit/', views.edit_category, name='edit_category'),
    path('categories/<uuid:pk>/toggle/', views.toggle_category, name='toggle_category'),
    path('categories/<uuid:pk>/delete/', views.delete_category, name='delete_category'),

    path('products/', views.list_products, name='list_products'),
    path('products/add/', views.add_product, name='add_product'),
    path('products/add-category/', views.add_product_category, name='add_product_category'),
    path('products/<uuid:pk>/edit/', views.edit_product, name='edit_product'),
    path('products/<uuid:pk>/delete/', views.delete_product, name='delete_product'),

    path('events/', views.list_events, name='list_events'),
    path('events/add/', views.add_event, name='add_event'),
    path('events/<uuid:pk>/edit/', views.edit_event, name='edit_event'),
    path('events/<uuid:pk>/delete/', views.delete_event, name='delete_event'),

    path('home-sections/', views.list_home_sections, name='list_home_sections'),
    path('home-sections/add/', views.add_home_section, name='add_home_section'),
    path('home-sections/<uuid:pk>/edit/', views.edit_home_section, name='edit_home_section'),
    path('home-sections/<uuid:pk>/move/<str:direction>/', views.move_home_section, name='move_home_section'),
    path('home-sections/<uuid:pk>/delete/', views.delete_home_section, name='delete_home_section'),
]
