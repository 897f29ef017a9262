from django.urls import path
from . import views

urlpatterns = [
    path("", views.home, name="home"),
    path("menu/", views.menu, name="menu"),
    path("events/", views.events, name="events"),
    path("contact/", views.contact, name="contact"),
]
