import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from authentication.models import CustomUser

PASSWORD = 'Str0ng-Passw0rd!'


def bucket(name):
    return {
        'BACKEND': 'django.core.files.storage.InMemoryStorage',
        'OPTIONS': {'base_url': f'/media/{name}/'},
    }


@pytest.fixture(autouse=True)
def image_buckets(settings):
    settings.STORAGES = {
        **settings.STORAGES,
        'category-images': bucket('category-images'),
        'event-images': bucket('event-images'),
        'home-images': bucket('home-images'),
    }


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def admin_account(db):
    return CustomUser.objects.create_admin(email='admin@cafeteca.ro', password=PASSWORD)


@pytest.fixture
def plain_account(db):
    return CustomUser.objects.create_user(email='guest@cafeteca.ro', password=PASSWORD)


@pytest.fixture
def admin_client(client, admin_account):
    client.force_login(admin_account)
    return client


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_api(api_client, admin_account):
    api_client.force_authenticate(user=admin_account)
    return api_client
