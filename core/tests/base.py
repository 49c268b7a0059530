from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient, APITestCase

from ..models import Client, Profile, Provider, Service, Staff

User = get_user_model()


class AdminAPITestCase(APITestCase):
    """APITestCase whose ``self.client`` is logged in as a dashboard admin."""

    def setUp(self) -> None:
        cache.clear()
        self.admin_user = User.objects.create_user(username='admin1', password='adminpass', is_staff=True)
        self.client.force_authenticate(user=self.admin_user)

    def authenticate(self, user) -> APIClient:
        """Return an authenticated APIClient for the given user."""
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    def make_client(self, name='Acme Corp', **kwargs) -> Client:
        return Client.objects.create(name=name, **kwargs)

    def make_staff(self, client, full_name='Jane Doe', email=None, **kwargs) -> Staff:
        profile = Profile.objects.create(full_name=full_name, email=email)
        return Staff.objects.create(client=client, profile=profile, **kwargs)

    def make_provider(self, name='Calm Minds', **kwargs) -> Provider:
        kwargs.setdefault('contact_email', 'hello@calmminds.test')
        return Provider.objects.create(name=name, **kwargs)

    def make_service(self, name='Counselling', **kwargs) -> Service:
        return Service.objects.create(name=name, **kwargs)
