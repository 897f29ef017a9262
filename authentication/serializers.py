from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .models import CustomUser


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomUser
        fields = ['id', 'email', 'first_name', 'last_name', 'role', 'last_login']
        read_only_fields = fields


class AdminTokenObtainPairSerializer(TokenObtainPairSerializer):
    """JWT login for API clients; only admin accounts receive tokens"""

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['role'] = user.role
        return token

    def validate(self, attrs):
        data = super().validate(attrs)
        if not self.user.is_admin:
            raise serializers.ValidationError('Admin access required.')
        data['user'] = UserSerializer(self.user).data
        return data
