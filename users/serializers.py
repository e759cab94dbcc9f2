from rest_framework import serializers
from django.contrib.auth import authenticate
from .models import User, default_user_settings

class UserLoginSerializer(serializers.Serializer):
    username = serializers.CharField(required=True)
    password = serializers.CharField(write_only=True, required=True)

    def validate(self, attrs):
        username = attrs.get('username')
        password = attrs.get('password')

        if not username or not password:
            raise serializers.ValidationError("Both username and password are required.")

        user = authenticate(
            request=self.context.get('request'),
            username=username,
            password=password
        )
        if user is None:
            raise serializers.ValidationError("Invalid username or password.")
        if not user.is_active:
            raise serializers.ValidationError("This account is disabled.")

        attrs['user'] = user
        return attrs

class UserProfileSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source='display_name', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'username', 'name', 'email', 'first_name', 'last_name',
            'role', 'company_name', 'phone', 'position', 'settings',
            'date_joined', 'last_login'
        ]
        read_only_fields = fields

class UserUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            'first_name', 'last_name', 'email', 'company_name',
            'phone', 'position', 'settings'
        ]

    def validate_email(self, value):
        user = self.context['request'].user
        if User.objects.exclude(pk=user.pk).filter(email=value).exists():
            raise serializers.ValidationError("This email is already in use.")
        return value

    def validate_settings(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("Settings must be a JSON object")

        allowed = default_user_settings()
        unknown = set(value) - set(allowed)
        if unknown:
            raise serializers.ValidationError(
                f"Unknown settings: {', '.join(sorted(unknown))}"
            )

        # Merge over the stored values so partial updates keep the rest
        current = dict(allowed)
        if self.instance is not None:
            current.update(self.instance.settings or {})
        current.update(value)
        return current
