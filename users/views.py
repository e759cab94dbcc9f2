import logging

from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken
from django.utils import timezone
from .serializers import (
    UserLoginSerializer, UserProfileSerializer, UserUpdateSerializer
)

logger = logging.getLogger(__name__)

class UserLoginView(APIView):
    """
    Authenticate user and return JWT tokens
    """
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = UserLoginSerializer(data=request.data, context={'request': request})

        if serializer.is_valid():
            user = serializer.validated_data['user']

            # Generate JWT tokens
            refresh = RefreshToken.for_user(user)
            access_token = refresh.access_token

            # Identity claims consumed by clients
            access_token['username'] = user.username
            access_token['email'] = user.email
            access_token['role'] = user.role

            user.last_login = timezone.now()
            user.save(update_fields=['last_login'])
            logger.info("User %s logged in as %s", user.username, user.role)

            return Response({
                'user': UserProfileSerializer(user).data,
                'refresh': str(refresh),
                'access': str(access_token),
                'token_type': 'Bearer',
                'message': 'Login successful'
            })

        return Response(serializer.errors, status=status.HTTP_401_UNAUTHORIZED)

class UserProfileView(generics.RetrieveUpdateAPIView):
    """
    Get or update the current user profile
    """
    permission_classes = [permissions.IsAuthenticated]

    def get_serializer_class(self):
        if self.request.method in ('PUT', 'PATCH'):
            return UserUpdateSerializer
        return UserProfileSerializer

    def get_object(self):
        return self.request.user

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)

        if serializer.is_valid():
            self.perform_update(serializer)

            return Response({
                'message': 'Profile updated successfully',
                'user': UserProfileSerializer(instance).data
            })

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
