from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import (
    AdminAccountViewSet,
    CheckEmailView,
    CurrentUserView,
    CustomTokenObtainPairView,
    CustomTokenRefreshView,
    StaffViewSet,
    UserRegistrationView,
    UserViewSet,
)

router = DefaultRouter()
router.register(r'staff', StaffViewSet, basename='staff')
router.register(r'users', UserViewSet, basename='user')
router.register(r'admins', AdminAccountViewSet, basename='admin-account')

urlpatterns = [
    path('register/', UserRegistrationView.as_view(), name='register'),
    path('token/', CustomTokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('token/refresh/', CustomTokenRefreshView.as_view(), name='token_refresh'),
    path('me/', CurrentUserView.as_view(), name='current_user'),
    path('check-email/', CheckEmailView.as_view(), name='check-email'),
    path('', include(router.urls)),
]
