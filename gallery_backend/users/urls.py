# users/urls.py

from django.urls import path

from .views import LoginView, LogoutView, MeView, PublicProfileView, RegisterView

app_name = "users"

urlpatterns = [
    # ---------------- PUBLIC AUTH ----------------
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("profiles/<uuid:user_id>/", PublicProfileView.as_view(), name="public-profile"),
    # ---------------- AUTHENTICATED ----------------
    path("logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),
]
