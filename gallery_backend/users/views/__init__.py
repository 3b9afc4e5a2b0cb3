from .auth import LoginView, LogoutView, RegisterView
from .me import MeView
from .profile import PublicProfileView

__all__ = [
    "RegisterView",
    "LoginView",
    "LogoutView",
    "MeView",
    "PublicProfileView",
]
