from django.contrib.auth.backends import ModelBackend
from django.contrib.auth import get_user_model
from django.db.models import Q

User = get_user_model()


class EmailOrUsernameModelBackend(ModelBackend):
    """Authenticate with either the account e-mail (any case) or username."""

    def authenticate(self, request, username=None, password=None, **kwargs):
        if username is None:
            username = kwargs.get(User.USERNAME_FIELD) or kwargs.get('email')
        if not username or password is None:
            return None

        candidates = User.objects.filter(
            Q(username=username) | Q(email__iexact=username)
        )
        for user in candidates:
            if user.check_password(password) and self.user_can_authenticate(user):
                return user

        # Run the hasher once anyway so unknown accounts cost the same time
        User().set_password(password)
        return None
