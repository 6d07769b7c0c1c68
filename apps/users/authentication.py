# apps/users/authentication.py
from rest_framework.authentication import SessionAuthentication


class SessionCookieAuthentication(SessionAuthentication):
    """
    Session cookie authentication that answers anonymous requests with 401.

    DRF downgrades NotAuthenticated to 403 when the first authentication class
    has no `WWW-Authenticate` challenge, so one is supplied here.
    """

    def authenticate_header(self, request):
        return 'Session'
