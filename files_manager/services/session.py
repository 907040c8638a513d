"""
Token sessions: who is calling, and the sign-up / sign-in / sign-out flow
that hands those tokens out.
"""
import base64
import binascii
import logging
import uuid

from werkzeug.security import generate_password_hash, check_password_hash

from files_manager.core.errors import Unauthorized, ValidationFailed
from files_manager.core.ids import parse_id

logger = logging.getLogger(__name__)

AUTH_PREFIX = "auth_"


def parse_basic_auth(header: str | None) -> tuple[str, str] | None:
    """``Basic base64(email:password)`` → ``(email, password)``, None if malformed."""
    if not header:
        return None
    scheme, _, encoded = header.partition(" ")
    if scheme.lower() != "basic" or not encoded:
        return None
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    email, sep, password = decoded.partition(":")
    if not sep:
        return None
    return email, password


class SessionService:
    def __init__(self, identity_store, users, ttl_seconds: int = 24 * 60 * 60):
        self.identity_store = identity_store
        self.users = users
        self.ttl_seconds = ttl_seconds

    def resolve_identity(self, token: str | None) -> str | None:
        if not token:
            return None
        return self.identity_store.get(AUTH_PREFIX + token) or None

    def load_user(self, user_id) -> dict | None:
        user_id = parse_id(user_id)
        if user_id is None:
            return None
        return self.users.find_one({"id": user_id})

    def authenticate(self, token: str | None) -> dict:
        """The caller's user record; raises Unauthorized if the token leads nowhere."""
        user = self.load_user(self.resolve_identity(token))
        if user is None:
            raise Unauthorized()
        return user

    def register(self, email: str | None, password: str | None) -> dict:
        if not email:
            raise ValidationFailed("Missing email")
        if not password:
            raise ValidationFailed("Missing password")
        if self.users.find_one({"email": email}):
            raise ValidationFailed("Already exist")

        user_id = self.users.insert_one(
            {"email": email, "password": generate_password_hash(password)}
        )
        logger.info("Registered user %s", user_id)
        return {"id": user_id, "email": email}

    def sign_in(self, email: str, password: str) -> str:
        user = self.users.find_one({"email": email}) if email else None
        if not user or not check_password_hash(user["password"], password):
            raise Unauthorized()

        token = str(uuid.uuid4())
        self.identity_store.set(AUTH_PREFIX + token, str(user["id"]), self.ttl_seconds)
        logger.info("User %s signed in", user["id"])
        return token

    def sign_out(self, token: str | None) -> None:
        user = self.authenticate(token)
        self.identity_store.delete(AUTH_PREFIX + token)
        logger.info("User %s signed out", user["id"])
