from dishka import Provider, provide

from surprise.domain.surprise.port.password import PasswordHasher
from surprise.infrastructure.security.password import Argon2PasswordHasher
from surprise.util.di.scope import Scope


class SecurityProvider(Provider):
    @provide(scope=Scope.APP)
    def get_password_hasher(self) -> PasswordHasher:
        return Argon2PasswordHasher()
