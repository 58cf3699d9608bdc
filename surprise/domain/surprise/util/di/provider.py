from dishka import Provider, provide

from surprise.config import Config
from surprise.domain.surprise.command.create import CreateSurpriseHandler
from surprise.domain.surprise.command.verify_password import VerifyPasswordHandler
from surprise.domain.surprise.model.value import UploadLimits
from surprise.domain.surprise.port.password import PasswordHasher
from surprise.domain.surprise.port.repository import SurpriseRepository
from surprise.domain.surprise.port.storage import BlobStoragePort
from surprise.domain.surprise.query.download_file import DownloadFileHandler
from surprise.domain.surprise.query.get_surprise import GetSurpriseHandler
from surprise.domain.surprise.service.surprise import SurpriseService
from surprise.util.di.scope import Scope


class SurpriseProvider(Provider):
    @provide(scope=Scope.UOW)
    def get_surprise_service(
        self,
        surprise_repo: SurpriseRepository,
        blob_storage: BlobStoragePort,
        password_hasher: PasswordHasher,
        config: Config,
    ) -> SurpriseService:
        return SurpriseService(
            surprise_repo=surprise_repo,
            blob_storage=blob_storage,
            password_hasher=password_hasher,
            limits=UploadLimits(
                max_file_size=config.uploads.max_file_size,
                allowed_type_prefixes=tuple(config.uploads.allowed_type_prefixes),
            ),
            slug_length=config.uploads.slug_length,
            slug_attempts=config.uploads.slug_attempts,
            io_timeout=config.storage.timeout,
        )

    # Command Handlers
    create_handler = provide(CreateSurpriseHandler, scope=Scope.UOW)
    verify_password_handler = provide(VerifyPasswordHandler, scope=Scope.UOW)

    # Query Handlers
    get_surprise_handler = provide(GetSurpriseHandler, scope=Scope.UOW)
    download_file_handler = provide(DownloadFileHandler, scope=Scope.UOW)
