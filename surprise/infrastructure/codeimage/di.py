from dishka import Provider, provide

from surprise.config import Config
from surprise.domain.surprise.port.code_image import CodeImageGenerator
from surprise.infrastructure.codeimage.qr import QrCodeImageGenerator
from surprise.util.di.scope import Scope


class CodeImageProvider(Provider):
    @provide(scope=Scope.APP)
    def get_code_image(self, config: Config) -> CodeImageGenerator:
        return QrCodeImageGenerator(
            size=config.qrcode.size,
            margin=config.qrcode.margin,
            error_correction=config.qrcode.error_correction,
        )
