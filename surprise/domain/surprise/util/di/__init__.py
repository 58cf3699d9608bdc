from surprise.domain.surprise.util.di.provider import SurpriseProvider

__all__ = ["SurpriseProvider"]
