from surprise.cli.util.paths import SurprisePaths

__all__ = ["SurprisePaths"]
