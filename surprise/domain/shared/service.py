from surprise.domain.shared.dataclass_meta import AutoDataclassMeta


class Service(metaclass=AutoDataclassMeta):
    """Domain service base; collaborators are dataclass fields."""
