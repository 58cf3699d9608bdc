from abc import ABCMeta
from dataclasses import dataclass
from typing import Any, dataclass_transform


@dataclass_transform()
class AutoDataclassMeta(ABCMeta):
    """Turns every subclass of a base using this metaclass into a dataclass.

    Dependencies are then declared as annotated class attributes, which is
    all dishka needs to build them:

        class CreateSurpriseHandler(CommandHandler[CreateSurprise, SurpriseCreated]):
            surprise_service: SurpriseService
    """

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any]):
        cls = super().__new__(mcs, name, bases, namespace)
        # The base class itself stays a plain class
        if any(isinstance(base, mcs) for base in bases):
            cls = dataclass(cls)
        return cls
