from dataclasses import dataclass


@dataclass(frozen=True)
class Platform:
    id: str
    name: str
    type: str = ""
