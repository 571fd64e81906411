from dataclasses import dataclass, field
from enum import StrEnum


class WarningCode(StrEnum):
    MALFORMED_PARAM = 'MALFORMED_PARAM'  # Value present but fails a format check
    UNRECOGNIZED_PARAM = 'UNRECOGNIZED_PARAM'  # Dependent field given without its prerequisite


@dataclass(frozen=True)
class CreationWarning:
    """Informational annotation attached to a successfully created durable link.

    e.g. iTunes Connect analytics parameters passed without an iOS App Store id.
    """

    code: WarningCode
    message: str

    def to_dict(self) -> dict[str, str]:
        return {'warningCode': str(self.code), 'warningMessage': self.message}


@dataclass(frozen=True)
class ShortLinkResponse:
    short_link: str
    warnings: list[CreationWarning] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'shortLink': self.short_link,
            'warnings': [warning.to_dict() for warning in self.warnings],
        }


@dataclass(frozen=True)
class LongLinkResponse:
    long_link: str

    def to_dict(self) -> dict[str, str]:
        return {'longLink': self.long_link}
