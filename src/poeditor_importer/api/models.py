"""
PoEditor API Data Classes

Typed records built from PoEditor v2 JSON responses.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from poeditor_importer.exceptions import ApiError

# PoEditor timestamps look like 2020-01-31T10:00:00+0000
POEDITOR_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def parse_poeditor_date(value: Optional[str]) -> Optional[datetime]:
    """Parse a PoEditor timestamp; empty values give None."""
    if not value:
        return None
    try:
        return datetime.strptime(value, POEDITOR_DATE_FORMAT)
    except ValueError:
        # Some endpoints use the extended offset form (+00:00)
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise ApiError(f"Invalid date in PoEditor response: {value!r}", code="malformed_response") from e


@dataclass(frozen=True)
class ApiResponseStatus:
    """The 'response' envelope included in every PoEditor reply."""
    status: str
    code: str
    message: str

    @property
    def is_success(self) -> bool:
        return self.status == "success"

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ApiResponseStatus":
        return cls(
            status=str(data.get('status', '')),
            code=str(data.get('code', '')),
            message=str(data.get('message', '')),
        )


@dataclass(frozen=True)
class ProjectLanguage:
    """A language available in a PoEditor project."""
    name: str
    code: str
    translations: int = 0
    percentage: float = 0.0
    updated: Optional[datetime] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ProjectLanguage":
        try:
            return cls(
                name=data['name'],
                code=data['code'],
                translations=int(data.get('translations') or 0),
                percentage=float(data.get('percentage') or 0.0),
                updated=parse_poeditor_date(data.get('updated')),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError(f"Malformed language entry in PoEditor response: {data!r}",
                           code="malformed_response") from e


@dataclass(frozen=True)
class TranslationFileReference:
    """Short-lived signed URL for one exported translation file."""
    url: str

    def __str__(self):
        return self.url
