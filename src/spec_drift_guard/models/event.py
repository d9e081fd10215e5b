"""
Event Data Models

GitHub Actions 이벤트 페이로드 및 저장소 좌표 모델들
"""

from dataclasses import dataclass
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator

from ..config import ConfigurationError


class PullRequestInfo(BaseModel):
    """The slice of a pull_request payload the guard needs."""
    model_config = ConfigDict(extra='ignore')

    number: int
    body: str = ""

    @field_validator('number')
    @classmethod
    def validate_number(cls, v):
        if v <= 0:
            raise ValueError('PR number must be positive')
        return v

    @field_validator('body', mode='before')
    @classmethod
    def null_body_is_empty(cls, v):
        return v or ""


class PullRequestEvent(BaseModel):
    """Workflow event payload; pull_request is absent for non-PR events."""
    model_config = ConfigDict(extra='ignore')

    pull_request: Optional[PullRequestInfo] = None


@dataclass(frozen=True)
class RepositoryCoordinates:
    """owner/name of the repository under test"""
    owner: str
    name: str

    @classmethod
    def parse(cls, full_name: Optional[str]) -> "RepositoryCoordinates":
        """Parse an `owner/name` string such as GITHUB_REPOSITORY."""
        owner, _, name = (full_name or "").partition("/")
        if not owner or not name or "/" in name:
            raise ConfigurationError("GITHUB_REPOSITORY is not set")
        return cls(owner=owner, name=name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.full_name
