"""
Change Set Data Models

Pull Request 변경 파일 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional


@dataclass
class ChangedFile:
    """PR에서 변경된 개별 파일"""
    path: str
    patch: Optional[str] = None
    status: str = "modified"  # GitHub file status, informational only

    def __post_init__(self):
        """데이터 검증"""
        if not self.path:
            raise ValueError("Changed file path cannot be empty")

    @property
    def has_patch(self) -> bool:
        return self.patch is not None

    def contains(self, token: str) -> bool:
        """Exact, case-sensitive containment in the path or the diff text."""
        if token in self.path:
            return True
        return self.patch is not None and token in self.patch


@dataclass
class ChangeSet:
    """All files changed by one pull request, in retrieval order."""
    files: List[ChangedFile] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self) -> Iterator[ChangedFile]:
        return iter(self.files)

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    @property
    def files_without_patch(self) -> List[ChangedFile]:
        """Files the API returned no diff for (binary, huge, pure rename)."""
        return [f for f in self.files if not f.has_patch]
