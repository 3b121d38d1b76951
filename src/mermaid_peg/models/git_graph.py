"""Git graph model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from mermaid_peg.models.base import references_resolve, unique
from mermaid_peg.types import DiagramKind, Direction

DEFAULT_BRANCH = "main"


class CommitType(Enum):
    Normal = "NORMAL"
    Reverse = "REVERSE"
    Highlight = "HIGHLIGHT"


@dataclass
class GitCommit:
    id: str
    branch: str
    type: CommitType = CommitType.Normal
    tag: str | None = None
    parent_ids: list[str] = field(default_factory=list)
    merged_branch: str | None = None
    cherry_picked_from: str | None = None

    def is_valid(self) -> bool:
        return bool(self.id) and bool(self.branch)

    @property
    def is_merge(self) -> bool:
        return self.merged_branch is not None

    @property
    def is_cherry_pick(self) -> bool:
        return self.cherry_picked_from is not None


@dataclass
class GitBranch:
    name: str
    order: int | None = None
    parent_branch: str | None = None
    created_at: str | None = None

    def is_valid(self) -> bool:
        return bool(self.name)


@dataclass
class GitGraph:
    commits: list[GitCommit] = field(default_factory=list)
    branches: list[GitBranch] = field(default_factory=lambda: [GitBranch(DEFAULT_BRANCH, order=0)])
    orientation: Direction = Direction.LR
    title: str | None = None
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.GitGraph

    def is_valid(self) -> bool:
        if not self.commits:
            return False
        commit_ids = [c.id for c in self.commits]
        names = [b.name for b in self.branches]
        if not unique(commit_ids) or not unique(names):
            return False
        if not all(c.is_valid() for c in self.commits) or not all(b.is_valid() for b in self.branches):
            return False
        parents = [p for c in self.commits for p in c.parent_ids]
        parents += [c.cherry_picked_from for c in self.commits] + [b.created_at for b in self.branches]
        branch_refs = [c.branch for c in self.commits] + [c.merged_branch for c in self.commits]
        branch_refs += [b.parent_branch for b in self.branches]
        return references_resolve(commit_ids, parents) and references_resolve(names, branch_refs)

    def find_commit(self, commit_id: str) -> GitCommit | None:
        return next((c for c in self.commits if c.id == commit_id), None)

    def find_branch(self, name: str) -> GitBranch | None:
        return next((b for b in self.branches if b.name == name), None)

    def commits_on(self, branch: str) -> list[GitCommit]:
        return [c for c in self.commits if c.branch == branch]

    def head_of(self, branch: str) -> GitCommit | None:
        commits = self.commits_on(branch)
        return commits[-1] if commits else None

    def merge_commits(self) -> list[GitCommit]:
        return [c for c in self.commits if c.is_merge]

    def tagged_commits(self) -> list[GitCommit]:
        return [c for c in self.commits if c.tag]

    def ordered_branches(self) -> list[GitBranch]:
        """Branches by explicit order, then by declaration."""
        position = {b.name: i for i, b in enumerate(self.branches)}
        return sorted(self.branches, key=lambda b: (b.order is None, b.order or 0, position[b.name]))
