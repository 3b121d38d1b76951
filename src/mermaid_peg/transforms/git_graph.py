"""Git graph transform.

Statements are replayed against a small repository state: every branch has
a head commit, ``branch`` forks from the current head and checks the new
branch out, and commits without an ``id`` are numbered ``commit-1``,
``commit-2`` and so on.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mermaid_peg.grammars.git_graph import (
    BranchTree,
    CheckoutTree,
    CherryPickTree,
    CommitTree,
    GitGraphTree,
    MergeTree,
)
from mermaid_peg.models.git_graph import DEFAULT_BRANCH, CommitType, GitBranch, GitCommit, GitGraph
from mermaid_peg.syntax.common import strip_quotes
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import Option, Setting, SharedRules, apply_setting
from mermaid_peg.types import DiagramKind, Direction


@dataclass
class GitCommand:
    verb: str
    target: str | None = None
    options: dict[str, str] = field(default_factory=dict)


@dataclass
class _Repository:
    graph: GitGraph
    current: str = DEFAULT_BRANCH
    heads: dict[str, str | None] = field(default_factory=lambda: {DEFAULT_BRANCH: None})
    counter: int = 0


class GitGraphTransform(SharedRules):
    kind = DiagramKind.GitGraph

    def _options(self, verb: str, options: list[Option]) -> dict[str, str]:
        result: dict[str, str] = {}
        for option in options:
            if option.key in result:
                raise self.fail(f"'{verb}' repeats the '{option.key}' option")
            result[option.key] = option.value
        return result

    @pattern(CommitTree)
    def commit(self, node: CommitTree) -> GitCommand:
        return GitCommand("commit", None, self._options("commit", node["options"]))

    @pattern(BranchTree)
    def branch(self, node: BranchTree) -> GitCommand:
        return GitCommand("branch", strip_quotes(node["branch"]), self._options("branch", node["options"]))

    @pattern(CheckoutTree)
    def checkout(self, node: CheckoutTree) -> GitCommand:
        return GitCommand("checkout", strip_quotes(node["checkout"]))

    @pattern(MergeTree)
    def merge(self, node: MergeTree) -> GitCommand:
        return GitCommand("merge", strip_quotes(node["merge"]), self._options("merge", node["options"]))

    @pattern(CherryPickTree)
    def cherry_pick(self, node: CherryPickTree) -> GitCommand:
        return GitCommand("cherry-pick", None, self._options("cherry-pick", node["options"]))

    @pattern(GitGraphTree)
    def diagram(self, node: GitGraphTree) -> GitGraph:
        graph = GitGraph(orientation=Direction.from_token(node["orientation"]) if node["orientation"] else Direction.LR)
        repo = _Repository(graph)
        for stmt in node["statements"]:
            if isinstance(stmt, GitCommand):
                getattr(self, "_" + stmt.verb.replace("-", "_"))(repo, stmt)
            elif isinstance(stmt, Setting):
                apply_setting(graph, stmt)
        return graph

    # ─── Repository replay ───────────────────────────────────────────────

    def _add_commit(self, repo: _Repository, options: dict[str, str], parents: list[str], **extra) -> GitCommit:
        repo.counter += 1
        commit_id = options.get("id") or f"commit-{repo.counter}"
        if repo.graph.find_commit(commit_id) is not None:
            raise self.fail(f"duplicate commit id '{commit_id}'")
        kind = options.get("type", CommitType.Normal.value).upper()
        try:
            commit_type = CommitType(kind)
        except ValueError:
            raise self.fail(f"unknown commit type '{kind}'") from None
        commit = GitCommit(
            id=commit_id,
            branch=repo.current,
            type=commit_type,
            tag=options.get("tag"),
            parent_ids=parents,
            **extra,
        )
        repo.graph.commits.append(commit)
        repo.heads[repo.current] = commit_id
        return commit

    def _head_parents(self, repo: _Repository) -> list[str]:
        head = repo.heads[repo.current]
        return [head] if head else []

    def _commit(self, repo: _Repository, cmd: GitCommand) -> None:
        self._add_commit(repo, cmd.options, self._head_parents(repo))

    def _branch(self, repo: _Repository, cmd: GitCommand) -> None:
        name = cmd.target or ""
        if name in repo.heads:
            raise self.fail(f"branch '{name}' already exists")
        order = cmd.options.get("order")
        if order is not None and not order.isdigit():
            raise self.fail(f"branch '{name}' has a non-numeric order '{order}'")
        repo.graph.branches.append(
            GitBranch(
                name=name,
                order=int(order) if order is not None else None,
                parent_branch=repo.current,
                created_at=repo.heads[repo.current],
            )
        )
        repo.heads[name] = repo.heads[repo.current]
        repo.current = name

    def _checkout(self, repo: _Repository, cmd: GitCommand) -> None:
        if cmd.target not in repo.heads:
            raise self.fail(f"cannot checkout unknown branch '{cmd.target}'")
        repo.current = cmd.target

    def _merge(self, repo: _Repository, cmd: GitCommand) -> None:
        other = cmd.target or ""
        if other not in repo.heads:
            raise self.fail(f"cannot merge unknown branch '{other}'")
        if other == repo.current:
            raise self.fail(f"cannot merge branch '{other}' into itself")
        other_head = repo.heads[other]
        if other_head is None:
            raise self.fail(f"cannot merge branch '{other}' because it has no commits")
        if other_head == repo.heads[repo.current]:
            raise self.fail(f"cannot merge branch '{other}': it has the same head as '{repo.current}'")
        self._add_commit(repo, cmd.options, self._head_parents(repo) + [other_head], merged_branch=other)

    def _cherry_pick(self, repo: _Repository, cmd: GitCommand) -> None:
        source_id = cmd.options.get("id")
        if not source_id:
            raise self.fail("'cherry-pick' needs an id")
        source = repo.graph.find_commit(source_id)
        if source is None:
            raise self.fail(f"cannot cherry-pick unknown commit '{source_id}'")
        if source.branch == repo.current:
            raise self.fail(f"commit '{source_id}' is already on branch '{repo.current}'")
        parent = cmd.options.get("parent")
        if parent is not None and parent not in source.parent_ids:
            raise self.fail(f"'{parent}' is not a parent of commit '{source_id}'")
        options = {"tag": cmd.options.get("tag") or f"cherry-pick:{source_id}"}
        self._add_commit(repo, options, self._head_parents(repo), cherry_picked_from=source_id)
