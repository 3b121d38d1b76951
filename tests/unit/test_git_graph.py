"""Tests for the git graph dialect."""

import pytest

from mermaid_peg import TransformError, parse
from mermaid_peg.models.git_graph import CommitType, GitGraph
from mermaid_peg.types import Direction

SOURCE = """gitGraph
    commit
    commit id: "setup" tag: "v0.1"
    branch develop
    commit
    checkout main
    commit type: HIGHLIGHT
    merge develop tag: "v1.0"
"""


def test_replay():
    graph = parse(SOURCE)
    assert isinstance(graph, GitGraph)
    assert [c.id for c in graph.commits] == ["commit-1", "setup", "commit-3", "commit-4", "commit-5"]
    assert [c.branch for c in graph.commits] == ["main", "main", "develop", "main", "main"]
    assert graph.find_commit("commit-3").parent_ids == ["setup"]
    assert graph.find_commit("commit-4").type == CommitType.Highlight
    assert graph.orientation == Direction.LR
    assert graph.is_valid()


def test_merge_commit():
    graph = parse(SOURCE)
    merge = graph.merge_commits()[0]
    assert merge.parent_ids == ["commit-4", "commit-3"]
    assert merge.merged_branch == "develop"
    assert merge.tag == "v1.0"
    assert [c.id for c in graph.tagged_commits()] == ["setup", "commit-5"]


def test_branches():
    graph = parse(SOURCE)
    develop = graph.find_branch("develop")
    assert develop.parent_branch == "main"
    assert develop.created_at == "setup"
    assert graph.head_of("develop").id == "commit-3"
    assert [c.id for c in graph.commits_on("develop")] == ["commit-3"]


def test_branch_order():
    graph = parse("gitGraph\ncommit\nbranch b order: 2\nbranch a order: 1\ncommit\n")
    assert [b.name for b in graph.ordered_branches()] == ["main", "a", "b"]


def test_orientation():
    assert parse("gitGraph TB:\ncommit\n").orientation == Direction.TD


def test_cherry_pick():
    source = 'gitGraph\ncommit id: "a"\nbranch dev\ncommit id: "b"\ncheckout main\ncherry-pick id: "b"\n'
    graph = parse(source)
    picked = graph.commits[-1]
    assert picked.is_cherry_pick
    assert picked.cherry_picked_from == "b"
    assert picked.tag == "cherry-pick:b"
    assert picked.parent_ids == ["a"]


def test_switch_alias():
    graph = parse("gitGraph\ncommit\nbranch dev\nswitch main\ncommit\n")
    assert graph.commits[-1].branch == "main"


@pytest.mark.parametrize(
    "source,message",
    [
        ("gitGraph\ncommit id: \"x\"\ncommit id: \"x\"\n", "duplicate commit id 'x'"),
        ("gitGraph\ncommit\nbranch main\n", "branch 'main' already exists"),
        ("gitGraph\ncheckout nowhere\n", "unknown branch 'nowhere'"),
        ("gitGraph\ncommit\nmerge nowhere\n", "cannot merge unknown branch"),
        ("gitGraph\ncommit\nmerge main\n", "into itself"),
        ("gitGraph\ncommit\nbranch dev\ncheckout main\nmerge dev\n", "same head"),
        ("gitGraph\ncommit type: WEIRD\n", "unknown commit type 'WEIRD'"),
        ("gitGraph\ncommit\ncherry-pick id: \"nope\"\n", "unknown commit 'nope'"),
        ("gitGraph\ncommit id: \"a\" id: \"b\"\n", "repeats the 'id' option"),
    ],
)
def test_replay_errors(source, message):
    with pytest.raises(TransformError, match=message):
        parse(source)
