"""Tests for the architecture dialect."""

import pytest

from mermaid_peg import ParseConfig, TransformError, parse
from mermaid_peg.models.architecture import ArchitectureDiagram, Side

SOURCE = """architecture-beta
    group api(cloud)[API]

    service db(database)[Database] in api
    service disk1(disk)[Storage] in api
    service server(server)[Server] in api
    junction j1

    db:L -- R:server
    disk1:T --> B:server
    server{group}:B <--> T:j1
"""


class TestDeclarations:
    def test_groups_services_junctions(self):
        diagram = parse(SOURCE)
        assert isinstance(diagram, ArchitectureDiagram)
        assert diagram.group_ids() == ["api"]
        assert [s.id for s in diagram.services] == ["db", "disk1", "server"]
        assert [j.id for j in diagram.junctions] == ["j1"]
        assert diagram.is_valid()

    def test_icon_label_and_parent(self):
        diagram = parse(SOURCE)
        db = diagram.find_service("db")
        assert (db.icon, db.label, db.parent) == ("database", "Database", "api")
        assert diagram.find_group("api").icon == "cloud"
        assert diagram.find_junction("j1").parent is None

    def test_label_defaults_to_id(self):
        diagram = parse("architecture-beta\nservice web\n")
        assert diagram.find_service("web").label == "web"
        assert diagram.find_service("web").icon is None

    def test_services_in_group(self):
        diagram = parse(SOURCE)
        assert [s.id for s in diagram.services_in("api")] == ["db", "disk1", "server"]

    def test_nested_group(self):
        diagram = parse("architecture-beta\ngroup outer[Outer]\ngroup inner[Inner] in outer\n")
        assert diagram.find_group("inner").parent == "outer"

    def test_title(self):
        diagram = parse("architecture-beta\ntitle Deployment\nservice a\n")
        assert diagram.title == "Deployment"


class TestEdges:
    def test_sides(self):
        edge = parse(SOURCE).edges[0]
        assert (edge.from_id, edge.from_side, edge.to_side, edge.to_id) == ("db", Side.Left, Side.Right, "server")

    @pytest.mark.parametrize(
        "arrow, arrow_from, arrow_to",
        [("--", False, False), ("-->", False, True), ("<--", True, False), ("<-->", True, True)],
    )
    def test_arrowheads(self, arrow, arrow_from, arrow_to):
        diagram = parse(f"architecture-beta\nservice a\nservice b\na:R {arrow} L:b\n")
        edge = diagram.edges[0]
        assert (edge.arrow_from, edge.arrow_to) == (arrow_from, arrow_to)

    def test_group_marker(self):
        edge = parse(SOURCE).edges[2]
        assert edge.from_group
        assert not edge.to_group
        assert edge.to_id == "j1"

    def test_lookups(self):
        diagram = parse(SOURCE)
        assert [e.from_id for e in diagram.edges_to("server")] == ["db", "disk1"]
        assert [e.to_id for e in diagram.edges_from("server")] == ["j1"]


class TestErrors:
    def test_duplicate_id(self):
        with pytest.raises(TransformError, match="'a' is declared twice"):
            parse("architecture-beta\nservice a\njunction a\n")

    def test_unknown_group(self):
        with pytest.raises(TransformError, match="unknown group 'ghost'"):
            parse("architecture-beta\nservice a in ghost\n")

    def test_group_inside_itself(self):
        with pytest.raises(TransformError, match="cannot contain itself"):
            parse("architecture-beta\ngroup g in g\n")

    def test_unknown_endpoint(self):
        with pytest.raises(TransformError, match="unknown service or junction 'b'"):
            parse("architecture-beta\nservice a\na:R -- L:b\n")

    def test_group_marker_needs_group(self):
        with pytest.raises(TransformError, match="is not in a group"):
            parse("architecture-beta\nservice a\nservice b\na{group}:R -- L:b\n")

    def test_lenient_keeps_dangling_edge(self):
        diagram = parse("architecture-beta\nservice a\na:R -- L:b\n", config=ParseConfig(strict_references=False))
        assert len(diagram.edges) == 1
        assert not diagram.is_valid()
