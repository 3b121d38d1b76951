"""Tests for the class diagram dialect."""

import pytest

from mermaid_peg import ParseConfig, TransformError, parse
from mermaid_peg.models.class_diagram import ClassDiagram, ClassRelationship, RelationshipType, Visibility
from mermaid_peg.types import Direction


class TestMembers:
    def test_member_lines(self):
        source = "classDiagram\nBankAccount : +String owner\nBankAccount : +deposit(amount) bool\n"
        diagram = parse(source)
        assert isinstance(diagram, ClassDiagram)
        account = diagram.find_entity("BankAccount")
        attribute = account.attributes[0]
        assert (attribute.name, attribute.type, attribute.visibility) == ("owner", "String", Visibility.Public)
        method = account.methods[0]
        assert (method.name, method.parameters, method.return_type) == ("deposit", "amount", "bool")
        assert method.signature() == "+deposit(amount) bool"

    def test_class_body(self):
        source = "classDiagram\nclass Animal {\n  -int age\n  #isMammal() bool\n  +mate()\n}\n"
        animal = parse(source).find_entity("Animal")
        assert [a.name for a in animal.attributes] == ["age"]
        assert animal.attributes[0].visibility == Visibility.Private
        assert [m.name for m in animal.methods] == ["isMammal", "mate"]
        assert animal.methods[0].visibility == Visibility.Protected

    def test_classifiers(self):
        source = "classDiagram\nShape : +draw()*\nShape : +count()$ int\nShape : +total$\n"
        shape = parse(source).find_entity("Shape")
        assert shape.methods[0].abstract
        assert shape.methods[1].static
        assert shape.methods[1].return_type == "int"
        assert shape.attributes[0].static
        assert shape.is_abstract()

    def test_colon_typed_attribute(self):
        shape = parse("classDiagram\nclass Shape {\n  name: str\n}\n").find_entity("Shape")
        assert (shape.attributes[0].name, shape.attributes[0].type) == ("name", "str")


class TestDeclarations:
    def test_generic_and_annotation(self):
        source = "classDiagram\nclass Square~Shape~\nclass Shape <<interface>>\n<<abstract>> Animal\n"
        diagram = parse(source)
        assert diagram.find_entity("Square").generic == "Shape"
        assert diagram.find_entity("Shape").is_interface()
        assert diagram.find_entity("Animal").annotations == ["abstract"]

    def test_annotation_inside_body(self):
        diagram = parse("classDiagram\nclass Color {\n  <<enumeration>>\n  RED\n}\n")
        color = diagram.find_entity("Color")
        assert color.is_enum()
        assert [a.name for a in color.attributes] == ["RED"]

    def test_label(self):
        diagram = parse('classDiagram\nclass A["An animal"]\n')
        assert diagram.find_entity("A").label == "An animal"

    def test_v2_header_and_direction(self):
        diagram = parse("classDiagram-v2\ndirection RL\nclass A\n")
        assert diagram.direction == Direction.RL
        assert [e.id for e in diagram.entities] == ["A"]


class TestRelationships:
    def test_cardinalities_and_label(self):
        diagram = parse('classDiagram\nCustomer "1" --> "*" Ticket : owns\n')
        relation = diagram.relationships[0]
        assert (relation.from_id, relation.to_id) == ("Customer", "Ticket")
        assert relation.relationship_type == RelationshipType.Association
        assert (relation.source_cardinality, relation.target_cardinality) == ("1", "*")
        assert relation.label == "owns"

    def test_left_pointing_operator_is_reversed(self):
        diagram = parse("classDiagram\nAnimal <|-- Dog\n")
        relation = diagram.relationships[0]
        assert (relation.from_id, relation.to_id) == ("Dog", "Animal")
        assert relation.relationship_type == RelationshipType.Inheritance
        assert [e.id for e in diagram.entities] == ["Dog", "Animal"]

    @pytest.mark.parametrize(
        "operator,relationship_type",
        [
            ("*--", RelationshipType.Composition),
            ("o--", RelationshipType.Aggregation),
            ("--", RelationshipType.Link),
            ("..>", RelationshipType.Dependency),
            ("..|>", RelationshipType.Realization),
            ("..", RelationshipType.DashedLink),
        ],
    )
    def test_operators(self, operator, relationship_type):
        diagram = parse(f"classDiagram\nA {operator} B\n")
        assert diagram.relationships[0].relationship_type == relationship_type

    def test_hierarchy_helpers(self):
        diagram = parse("classDiagram\nAnimal <|-- Dog\nAnimal <|-- Cat\nDog --> Bone\n")
        assert [e.id for e in diagram.parent_entities("Dog")] == ["Animal"]
        assert [e.id for e in diagram.child_entities("Animal")] == ["Dog", "Cat"]
        assert len(diagram.relationships_of_type(RelationshipType.Inheritance)) == 2


class TestNamespaces:
    def test_namespace_members(self):
        source = "classDiagram\nnamespace Shapes {\n  class Triangle\n  class Circle\n}\nTriangle --> Circle\n"
        diagram = parse(source)
        assert diagram.namespaces == {"Shapes": ["Triangle", "Circle"]}
        assert diagram.find_entity("Circle").namespace == "Shapes"

    def test_nested_namespace(self):
        source = "classDiagram\nnamespace Outer {\n  namespace Inner {\n    class A\n  }\n}\n"
        with pytest.raises(TransformError, match="cannot be nested"):
            parse(source)


class TestInteractions:
    def test_link_with_tooltip(self):
        diagram = parse('classDiagram\nclass Dog\nlink Dog "https://example.com" "Docs"\n')
        dog = diagram.find_entity("Dog")
        assert (dog.link, dog.tooltip) == ("https://example.com", "Docs")

    def test_click_href_and_call(self):
        source = 'classDiagram\nclass Dog\nclass Cat\nclick Dog href "https://example.com"\nclick Cat call meow()\n'
        diagram = parse(source)
        assert diagram.find_entity("Dog").link == "https://example.com"
        assert diagram.find_entity("Cat").callback == "meow()"

    def test_callback(self):
        diagram = parse('classDiagram\nclass Dog\ncallback Dog "bark"\n')
        assert diagram.find_entity("Dog").callback == "bark"

    def test_click_on_unknown_class(self):
        with pytest.raises(TransformError, match="unknown class 'Ghost'"):
            parse('classDiagram\nclass Dog\nclick Ghost href "https://example.com"\n')

    def test_notes(self):
        diagram = parse('classDiagram\nclass Dog\nnote for Dog "good boy"\nnote "general"\n')
        assert [(n.class_id, n.text) for n in diagram.notes] == [("Dog", "good boy"), (None, "general")]

    def test_note_for_unknown_class_lenient(self):
        source = 'classDiagram\nclass Dog\nnote for Ghost "boo"\n'
        diagram = parse(source, config=ParseConfig(strict_references=False))
        assert not diagram.is_valid()

    def test_css_class_and_style(self):
        source = 'classDiagram\nclassDef hot fill:#f00\ncssClass "A,B" hot\nstyle A stroke:#333\n'
        diagram = parse(source)
        assert diagram.class_defs == {"hot": "fill:#f00"}
        assert diagram.find_entity("B").css_classes == ["hot"]
        assert diagram.find_entity("A").style == "stroke:#333"


def test_validity_with_dangling_relationship():
    diagram = parse("classDiagram\nclass Dog\n")
    assert diagram.is_valid()
    diagram.relationships.append(ClassRelationship("Cat", "Dog"))
    assert not diagram.is_valid()
