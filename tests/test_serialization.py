"""Test JSON and YAML serialization."""

import json

import yaml

from rbsast.parser import parse
from rbsast.serialization import JsonSerializer, YamlSerializer
from rbsast.version import RBSAST_VERSION

SOURCE = """\
# A person
class Person < Object
  %a{pure}
  def name: (?Integer) -> String?
end
"""


class TestJsonSerializer:
    """Test JSON serialization."""

    def test_serialize_class(self) -> None:
        """Test the structure of a serialized class."""
        data = json.loads(JsonSerializer().serialize(parse(SOURCE)))

        assert data["ast"]["type"] == "Root"
        (cls,) = data["ast"]["declarations"]
        assert cls["type"] == "ClassDeclaration"
        assert cls["name"]["full_name"] == "Person"
        assert cls["comment"] == "A person"
        assert cls["super_class"]["name"]["name"] == "Object"
        assert "location" not in cls

        (method,) = cls["members"]
        assert method["type"] == "MethodDefinitionMember"
        assert method["name"] == "name"
        assert method["kind"] == "instance"
        assert method["annotations"] == ["pure"]
        assert method["overloading"] is False
        assert "visibility" not in method

        function = method["overloads"][0]["method_type"]["type_"]
        assert function["type"] == "Function"
        assert function["optional_positionals"][0]["type_"]["name"]["name"] == "Integer"
        assert function["return_type"]["type"] == "OptionalType"

    def test_serialize_with_metadata(self) -> None:
        """Test the metadata header."""
        data = json.loads(JsonSerializer().serialize(parse(SOURCE)))

        metadata = data["metadata"]
        assert metadata["format"] == "rbsast-json"
        assert metadata["version"] == RBSAST_VERSION
        assert metadata["ast_type"] == "Root"
        assert metadata["declarations_count"] == 1
        assert metadata["node_counts"] == {"classes": 1, "methods": 1, "overloads": 1}

    def test_serialize_without_metadata(self) -> None:
        """Test serialization without metadata."""
        data = json.loads(JsonSerializer(include_metadata=False).serialize(parse(SOURCE)))
        assert "metadata" not in data
        assert "ast" in data

    def test_serialize_locations(self) -> None:
        """Test source positions in the output."""
        serializer = JsonSerializer(include_locations=True)
        data = json.loads(serializer.serialize(parse(SOURCE)))

        (cls,) = data["ast"]["declarations"]
        assert cls["location"] == {"start": [2, 1], "end": [5, 4]}
        assert cls["members"][0]["location"]["start"] == [4, 3]

    def test_literals(self) -> None:
        """Test literal values keep their JSON types."""
        data = JsonSerializer(include_metadata=False).visit(parse('T: 1 | "a" | :b | true'))

        types = data["declarations"][0]["type_"]["types"]
        assert [(t["kind"], t["value"]) for t in types] == [
            ("integer", 1),
            ("string", "a"),
            ("symbol", "b"),
            ("true", True),
        ]

    def test_serialize_to_file(self, tmp_path) -> None:
        """Test serialization to file."""
        output = tmp_path / "ast.json"
        json_str = JsonSerializer().serialize(parse(SOURCE), output)

        assert output.read_text(encoding="utf-8") == json_str


class TestYamlSerializer:
    """Test YAML serialization."""

    def test_serialize_class(self) -> None:
        """Test YAML output."""
        yaml_str = YamlSerializer().serialize(parse(SOURCE))

        data = yaml.safe_load(yaml_str)
        assert data["metadata"]["format"] == "rbsast-yaml"
        assert data["ast"]["declarations"][0]["name"]["full_name"] == "Person"

    def test_keys_keep_field_order(self) -> None:
        """Test that keys are written in field order, not sorted."""
        yaml_str = YamlSerializer(include_metadata=False).serialize(parse("Foo: Integer"))
        assert yaml_str.index("type: ConstantDeclaration") < yaml_str.index("name:")

    def test_serialize_to_file(self, tmp_path) -> None:
        """Test serialization to file."""
        output = tmp_path / "ast.yaml"
        yaml_str = YamlSerializer().serialize(parse(SOURCE), output)

        assert output.read_text(encoding="utf-8") == yaml_str

    def test_flow_style(self) -> None:
        """Test inline mappings with flow_style."""
        yaml_str = YamlSerializer(include_metadata=False, flow_style=True).serialize(
            parse("Foo: Integer")
        )

        assert yaml_str.startswith("{ast: {type: Root")
        assert yaml.safe_load(yaml_str)["ast"]["declarations"][0]["type"] == "ConstantDeclaration"

    def test_block_style_by_default(self) -> None:
        """Test that mappings are written one key per line."""
        yaml_str = YamlSerializer(include_metadata=False).serialize(parse("Foo: Integer"))
        assert yaml_str.startswith("ast:\n  type: Root\n")
