"""Serialization of RBS trees to JSON and YAML."""

from rbsast.serialization.json_serializer import JsonSerializer
from rbsast.serialization.yaml_serializer import YamlSerializer

__all__ = ["JsonSerializer", "YamlSerializer"]
