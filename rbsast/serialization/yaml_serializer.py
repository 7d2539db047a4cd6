"""YAML serialization for RBS AST."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from rbsast.serialization.json_serializer import JsonSerializer

if TYPE_CHECKING:
    from rbsast.ast.base import Root


class YamlSerializer(JsonSerializer):
    """YAML serializer for RBS AST with human-readable output."""

    def __init__(
        self,
        include_metadata: bool = True,
        include_locations: bool = False,
        flow_style: bool = False,
    ) -> None:
        super().__init__(include_metadata, include_locations)
        self.flow_style = flow_style

    def serialize(self, ast: Root, output_path: str | Path | None = None) -> str:
        """Serialize AST to YAML format."""
        serialized = self._serialize_with_metadata(ast)

        yaml_str = yaml.dump(
            serialized,
            default_flow_style=self.flow_style,
            allow_unicode=True,
            sort_keys=False,
            indent=2,
            width=120,
        )

        if output_path:
            with Path(output_path).open("w", encoding="utf-8") as f:
                f.write(yaml_str)

        return yaml_str

    def _serialize_with_metadata(self, ast: Root) -> dict[str, Any]:
        result = super()._serialize_with_metadata(ast)

        if self.include_metadata:
            result["metadata"]["format"] = "rbsast-yaml"

        return result
