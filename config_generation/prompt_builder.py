"""Structured prompt builder for mapping configuration generation."""

import json
from typing import Any, Dict, Iterable, List, Sequence

from app.domain.mapping_config import MappingConfiguration, TransformKind
from app.domain.target_schema import TargetSchema

_SCHEMA_JSON = json.dumps(
    MappingConfiguration.model_json_schema(by_alias=True),
    indent=2,
)

_TRANSFORMS = ", ".join(kind.value for kind in TransformKind)

_SYSTEM_INSTRUCTIONS = """\
You generate mapping configurations that transform source records into a
standardized target format.

STRICT RULES:
- Use ONLY source field names listed below as sourceField values.
- Use ONLY target field names listed below as targetField values.
- Return strictly valid JSON matching the schema defined below.
- Do NOT include any text outside the JSON object.
- Do NOT wrap the JSON in markdown code fences.
"""

_INSTRUCTIONS = """\
1. Map source fields to target fields based on semantic meaning.
2. Set idField to the source field that holds each record's identifier.
3. Use the 'number' transform for numeric targets and 'lowercase' for
   enumerated status values when the source casing differs.
4. Map every required field; map optional fields where a source field fits.
5. Set targetRepository to the name of the chosen target schema.
"""

_SECTION_TEMPLATE = """\
## {title}
```json
{data}
```
"""


class MappingPromptBuilder:
    """Builds a deterministic prompt asking the LLM for a mapping configuration.

    Combines the parsed source sample with the candidate target schemas
    into a single prompt whose answer is an untrusted candidate
    configuration.
    """

    def build_prompt(
        self,
        *,
        source_type: str,
        source_fields: Sequence[str],
        sample_records: Sequence[Dict[str, Any]],
        target_schemas: Iterable[TargetSchema],
    ) -> str:
        """Build the full generation prompt.

        Args:
            source_type: 'csv' or 'json'.
            source_fields: Field names found in the first source record.
            sample_records: A few source records for context.
            target_schemas: Schemas the configuration may target.

        Returns:
            A fully formatted prompt string ready for LLM consumption.
        """
        sections = self._format_data_sections(
            source_fields=list(source_fields),
            sample_records=list(sample_records),
            target_schemas=self._describe_targets(target_schemas),
        )

        return (
            f"{_SYSTEM_INSTRUCTIONS}\n"
            f"The source is a {source_type.upper()} file.\n\n"
            f"# PROVIDED DATA\n\n{sections}\n"
            f"# OUTPUT SCHEMA\n\n"
            f"Your response MUST conform to this JSON schema. "
            f"Allowed transforms: {_TRANSFORMS}.\n\n"
            f"```json\n{_SCHEMA_JSON}\n```\n\n"
            f"# INSTRUCTIONS\n\n{_INSTRUCTIONS}\n"
            f"# TASK\n\n"
            f"Return a single JSON object matching the schema above."
        )

    @staticmethod
    def _describe_targets(target_schemas: Iterable[TargetSchema]) -> List[Dict[str, Any]]:
        return [
            {
                "name": schema.name,
                "required": sorted(schema.required_fields),
                "optional": sorted(schema.optional_fields),
                "descriptions": dict(schema.descriptions),
            }
            for schema in target_schemas
        ]

    def _format_data_sections(self, **data: Any) -> str:
        """Format each value as a labeled JSON section.

        Args:
            **data: Named values to include in the prompt.

        Returns:
            Concatenated formatted sections.
        """
        parts = []
        for key, value in data.items():
            title = key.replace("_", " ").title()
            body = json.dumps(value, indent=2, default=str)
            parts.append(_SECTION_TEMPLATE.format(title=title, data=body))
        return "\n".join(parts)
