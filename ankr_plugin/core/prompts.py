"""Extraction prompt rendering shared by every action."""

import re
from typing import Any, Mapping

from ..chains import mainnets, testnets
from .schema import RequestSchema

RECENT_MESSAGES_KEY = "recentMessages"

_PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")

_DIRECTIVE = (
    "Respond with a JSON markdown block containing only the extracted values\n"
    "- Skip any values that cannot be determined.\n"
    "- If no specific blockchain is mentioned, assume the user wants to check all supported blockchains.\n"
    '- When a blockchain is mentioned by its full name (e.g., "Ethereum"), '
    'use the corresponding tag (e.g., "eth").'
)


def _chain_lines(chains) -> str:
    return "\n".join(f"- {info.display_name} ({info.identifier.value})" for info in chains)


def build_extraction_template(schema: RequestSchema) -> str:
    """Render the instruction block for one request schema.

    The result still contains the ``{{recentMessages}}`` placeholder; fill it
    with :func:`compose_context`.
    """
    sections = [_DIRECTIVE, ""]

    if schema.description:
        sections.append(f"## Schema Description\n\n{schema.description}\n")

    if schema.fields:
        properties = "\n".join(f"- {spec.name}: {spec.description}" for spec in schema.fields)
        sections.append(f"## Properties\n\n{properties}\n")

    if schema.has_chain_field:
        sections.append(
            "## Supported Blockchains\n\n"
            f"### Mainnets\n{_chain_lines(mainnets())}\n\n"
            f"### Testnets\n{_chain_lines(testnets())}\n"
        )

    sections.append(
        "## Recent Messages\n\n"
        "<recentMessages>\n"
        f"{{{{{RECENT_MESSAGES_KEY}}}}}\n"
        "</recentMessages>\n\n"
        "Given the recent messages, extract the following information according to the schema.\n\n"
        "Respond with a JSON markdown block containing only the extracted values."
    )

    return "\n".join(sections)


def compose_context(state: Mapping[str, Any], template: str) -> str:
    """Substitute ``{{key}}`` placeholders with state values (missing keys render empty)."""

    def replace(match: "re.Match[str]") -> str:
        value = state.get(match.group(1))
        return "" if value is None else str(value)

    return _PLACEHOLDER_RE.sub(replace, template)
