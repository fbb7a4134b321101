"""
Naming token resolver.

Resolves folder and file naming templates for one roster entry BEFORE
any job is enqueued. The queue never constructs names - it receives
resolved paths.

Supported tokens:
- {number}       : Roster number text (e.g. "007")
- {first_name}   : Roster first name text
- {last_name}    : Roster last name text
- {composition}  : Name of the composition being rendered
- {index}        : Roster index, unpadded decimal

Rules:
- Names must match the delivery convention exactly:
    folder: {number}_{first_name}_{last_name}
    file:   {composition}_Option{index}.<extension>
- Blank roster fields stay blank; separators are NOT collapsed
- Unknown tokens are left as-is to surface template errors visibly
"""

import re
from typing import Dict

from pydantic import BaseModel, ConfigDict


# Regex to match tokens like {first_name}
TOKEN_PATTERN = re.compile(r"\{(\w+)\}")

FOLDER_TEMPLATE = "{number}_{first_name}_{last_name}"
FILE_TEMPLATE = "{composition}_Option{index}"


class NamingTuple(BaseModel):
    """Naming fields resolved for one roster entry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    number: str = ""
    first_name: str = ""
    last_name: str = ""


def resolve_template(template: str, token_values: Dict[str, str]) -> str:
    """
    Substitute tokens in a naming template.

    Example:
        >>> resolve_template("{composition}_Option{index}", {"composition": "CompA", "index": "5"})
        'CompA_Option5'
    """

    def replace_token(match: re.Match) -> str:
        token_name = match.group(1)
        if token_name in token_values:
            return token_values[token_name]
        return match.group(0)

    return TOKEN_PATTERN.sub(replace_token, template)


def folder_name(naming: NamingTuple) -> str:
    """
    Per-entry folder name.

    Example:
        >>> folder_name(NamingTuple(number="007", first_name="Jane", last_name="Doe"))
        '007_Jane_Doe'
    """
    return resolve_template(
        FOLDER_TEMPLATE,
        {
            "number": naming.number,
            "first_name": naming.first_name,
            "last_name": naming.last_name,
        },
    )


def file_name(composition_name: str, index: int, extension: str = "mov") -> str:
    """
    Per-job file name, including extension.

    Example:
        >>> file_name("CompA", 5)
        'CompA_Option5.mov'
    """
    stem = resolve_template(
        FILE_TEMPLATE,
        {"composition": composition_name, "index": str(index)},
    )
    return f"{stem}.{extension}"
