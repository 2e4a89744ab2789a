"""
Schema validation for leadbook store documents.

A store document is checked against its JSON Schema when read and before it
is written, so a hand-edited file that lost a field is reported with the
company and position it came from instead of failing later in the loader.
"""

import json
from pathlib import Path
from typing import Optional

import jsonschema


class ValidationError(Exception):
    """Store document doesn't match its schema.

    `location` is the dotted JSON path of the offending value, e.g.
    "Acme.0.todo.1" for the second todo of Acme's first position. `reason`
    is the message without the document prefix.
    """

    def __init__(
        self,
        schema_name: str,
        reason: str,
        location: Optional[str] = None,
        document: Optional[Path] = None,
    ):
        self.schema_name = schema_name
        self.reason = reason + (f" at {location}" if location else "")
        self.location = location
        self.document = document
        prefix = f"{document}: " if document else ""
        super().__init__(f"{prefix}[{schema_name}] {self.reason}")


_schema_cache: dict[str, dict] = {}


def _get_schemas_dir() -> Path:
    return Path(__file__).parent.parent / "schemas"


def _load_schema(schema_name: str) -> dict:
    if schema_name not in _schema_cache:
        schema_path = _get_schemas_dir() / f"{schema_name}.schema.json"
        if not schema_path.exists():
            raise ValidationError(schema_name, f"Schema file not found: {schema_path}")
        _schema_cache[schema_name] = json.loads(schema_path.read_text(encoding="utf-8"))
    return _schema_cache[schema_name]


def _location(error: jsonschema.ValidationError) -> str:
    # Company names can contain dots; quote those so the path stays readable
    parts = []
    for part in error.absolute_path:
        text = str(part)
        parts.append(f"'{text}'" if "." in text else text)
    return ".".join(parts) if parts else "(root)"


def validate(data, schema_name: str, document: Optional[Path] = None) -> None:
    """
    Check `data` against the named schema.

    Raises:
        ValidationError: naming the first offending location, and `document`
            when the data came from (or is headed to) a file
    """
    schema = _load_schema(schema_name)
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(schema_name, e.message, _location(e), document) from None


def validate_file(filepath: Path, schema_name: str):
    """
    Read a store file and validate it.

    Returns:
        Parsed and validated document

    Raises:
        ValidationError: if the file is missing, not JSON, or doesn't match
        OSError: if the file can't be read
    """
    if not filepath.exists():
        raise ValidationError(schema_name, "file not found", document=filepath)

    try:
        data = json.loads(filepath.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValidationError(schema_name, f"invalid JSON: {e}", document=filepath) from None

    validate(data, schema_name, filepath)
    return data


def validate_before_write(data, schema_name: str, filepath: Path) -> None:
    """Refuse to persist a document that wouldn't load back."""
    try:
        validate(data, schema_name)
    except ValidationError as e:
        raise ValidationError(
            schema_name, f"refusing to write invalid data: {e.reason}", document=filepath
        ) from None
