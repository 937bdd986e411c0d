"""Structural (de)serialization of identifiers and dependency declarations.

Plain dict/JSON form of the model, independent of the declaration text
format. Input dicts are validated with jsonschema Draft-07 before the model
is rebuilt, so transport payloads fail with a path to the offending field.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from jsonschema import Draft7Validator

from bundle.dependency import Dependency
from bundle.dependency_information import DependencyInformation
from bundle.dependency_list import DependencyList
from bundle.identifier import Identifier
from versioning.parser import parse_version_range


class SchemaError(ValueError):
    """Raised when data fails to validate against a provided schema."""


_STRING_LIST = {"type": "array", "items": {"type": "string"}}

IDENTIFIER_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "qualifiers": _STRING_LIST,
        "meta_qualifiers": _STRING_LIST,
    },
    "additionalProperties": False,
}

DEPENDENCY_INFORMATION_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["dependencies"],
    "properties": {
        "dependencies": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["bundle", "entries"],
                "properties": {
                    "bundle": {"type": "string", "minLength": 1},
                    "entries": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["kinds", "range"],
                            "properties": {
                                "kinds": {"type": "array", "items": {"type": "string"}, "minItems": 1},
                                "range": {"type": "string", "minLength": 1},
                                "metadata": {
                                    "type": "object",
                                    "additionalProperties": {"type": "string"},
                                },
                            },
                            "additionalProperties": False,
                        },
                    },
                },
                "additionalProperties": False,
            },
        },
    },
    "additionalProperties": False,
}


def validate(schema: Dict[str, Any], data: Any) -> None:
    """Validate ``data`` strictly and raise on the first error."""
    validator = Draft7Validator(schema)
    errs = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errs:
        first = errs[0]
        path = "/".join([str(p) for p in first.path])
        raise SchemaError(f"Invalid data at '{path}': {first.message}")


def identifier_to_dict(identifier: Identifier) -> Dict[str, Any]:
    return {
        "name": identifier.name,
        "qualifiers": list(identifier.qualifiers),
        "meta_qualifiers": list(identifier.meta_qualifiers),
    }


def identifier_from_dict(data: Dict[str, Any]) -> Identifier:
    """Rebuild an identifier, re-validating it through the text grammar."""
    validate(IDENTIFIER_SCHEMA, data)
    parts = [data["name"]]
    parts.extend(data.get("qualifiers", []))
    parts.extend(data.get("meta_qualifiers", []))
    identifier = Identifier.parse("-".join(parts))
    if set(identifier.meta_qualifiers) != {q.lower() for q in data.get("meta_qualifiers", [])}:
        raise SchemaError(f"Meta-qualifiers do not match identifier grammar: {identifier}")
    return identifier


def dependency_to_dict(dependency: Dependency) -> Dict[str, Any]:
    return {
        "kinds": list(dependency.kinds),
        "range": str(dependency.range),
        "metadata": dict(dependency.metadata),
    }


def dependency_from_dict(data: Dict[str, Any]) -> Dependency:
    builder = Dependency.builder().set_range(parse_version_range(data["range"]))
    for kind in data["kinds"]:
        builder.add_kind(kind)
    for name, value in data.get("metadata", {}).items():
        builder.add_metadata(name, value)
    return builder.build()


def dependency_information_to_dict(info: DependencyInformation) -> Dict[str, Any]:
    return {
        "dependencies": [
            {
                "bundle": str(bundle_id),
                "entries": [dependency_to_dict(dep) for dep in dependency_list],
            }
            for bundle_id, dependency_list in info.dependencies.items()
        ]
    }


def dependency_information_from_dict(data: Dict[str, Any]) -> DependencyInformation:
    """Rebuild declarations from their dict form.

    Raises:
        SchemaError: If ``data`` does not match the schema or repeats a bundle.
        NestDepsError: If an identifier, kind, metadata name or range is invalid.
    """
    validate(DEPENDENCY_INFORMATION_SCHEMA, data)
    result = {}
    for item in data["dependencies"]:
        bundle_id = Identifier.parse(item["bundle"])
        if bundle_id in result:
            raise SchemaError(f"Duplicate bundle in dependencies: {bundle_id}")
        result[bundle_id] = DependencyList.create(dependency_from_dict(e) for e in item["entries"])
    return DependencyInformation.create(result)


def to_json(info: DependencyInformation, indent: int = 2) -> str:
    return json.dumps(dependency_information_to_dict(info), indent=indent)


def from_json(text: str) -> DependencyInformation:
    return dependency_information_from_dict(json.loads(text))
