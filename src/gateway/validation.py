"""Schema-driven validation of tool arguments."""

from typing import Any

from jsonschema import validators as jsonschema_validators

from src.registry.schemas import ToolDescriptor

from .exceptions import InvalidToolArgumentsError


# Violations reported through the dedicated missing/unexpected lists
_COLLECTED_VALIDATORS = {"required", "additionalProperties"}


def validate_arguments(tool: ToolDescriptor, arguments: dict[str, Any]) -> None:
    """Validate call arguments against a tool's input schema.

    All violations are gathered into one error: every missing required
    argument, every argument rejected by ``additionalProperties: false`` and
    every type mismatch.

    Args:
        tool: Tool being called.
        arguments: Arguments supplied by the client.

    Raises:
        InvalidToolArgumentsError: If any violation is found.
    """
    schema = tool.input_schema
    validator = jsonschema_validators.validator_for(schema)(schema)

    invalid: list[str] = []
    for error in validator.iter_errors(arguments):
        if error.validator in _COLLECTED_VALIDATORS and not error.absolute_path:
            continue
        location = ".".join(str(part) for part in error.absolute_path) or "arguments"
        invalid.append(f"'{location}' {error.message}")

    missing = [name for name in tool.required if name not in arguments]
    unexpected: list[str] = []
    if schema.get("additionalProperties") is False:
        unexpected = [name for name in arguments if name not in tool.properties]

    problems: list[str] = []
    if missing:
        problems.append(f"missing required arguments: {', '.join(missing)}")
    if unexpected:
        problems.append(f"unexpected arguments: {', '.join(unexpected)}")
    problems.extend(sorted(invalid))

    if problems:
        raise InvalidToolArgumentsError(tool_name=tool.name, problems=problems)
