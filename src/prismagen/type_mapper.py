"""Mapping from TypeScript type spellings to Prisma scalar types."""

# Exact spellings, checked before any structural rule
_TYPE_MAPPING: dict[str, str] = {
    "string": "String",
    "number": "Int",
    "boolean": "Boolean",
    "Date": "DateTime",
    "Date | string": "DateTime",
    "BigInt": "BigInt",
    "bigint": "BigInt",
    "Buffer": "Bytes",
    "Uint8Array": "Bytes",
    "any": "Json",
    "object": "Json",
    "Record<string, any>": "Json",
    "Record<string, unknown>": "Json",
    "unknown": "String",
}

_PRIMITIVE_ARRAYS: dict[str, str] = {
    "string[]": "String[]",
    "number[]": "Int[]",
    "boolean[]": "Boolean[]",
}

_CONTAINER_MARKERS = ("[]", "Array<", "Record<", "Map<", "Set<")

_DEFAULT_SCALAR = "String"
_STRUCTURED_SCALAR = "Json"


def map_type_to_prisma(type_text: str) -> str:
    """Map a raw TypeScript type spelling to a Prisma scalar type.

    Args:
        type_text: The type annotation exactly as written in source

    Returns:
        The Prisma scalar type name. Unrecognised spellings map to String.

    """
    type_text = type_text.strip()

    if type_text in _TYPE_MAPPING:
        return _TYPE_MAPPING[type_text]

    if type_text in _PRIMITIVE_ARRAYS:
        return _PRIMITIVE_ARRAYS[type_text]

    if "|" in type_text:
        members = [member.strip() for member in type_text.split("|")]
        if "string" in members:
            return "String"
        if "number" in members:
            return "Int"
        return _STRUCTURED_SCALAR

    if any(marker in type_text for marker in _CONTAINER_MARKERS):
        return _STRUCTURED_SCALAR

    return _DEFAULT_SCALAR
