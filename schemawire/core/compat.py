from typing import Any, Mapping

# writer type -> reader types able to read every value of it
_WIDENINGS: dict[str, set[str]] = {
    "integer": {"integer", "number"},
}

# (keyword, issue when the reader bound is tighter, tighter reader bound)
_UPPER_BOUNDS = (
    ("maximum", "MAXIMUM"),
    ("exclusiveMaximum", "EXCLUSIVE_MAXIMUM"),
    ("maxLength", "MAX_LENGTH"),
    ("maxItems", "MAX_ITEMS"),
    ("maxProperties", "MAX_PROPERTIES"),
)
_LOWER_BOUNDS = (
    ("minimum", "MINIMUM"),
    ("exclusiveMinimum", "EXCLUSIVE_MINIMUM"),
    ("minLength", "MIN_LENGTH"),
    ("minItems", "MIN_ITEMS"),
    ("minProperties", "MIN_PROPERTIES"),
)
_COMBINERS = ("oneOf", "anyOf")


def backward_issues(reader: Any, writer: Any) -> list[str]:
    """
    Compare two JSON schema documents and list the changes that prevent
    `reader` from accepting every document accepted by `writer`.

    In the registry vocabulary `reader` is the latest registered version
    and `writer` the candidate the producer encodes with. An empty list
    means `reader` is backward compatible with `writer`.

    Issues are reported as "<CODE> #<json pointer>", e.g.
    "TYPE_NARROWED #/properties/amount". The comparison is structural and
    conservative: `$ref` targets are not dereferenced, two references are
    only compatible when they point to the same location.
    """
    issues: list[str] = []
    _compare(reader, writer, "#", issues)
    return issues


def _compare(reader: Any, writer: Any, path: str, issues: list[str]) -> None:
    if reader is True or reader == {}:
        return
    if reader is False:
        if writer is not False:
            issues.append(f"SCHEMA_CLOSED {path}")
        return
    if writer is False:
        return
    if writer is True:
        writer = {}

    if not isinstance(reader, Mapping) or not isinstance(writer, Mapping):
        issues.append(f"SCHEMA_CHANGED {path}")
        return

    if "$ref" in reader or "$ref" in writer:
        if reader.get("$ref") != writer.get("$ref"):
            issues.append(f"REFERENCE_CHANGED {path}")
        return

    if any(key in reader for key in _COMBINERS):
        _compare_combined(reader, writer, path, issues)
        return

    _compare_types(reader, writer, path, issues)
    _compare_enum(reader, writer, path, issues)
    _compare_bounds(reader, writer, path, issues)

    if "pattern" in reader and reader["pattern"] != writer.get("pattern"):
        issues.append(f"PATTERN_CHANGED {path}")

    if _may_be(reader, "object"):
        _compare_objects(reader, writer, path, issues)
    if _may_be(reader, "array"):
        _compare_arrays(reader, writer, path, issues)


def _types(schema: Mapping[str, Any]) -> set[str] | None:
    declared = schema.get("type")
    if declared is None:
        return None
    if isinstance(declared, str):
        return {declared}
    return set(declared)


def _may_be(schema: Mapping[str, Any], type_name: str) -> bool:
    types = _types(schema)
    return types is None or type_name in types


def _compare_types(
    reader: Mapping[str, Any],
    writer: Mapping[str, Any],
    path: str,
    issues: list[str]
) -> None:
    reader_types = _types(reader)
    if reader_types is None:
        return

    writer_types = _types(writer)
    if writer_types is None:
        issues.append(f"TYPE_NARROWED {path}")
        return

    for writer_type in sorted(writer_types):
        readable = _WIDENINGS.get(writer_type, {writer_type})
        if not readable & reader_types:
            issues.append(f"TYPE_CHANGED {path}")
            return


def _compare_enum(
    reader: Mapping[str, Any],
    writer: Mapping[str, Any],
    path: str,
    issues: list[str]
) -> None:
    if "enum" not in reader:
        return
    if "enum" not in writer:
        issues.append(f"ENUM_ADDED {path}")
        return

    allowed = list(reader["enum"])
    if any(value not in allowed for value in writer["enum"]):
        issues.append(f"ENUM_NARROWED {path}")


def _compare_bounds(
    reader: Mapping[str, Any],
    writer: Mapping[str, Any],
    path: str,
    issues: list[str]
) -> None:
    for keyword, code in _UPPER_BOUNDS:
        if keyword not in reader or isinstance(reader[keyword], bool):
            continue
        bound = writer.get(keyword)
        if bound is None:
            issues.append(f"{code}_ADDED {path}")
        elif bound > reader[keyword]:
            issues.append(f"{code}_DECREASED {path}")

    for keyword, code in _LOWER_BOUNDS:
        if keyword not in reader or isinstance(reader[keyword], bool):
            continue
        bound = writer.get(keyword)
        if bound is None:
            issues.append(f"{code}_ADDED {path}")
        elif bound < reader[keyword]:
            issues.append(f"{code}_INCREASED {path}")


def _compare_objects(
    reader: Mapping[str, Any],
    writer: Mapping[str, Any],
    path: str,
    issues: list[str]
) -> None:
    reader_props: Mapping[str, Any] = reader.get("properties", {})
    writer_props: Mapping[str, Any] = writer.get("properties", {})
    reader_extra = reader.get("additionalProperties", True)
    writer_extra = writer.get("additionalProperties", True)

    writer_required = set(writer.get("required", ()))
    for name in reader.get("required", ()):
        if name in writer_required:
            continue
        prop = reader_props.get(name)
        if isinstance(prop, Mapping) and "default" in prop:
            continue
        issues.append(f"REQUIRED_PROPERTY_ADDED {path}/required/{name}")

    for name, writer_prop in writer_props.items():
        prop_path = f"{path}/properties/{name}"
        if name in reader_props:
            _compare(reader_props[name], writer_prop, prop_path, issues)
        elif reader_extra is False:
            issues.append(f"PROPERTY_REMOVED_FROM_CLOSED_CONTENT_MODEL {prop_path}")
        elif isinstance(reader_extra, Mapping):
            _compare(reader_extra, writer_prop, prop_path, issues)

    if reader_extra is False and writer_extra is not False:
        issues.append(f"ADDITIONAL_PROPERTIES_REMOVED {path}")
    elif isinstance(reader_extra, Mapping) and writer_extra is not False:
        extra = writer_extra if isinstance(writer_extra, Mapping) else True
        _compare(reader_extra, extra, f"{path}/additionalProperties", issues)


def _compare_arrays(
    reader: Mapping[str, Any],
    writer: Mapping[str, Any],
    path: str,
    issues: list[str]
) -> None:
    if "items" not in reader:
        return
    _compare(reader["items"], writer.get("items", True), f"{path}/items", issues)

    if reader.get("uniqueItems") and not writer.get("uniqueItems"):
        issues.append(f"UNIQUE_ITEMS_ADDED {path}")


def _compare_combined(
    reader: Mapping[str, Any],
    writer: Mapping[str, Any],
    path: str,
    issues: list[str]
) -> None:
    keyword = next(key for key in _COMBINERS if key in reader)
    reader_branches = reader[keyword]
    writer_branches = None
    for key in _COMBINERS:
        if key in writer:
            writer_branches = writer[key]
            break
    if writer_branches is None:
        writer_branches = [writer]

    for index, branch in enumerate(writer_branches):
        if not any(not backward_issues(candidate, branch) for candidate in reader_branches):
            issues.append(f"COMBINED_TYPE_SUBSCHEMAS_CHANGED {path}/{keyword}/{index}")
