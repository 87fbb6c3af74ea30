"""Insight schema YAML validator — ensures schema definitions are well-formed."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from rhi.core.insights.loader import load_schema_file
from rhi.core.insights.models import InsightSchema

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["id", "version", "display_name", "description", "analysis_title", "framing"]


def _display(path: Path, project_root: Path | None) -> str:
    if project_root:
        try:
            return str(path.relative_to(project_root))
        except ValueError:
            return str(path)
    return str(path)


def validate_schema(schema: InsightSchema, display_path: str) -> list[str]:
    """Check a loaded schema for structural problems."""
    errors: list[str] = []

    for field_name in REQUIRED_FIELDS:
        if not getattr(schema, field_name, None):
            errors.append(f"{display_path}: Missing or empty required field '{field_name}'")

    if not schema.sections:
        errors.append(f"{display_path}: No sections declared")

    keys: set[str] = set()
    patterns: dict[str, str] = {}
    for section in schema.sections:
        if section.key in keys:
            errors.append(f"{display_path}: Duplicate section key '{section.key}'")
        keys.add(section.key)
        if not section.header.strip():
            errors.append(f"{display_path}: Section '{section.key}' has an empty header")
        for pattern in section.patterns:
            owner = patterns.get(pattern)
            if owner is not None and owner != section.key:
                errors.append(
                    f"{display_path}: Pattern {pattern!r} declared by both "
                    f"'{owner}' and '{section.key}'"
                )
            patterns.setdefault(pattern, section.key)

    for label, table in (
        ("risk", schema.risk_rules),
        ("recommendations", schema.recommendation_rules),
        ("alerts", schema.alert_rules),
    ):
        for source in table.source_sections:
            if source not in keys:
                errors.append(
                    f"{display_path}: {label} rules read undeclared section '{source}'"
                )
        for rule in table.rules:
            if not rule.flag:
                errors.append(f"{display_path}: {label} rule with an empty flag")
            if not rule.any_of and not rule.all_of:
                errors.append(f"{display_path}: {label} rule '{rule.flag}' has no keywords")

    if not schema.fallback_analysis:
        errors.append(f"{display_path}: No fallback analysis text")

    if schema.min_section_length < 0:
        errors.append(f"{display_path}: min_section_length must not be negative")

    # Version format check (semver-ish).
    if schema.version and not all(c.isdigit() or c == "." for c in schema.version):
        errors.append(
            f"{display_path}: Version '{schema.version}' doesn't look like a version number"
        )

    return errors


def validate_schema_file(
    path: Path, *, project_root: Path | None = None
) -> tuple[InsightSchema | None, list[str]]:
    """Validate a single schema YAML file.

    Returns: (schema_or_none, errors)
    """
    display_path = _display(path, project_root)

    try:
        schema = load_schema_file(path)
    except (OSError, yaml.YAMLError, KeyError, TypeError, AttributeError) as exc:
        return None, [f"{display_path}: Failed to load: {exc}"]

    errors = validate_schema(schema, display_path)

    name = path.name
    if not (name == f"{schema.id}.yaml" or name.startswith(f"{schema.id}.")):
        errors.append(
            f"{display_path}: Filename '{name}' should match schema id '{schema.id}' "
            f"(expected '{schema.id}.yaml')"
        )

    return schema, errors


def validate_schema_directory(
    directory: str | Path, *, project_root: Path | None = None
) -> tuple[int, list[str]]:
    """Validate all schema YAML files in a directory (recursively).

    Returns: (schema_count, errors)
    """
    directory = Path(directory)
    if not directory.is_dir():
        return 0, [f"Schema directory not found: {directory}"]

    yaml_files = sorted(p for p in directory.rglob("*.yaml") if not p.name.startswith("_"))
    if not yaml_files:
        return 0, [f"No schema YAML files found in {directory}"]

    errors: list[str] = []
    seen_ids: dict[str, Path] = {}
    loaded = 0

    for path in yaml_files:
        schema, file_errors = validate_schema_file(path, project_root=project_root)
        if file_errors:
            errors.extend(file_errors)
            continue

        assert schema is not None  # for type checkers
        loaded += 1

        if schema.id in seen_ids:
            here = _display(path, project_root)
            there = _display(seen_ids[schema.id], project_root)
            errors.append(f"{here}: Duplicate ID '{schema.id}' already defined in {there}")
        else:
            seen_ids[schema.id] = path

    logger.debug("Validated %d schemas in %s (%d errors)", loaded, directory, len(errors))
    return loaded, errors

