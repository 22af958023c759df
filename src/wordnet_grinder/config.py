"""YAML grind configuration.

Example::

    output: wndb/
    header: oewn
    compat: true            # shorthand for the three compat flags
    flags:                  # or a bitmask such as 0x10000007
      no_reindex: false
    baseline: sensenums.txt
    baseline_mode: legacy
    policy: best_effort
    parallel: true
    outputs: [data, index, sense]
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from wordnet_grinder.encoder import RelationPolicy
from wordnet_grinder.exceptions import ParseError
from wordnet_grinder.formatter import HEADERS
from wordnet_grinder.models import Flags
from wordnet_grinder.ordering import BaselineMode

_FLAG_NAMES = {
    "lexid_compat": "lex_id_compat",
    "lex_id_compat": "lex_id_compat",
    "pointer_compat": "pointer_compat",
    "verbframe_compat": "verb_frame_compat",
    "verb_frame_compat": "verb_frame_compat",
    "no_reindex": "no_reindex",
}

_KEYS = {
    "output", "header", "compat", "flags", "baseline", "baseline_mode",
    "policy", "parallel", "outputs", "lexicons",
}


@dataclass
class GrindConfig:
    """Settings of a grind run; CLI options override them."""

    output: Path | None = None
    flags: Flags = Flags()
    header: str = "oewn"
    baseline: Path | None = None
    baseline_mode: BaselineMode = BaselineMode.LEGACY
    policy: RelationPolicy = RelationPolicy.STRICT
    parallel: bool = False
    outputs: tuple[str, ...] | None = None
    lexicons: tuple[str, ...] | None = None
    source_file: Path | None = None


def load_config(source: str | Path | dict[str, Any]) -> GrindConfig:
    """Load a grind configuration from a YAML file, YAML string or dict.

    Raises:
        ParseError: if the content cannot be parsed or is invalid
        FileNotFoundError: if the file does not exist
    """
    source_path: Path | None = None

    if isinstance(source, dict):
        data = source
    elif isinstance(source, Path) or (isinstance(source, str) and _is_file_path(source)):
        source_path = Path(source)
        if not source_path.exists():
            raise FileNotFoundError(f"File not found: {source_path}")
        with open(source_path, encoding="utf-8") as f:
            data = _safe_load(f)
    else:
        data = _safe_load(source)

    return _parse_config(data, source_path)


def _is_file_path(s: str) -> bool:
    if "\n" in s:
        return False
    if "/" in s or "\\" in s:
        return True
    return s.endswith((".yaml", ".yml"))


def _safe_load(stream: Any) -> dict[str, Any]:
    try:
        data = yaml.safe_load(stream)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        raise ParseError(
            f"Invalid YAML: {e}", line=mark.line + 1 if mark else None
        ) from e

    if data is None:
        raise ParseError("Empty configuration")
    if not isinstance(data, dict):
        raise ParseError("YAML root must be a mapping (dictionary)")
    return data


def _parse_config(data: dict[str, Any], source_path: Path | None) -> GrindConfig:
    unknown = set(data) - _KEYS
    if unknown:
        raise ParseError(f"Unknown field(s): {', '.join(sorted(unknown))}")

    config = GrindConfig(source_file=source_path)

    if data.get("output") is not None:
        config.output = Path(data["output"])

    header = data.get("header", config.header)
    if header not in HEADERS:
        raise ParseError(
            f"Field 'header' must be one of: {', '.join(sorted(HEADERS))}"
        )
    config.header = header

    config.flags = _parse_flags(data.get("compat", False), data.get("flags") or {})

    if data.get("baseline") is not None:
        config.baseline = Path(data["baseline"])

    try:
        config.baseline_mode = BaselineMode(data.get("baseline_mode", "legacy"))
        config.policy = RelationPolicy(data.get("policy", "strict"))
    except ValueError as e:
        raise ParseError(str(e)) from e

    parallel = data.get("parallel", False)
    if not isinstance(parallel, bool):
        raise ParseError("Field 'parallel' must be a boolean")
    config.parallel = parallel

    config.outputs = _string_list(data, "outputs")
    config.lexicons = _string_list(data, "lexicons")
    return config


def _parse_flags(compat: Any, flags: Any) -> Flags:
    if not isinstance(compat, bool):
        raise ParseError("Field 'compat' must be a boolean")
    if isinstance(flags, int) and not isinstance(flags, bool):
        # Bitmask form, e.g. 0x7 for the three compat switches
        bits = flags | (Flags.legacy().to_bits() if compat else 0)
        return Flags.from_bits(bits)
    if not isinstance(flags, dict):
        raise ParseError("Field 'flags' must be a mapping or a bitmask")

    values = {
        "lex_id_compat": compat,
        "pointer_compat": compat,
        "verb_frame_compat": compat,
        "no_reindex": False,
    }
    for name, value in flags.items():
        field_name = _FLAG_NAMES.get(name)
        if field_name is None:
            raise ParseError(f"Unknown flag: {name!r}")
        if not isinstance(value, bool):
            raise ParseError(f"Flag '{name}' must be a boolean")
        values[field_name] = value
    return Flags(**values)


def _string_list(data: dict[str, Any], key: str) -> tuple[str, ...] | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ParseError(f"Field '{key}' must be a list of strings")
    return tuple(value)
