# AgentConfig Configuration Loader
# Load, save, validate and initialize agentconfig.yml

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from agentconfig.config.defaults import create_default_config, generate_default_config
from agentconfig.config.schema import AgentConfigFile
from agentconfig.errors import ConflictError, ValidationError
from agentconfig.utils.paths import (
    atomic_write,
    backup_destination,
    backup_timestamp,
    ensure_dir,
    is_directory_mapping,
    resolve_from_root,
)

CONFIG_FILENAME = "agentconfig.yml"


def get_config_path(root: Path) -> Path:
    """Get the path to the configuration file under a source root."""
    return root / CONFIG_FILENAME


def format_validation_errors(error: PydanticValidationError) -> list[str]:
    """Flatten pydantic errors into ``loc: msg`` lines."""
    messages = []
    for item in error.errors():
        loc = " -> ".join(str(part) for part in item["loc"])
        messages.append(f"{loc}: {item['msg']}")
    return messages


def parse_config(data: Any, config_path: Optional[Path] = None) -> AgentConfigFile:
    """
    Turn loosely-typed YAML data into a validated configuration.

    Args:
        data: Parsed YAML document.
        config_path: File the data came from, used in error messages.

    Returns:
        AgentConfigFile: Validated configuration object.

    Raises:
        ValidationError: If the document is not a mapping or fails the schema.
    """
    where = config_path or "configuration"

    if not isinstance(data, dict):
        raise ValidationError(f"Invalid config format in {where}")

    try:
        return AgentConfigFile.model_validate(data)
    except PydanticValidationError as e:
        details = "\n".join(f"  {line}" for line in format_validation_errors(e))
        raise ValidationError(f"Invalid config format in {where}\n{details}") from e


def _read_yaml(config_path: Path) -> Any:
    try:
        raw = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ValidationError(f"Missing config: {config_path}") from e

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        location = ""
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            location = f" (line {mark.line + 1}, col {mark.column + 1})"
        problem = getattr(e, "problem", None) or str(e)
        raise ValidationError(f"Invalid YAML in {config_path}{location}: {problem}") from e


def load_config(root: Path) -> AgentConfigFile:
    """
    Load configuration from the source root.

    Args:
        root: Source root containing agentconfig.yml.

    Returns:
        AgentConfigFile: Validated configuration object.

    Raises:
        ValidationError: If the file is missing, not valid YAML, or invalid.
    """
    config_path = get_config_path(root)
    return parse_config(_read_yaml(config_path), config_path)


def dump_config(config: AgentConfigFile) -> str:
    """Serialize a configuration to YAML, keeping declaration order and dropping unset scopes."""
    data = config.model_dump(by_alias=True, exclude_none=True, mode="json")
    return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


def save_config(config: AgentConfigFile, root: Path) -> Path:
    """
    Save configuration to the source root.

    Args:
        config: Configuration object to save.
        root: Source root.

    Returns:
        Path: Path where config was saved.
    """
    config_path = get_config_path(root)
    atomic_write(config_path, dump_config(config))
    return config_path


def validate_config_file(root: Path) -> tuple[bool, list[str]]:
    """
    Validate the configuration file without raising.

    Args:
        root: Source root containing agentconfig.yml.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    config_path = get_config_path(root)

    if not config_path.exists():
        return False, [f"Configuration file not found: {config_path}"]

    try:
        data = _read_yaml(config_path)
    except ValidationError as e:
        return False, [e.message]

    if data is None:
        return False, ["Configuration file is empty"]

    if not isinstance(data, dict):
        return False, [f"Invalid config format in {config_path}"]

    try:
        config = AgentConfigFile.model_validate(data)
    except PydanticValidationError as e:
        return False, format_validation_errors(e)

    errors: list[str] = []
    if not config.agents:
        errors.append("No agents defined")

    profile = config.defaults.profile
    if config.profiles is not None and profile not in config.profiles:
        errors.append(f"Default profile '{profile}' is not defined in profiles")

    return len(errors) == 0, errors


@dataclass
class InitResult:
    """Result of initializing a source root."""

    action: str  # "created", "overwritten" or "skipped"
    config_path: Path
    backup_path: Optional[Path] = None


def ensure_source_directories(config: AgentConfigFile, source_root: Path) -> list[Path]:
    """
    Create the directories every mapping source lives in.

    Directory mappings get their own directory; file mappings get their parent.

    Returns:
        Sorted list of ensured directories.
    """
    sources: set[str] = set()
    for agent in config.agents.values():
        for scope in (agent.global_, agent.project):
            if scope is not None:
                sources.update(entry.source for entry in scope.files)
    for profile in (config.profiles or {}).values():
        sources.update(entry.source for entry in profile.files or [])

    ensured: set[Path] = set()
    for source in sources:
        resolved = resolve_from_root(source_root, source)
        directory = resolved if is_directory_mapping(source) else resolved.parent
        ensure_dir(directory)
        ensured.add(directory)

    return sorted(ensured)


def init_config(
    source_root: Path,
    *,
    config: Optional[AgentConfigFile] = None,
    conflict_policy: Optional[str] = None,
    force: bool = False,
) -> InitResult:
    """
    Write a configuration file and create the source directory layout.

    Args:
        source_root: Source root to initialize.
        config: Configuration to write. Defaults to the built-in template.
        conflict_policy: What to do if the file exists: overwrite, backup, skip or cancel.
        force: Shortcut for ``conflict_policy="overwrite"``.

    Returns:
        InitResult describing what happened.

    Raises:
        ConflictError: If the file exists and no policy allows replacing it,
            or the policy is cancel.
    """
    config_path = get_config_path(source_root)
    exists = config_path.exists()
    policy = conflict_policy or ("overwrite" if force else None)
    backup_path = None

    if exists:
        if not policy:
            raise ConflictError(f"Config already exists: {config_path}")
        if policy == "skip":
            return InitResult(action="skipped", config_path=config_path)
        if policy == "cancel":
            raise ConflictError("Init cancelled")
        if policy == "backup":
            backup_path = backup_destination(source_root, backup_timestamp(), Path(CONFIG_FILENAME))
            ensure_dir(backup_path.parent)
            shutil.copy2(config_path, backup_path)

    if config is None:
        atomic_write(config_path, generate_default_config())
        config = create_default_config()
    else:
        save_config(config, source_root)

    ensure_source_directories(config, source_root)

    return InitResult(
        action="overwritten" if exists else "created",
        config_path=config_path,
        backup_path=backup_path,
    )
