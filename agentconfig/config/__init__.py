# AgentConfig Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from agentconfig.config.defaults import DEFAULT_CONFIG, create_default_config, generate_default_config
from agentconfig.config.loader import (
    CONFIG_FILENAME,
    InitResult,
    dump_config,
    ensure_source_directories,
    get_config_path,
    init_config,
    load_config,
    parse_config,
    save_config,
    validate_config_file,
)
from agentconfig.config.schema import (
    AgentConfig,
    AgentConfigFile,
    Defaults,
    MappingEntry,
    ProfileConfig,
    Scope,
    ScopeConfig,
    SyncMode,
)

__all__ = [
    # Schema
    "AgentConfigFile",
    "AgentConfig",
    "ScopeConfig",
    "MappingEntry",
    "ProfileConfig",
    "Defaults",
    "SyncMode",
    "Scope",
    # Loader
    "CONFIG_FILENAME",
    "InitResult",
    "get_config_path",
    "parse_config",
    "load_config",
    "dump_config",
    "save_config",
    "validate_config_file",
    "ensure_source_directories",
    "init_config",
    # Defaults
    "DEFAULT_CONFIG",
    "create_default_config",
    "generate_default_config",
]
