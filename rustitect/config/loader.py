"""Locate, read and validate rustitect.yaml."""

import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import RustitectConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG = Path("rustitect.yaml")
USER_CONFIG = Path(".rustitect") / "config.yaml"

_ENV_REF = re.compile(r"\$\{(\w+)\}")


def config_search_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate files, most specific first: --config, ./rustitect.yaml, ~/.rustitect/config.yaml."""
    paths = [PROJECT_CONFIG, Path.home() / USER_CONFIG]
    if cli_path:
        paths.insert(0, Path(cli_path))
    return paths


def load_config(cli_path: str | None = None) -> RustitectConfig:
    """Return the config from the first non-empty candidate file, or the defaults.

    Raises ValueError naming the file when it is not valid YAML or does not
    describe a valid RustitectConfig.
    """
    for path in config_search_paths(cli_path):
        raw = _read_config_file(path)
        if raw is None:
            continue
        try:
            config = RustitectConfig.model_validate(_expand_env_refs(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        logger.debug("loaded config from %s", path)
        return config

    logger.debug("no config file found, using defaults")
    return RustitectConfig()


def _read_config_file(path: Path) -> dict | None:
    """Parsed mapping from ``path``; None when the file is absent or empty."""
    if not path.is_file():
        return None
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: top level must be a mapping")
    return raw


def _expand_env_refs(value: object) -> object:
    """Replace ${VAR} in every string leaf; unset variables become empty."""
    if isinstance(value, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {key: _expand_env_refs(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env_refs(item) for item in value]
    return value


# Default YAML template for `rustitect config init`
DEFAULT_CONFIG_TEMPLATE = """\
# rustitect.yaml

# Markdown -> AsciiDoc conversion
pandoc:
  # path: "/usr/local/bin/pandoc"  # defaults to $PANDOC_PATH, then "pandoc"
  # timeout: 30                    # seconds; unset waits for pandoc to finish
  extra_args: []

# PlantUML class diagram
diagram:
  show_methods: true           # list inherent methods inside class blocks
  show_relations: true         # trait realisation and composition arrows

# Output
output:
  base_dir: "."
  format: "asciidoc"           # asciidoc | asciidoc-plantuml | markdown | plantuml
  prefix: ""

# Logging
log_level: "warn"              # debug | info | warn | error
"""
