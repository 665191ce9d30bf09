"""Configuration management for autodoc."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from autodoc.rendering import DEFAULT_TEMPLATE

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".autodoc"


@dataclass
class ExampleHandler:
    """A custom checker for examples whose output matches a pattern.

    Attributes:
        pattern: Regular expression searched in each example's output.
        test: Script source of the checker, embedded in the generated page.
    """
    pattern: re.Pattern
    test: str = ""


@dataclass
class AutodocConfig:
    """Options for extracting and generating documentation.

    Attributes:
        namespaces: Namespaces to document, in order. Empty means all.
        tags: Only document functions carrying one of these tags. Empty means
            all, unless some function is tagged @public.
        javascripts: Scripts the generated page should load.
        template: Template name, looked up in template_dir.
        template_dir: Directory holding templates. None uses the bundled ones.
        example_handlers: Custom example checkers, first match wins.
        extra_options: Arbitrary data merged into the template data.
    """
    namespaces: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    javascripts: list[str] = field(default_factory=list)
    template: str = DEFAULT_TEMPLATE
    template_dir: Path | None = None
    example_handlers: list[ExampleHandler] = field(default_factory=list)
    extra_options: dict[str, Any] = field(default_factory=dict)


def _string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"Expected a list, got {type(value).__name__}")
    return [str(item) for item in value]


def _example_handlers(value: Any) -> list[ExampleHandler]:
    handlers = []
    for entry in value or []:
        if not isinstance(entry, dict):
            raise TypeError("Each example handler must be a mapping")
        handlers.append(ExampleHandler(
            pattern=re.compile(entry["pattern"]),
            test=entry.get("test", ""),
        ))
    return handlers


def load_config(repo_root: Path | None = None) -> AutodocConfig:
    """Load configuration from the .autodoc file in the project root.

    Args:
        repo_root: Path to project root. If None, uses current directory.

    Returns:
        AutodocConfig with loaded or default values.

    Notes:
        If the .autodoc file doesn't exist or can't be parsed, returns the
        default config. Expected YAML structure:

        ```yaml
        namespaces: [Lazy, Lazy.Sequence]
        tags: [public]
        javascripts: [lazy.js]
        template: api.html
        template_dir: docs/templates
        example_handlers:
          - pattern: "^instanceof (.*)$"
            test: "function(match, actual) { ... }"
        extra_options:
          title: Lazy.js
        ```
    """
    if repo_root is None:
        repo_root = Path.cwd()

    config_path = repo_root / CONFIG_FILE_NAME

    if not config_path.exists():
        return AutodocConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            return AutodocConfig()

        template_dir = data.get("template_dir")
        extra_options = data.get("extra_options") or {}
        if not isinstance(extra_options, dict):
            raise TypeError("extra_options must be a mapping")

        return AutodocConfig(
            namespaces=_string_list(data.get("namespaces")),
            tags=_string_list(data.get("tags")),
            javascripts=_string_list(data.get("javascripts")),
            template=data.get("template", DEFAULT_TEMPLATE),
            template_dir=repo_root / template_dir if template_dir else None,
            example_handlers=_example_handlers(data.get("example_handlers")),
            extra_options=extra_options,
        )
    except (yaml.YAMLError, OSError, KeyError, TypeError, ValueError, re.error) as e:
        logger.warning(f"Ignoring invalid config file {config_path} ({e}), using defaults")
        return AutodocConfig()
