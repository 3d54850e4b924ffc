"""Configuration classes for XML folding.

This module provides configuration objects for the tree building and folding
layers. Component configurations validate themselves in ``__post_init__``;
ParserConfig bundles them into one immutable object.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from .errors import FromXMLError

DEFAULT_ATTRIBUTE_PREFIX = "@"
DEFAULT_TEXT_KEY = ""


class ConfigError(FromXMLError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass
class TreeConfig:
    """Configuration for building the intermediate tree."""

    # Raise StructuralError instead of recovering from broken nesting
    strict: bool = False
    trim_text: bool = True
    unescape_entities: bool = True
    max_depth: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate tree configuration."""
        if self.max_depth is not None and self.max_depth <= 0:
            raise ValueError("max_depth must be > 0 or None")


@dataclass
class FoldingConfig:
    """Configuration for folding the intermediate tree into plain values."""

    attribute_prefix: str = DEFAULT_ATTRIBUTE_PREFIX
    keep_attribute_prefix: bool = False
    text_key: str = DEFAULT_TEXT_KEY

    def __post_init__(self) -> None:
        """Validate folding configuration."""
        if not self.attribute_prefix:
            raise ValueError("attribute_prefix cannot be empty")
        if any(char.isspace() or char == "=" for char in self.attribute_prefix):
            raise ValueError("attribute_prefix cannot contain whitespace or '='")


_COMPONENTS = ("tree", "folding")


@dataclass(frozen=True)
class ParserConfig:
    """Complete configuration for the parse pipeline.

    Frozen so a single instance can be shared between parser objects and
    threads.
    """

    tree: TreeConfig = field(default_factory=TreeConfig)
    folding: FoldingConfig = field(default_factory=FoldingConfig)

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete parser configuration."""
        if not isinstance(self.tree, TreeConfig):
            raise ConfigValidationError(
                "tree must be a TreeConfig instance", field_name="tree"
            )
        if not isinstance(self.folding, FoldingConfig):
            raise ConfigValidationError(
                "folding must be a FoldingConfig instance", field_name="folding"
            )

        try:
            self.tree.__post_init__()
            self.folding.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override, ``component__field`` for nested ones

        Returns:
            New ParserConfig instance with overrides applied

        Example:
            >>> config = ParserConfig()
            >>> strict = config.override(tree__strict=True)
            >>> strict.tree.strict
            True
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        new_fields: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=[f"Use one of {list(_COMPONENTS)}"],
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                new_fields[key] = value

        for component, overrides in nested_overrides.items():
            try:
                new_fields[component] = replace(getattr(self, component), **overrides)
            except (TypeError, ValueError) as e:
                raise ConfigValidationError(str(e), field_name=component) from e

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary representation of the configuration
        """
        def _dataclass_to_dict(obj: Any) -> Any:
            """Recursively convert dataclass to dict."""
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.name
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Args:
            data: Dictionary in the shape produced by ``to_dict``

        Returns:
            ParserConfig instance created from dictionary
        """
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {sorted(unknown)}"
            )

        try:
            tree = TreeConfig(**data.get("tree", {}))
            folding = FoldingConfig(**data.get("folding", {}))
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

        return cls(
            tree=tree,
            folding=folding,
            name=data.get("name"),
            description=data.get("description"),
        )

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    # Preset factory methods
    @classmethod
    def default(cls) -> "ParserConfig":
        """Permissive configuration: recover from broken nesting, strip prefixes."""
        return cls(name="default")

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Configuration that raises StructuralError on broken nesting."""
        return cls(
            tree=TreeConfig(strict=True),
            name="strict",
            description="Raise on unbalanced tags and repeated attributes",
        )

    @classmethod
    def classic(cls) -> "ParserConfig":
        """Configuration that keeps the ``@`` prefix on attribute keys."""
        return cls(
            folding=FoldingConfig(keep_attribute_prefix=True),
            name="classic",
            description="Attribute keys keep their '@' prefix in the output",
        )
