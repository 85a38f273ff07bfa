"""
Configuration for weavedoc.

Manages which DataWeave sources are read and how the consolidated
document is written.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from weavedoc.errors import ConfigError

CONFIG_FILE_NAME = "weavedoc.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class WeaveDocConfig:
    """Configuration for a documentation run.

    Attributes:
        project_root: Working directory; relative paths resolve against it
        files: Individual DataWeave files to parse
        directories: Directories searched recursively for DataWeave files
        consolidate_output: Write one document for all modules
        output_file: Where the consolidated document is written
        output_header_text: Text placed verbatim at the top of the document
        output_footer_text: Text placed verbatim at the bottom of the document
        write_header_table: Emit a navigation table linking every module
        module_list: Module names listed first, in this order
        file_ext: DataWeave file extension (without the dot)
        show_about: Print the program banner before running
        skip: Do nothing
        max_workers: Threads used to parse files
        template_dir: Directory overriding the bundled templates
        log_level: structlog level name
        log_format: ``console`` or ``json``
    """

    project_root: Path = field(default_factory=lambda: Path("."))
    files: list[str] = field(default_factory=list)
    directories: list[str] = field(default_factory=lambda: ["src/main/resources/dwl"])

    consolidate_output: bool = True
    output_file: str = "target/dataweave-doc.md"
    output_header_text: str = ""
    output_footer_text: str = ""
    write_header_table: bool = False
    module_list: list[str] = field(default_factory=list)

    file_ext: str = "dwl"
    show_about: bool = False
    skip: bool = False
    max_workers: int = 4
    template_dir: Path | None = None

    log_level: str = "INFO"
    log_format: str = "console"

    def __post_init__(self):
        """Convert paths to Path objects if strings."""
        if isinstance(self.project_root, str):
            self.project_root = Path(self.project_root)
        if isinstance(self.template_dir, str):
            self.template_dir = Path(self.template_dir)
        self.file_ext = self.file_ext.lstrip(".")
        if self.max_workers < 1:
            raise ConfigError(f"max_workers must be at least 1, got {self.max_workers}")
        if self.log_format not in ("console", "json"):
            raise ConfigError(f"log_format must be 'console' or 'json', got {self.log_format!r}")
        if str(self.log_level).upper() not in LOG_LEVELS:
            raise ConfigError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "WeaveDocConfig":
        """Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            WeaveDocConfig instance
        """
        try:
            with open(yaml_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Unable to load configuration '{yaml_path}': {e}", cause=e) from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration '{yaml_path}' must be a mapping")
        data.setdefault("project_root", str(Path(yaml_path).parent))
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WeaveDocConfig":
        """Create config from dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary.

        Returns:
            Configuration as dictionary
        """
        return {
            "project_root": str(self.project_root),
            "files": list(self.files),
            "directories": list(self.directories),
            "consolidate_output": self.consolidate_output,
            "output_file": self.output_file,
            "output_header_text": self.output_header_text,
            "output_footer_text": self.output_footer_text,
            "write_header_table": self.write_header_table,
            "module_list": list(self.module_list),
            "file_ext": self.file_ext,
            "show_about": self.show_about,
            "skip": self.skip,
            "max_workers": self.max_workers,
            "template_dir": str(self.template_dir) if self.template_dir else None,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }

    @property
    def output_path(self) -> Path:
        return self.project_root / self.output_file

    def with_overrides(self, **overrides: Any) -> "WeaveDocConfig":
        """Copy with every non-None override applied."""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return self.from_dict(data)
