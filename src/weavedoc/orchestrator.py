"""
Documentation Orchestrator.

Coordinates a generation run: collecting sources, parsing them, rendering
the consolidated document, and writing it.

Example:
    >>> orchestrator = DocumentationOrchestrator(WeaveDocConfig(project_root=Path(".")))
    >>> orchestrator.generate()
    PosixPath('target/dataweave-doc.md')
"""

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from weavedoc.config import WeaveDocConfig
from weavedoc.errors import ConfigError
from weavedoc.models import SourceFile
from weavedoc.parser.assembler import DataWeaveParser
from weavedoc.renderers.markdown import MarkdownRenderer
from weavedoc.walker import SourceInput, discover_directory, parse_sources, resolve_file

logger = structlog.get_logger()


@dataclass
class GenerationResult:
    """Outcome of a generation run."""

    output_path: Path | None
    files: list[SourceFile] = field(default_factory=list)
    size: int = 0
    skipped: bool = False

    @property
    def function_count(self) -> int:
        return sum(len(f.functions) for f in self.files)

    @property
    def variable_count(self) -> int:
        return sum(len(f.variables) for f in self.files)

    @property
    def table_count(self) -> int:
        return sum(len(f.tables) for f in self.files)


class DocumentationOrchestrator:
    """Orchestrate one documentation run.

    Architecture:
        ```
        DocumentationOrchestrator
              │
              ├──► collect_sources()   directories (walked) + files (explicit)
              │
              ├──► parse()             DataWeaveParser, one task per file
              │
              ├──► render()            MarkdownRenderer
              │
              └──► write output_file   only after rendering succeeded
        ```

    Guardrails:
        - Do NOT write a partial document
          ✅ Render fully in memory, then write once
        - Do NOT continue when an explicit file is missing
          ✅ SourceNotFoundError propagates to the caller
    """

    def __init__(self, config: WeaveDocConfig, parser: DataWeaveParser | None = None):
        self.config = config
        self.parser = parser or DataWeaveParser()
        self.renderer = MarkdownRenderer(template_dir=config.template_dir)

    def check(self) -> None:
        """Reject configurations that cannot produce a document.

        Raises:
            ConfigError: If only per-module output is requested or there are no inputs
        """
        if not self.config.consolidate_output:
            raise ConfigError(
                "consolidate_output is set to false but only a single output file is currently implemented."
            )
        if not self.config.files and not self.config.directories:
            raise ConfigError("No source files or directories are specified.")

    def collect_sources(self) -> list[SourceInput]:
        """Directories first, then explicit files, in configured order."""
        root = self.config.project_root
        ext = self.config.file_ext

        sources: list[SourceInput] = []
        for directory in self.config.directories:
            sources.extend(discover_directory(root / directory, ext))
        for name in self.config.files:
            sources.append(resolve_file(root, name, ext))
        return sources

    def parse(self, sources: list[SourceInput] | None = None) -> list[SourceFile]:
        if sources is None:
            sources = self.collect_sources()
        logger.info("parsing_sources", count=len(sources))
        return parse_sources(self.parser, sources, max_workers=self.config.max_workers)

    def render(self, files: list[SourceFile]) -> str:
        return self.renderer.render(
            files,
            module_list=self.config.module_list,
            header_text=self.config.output_header_text,
            footer_text=self.config.output_footer_text,
            header_table=self.config.write_header_table,
        )

    def generate(self) -> GenerationResult:
        """Run the whole pipeline and write the document.

        Returns:
            GenerationResult describing what was written
        """
        if self.config.skip:
            logger.info("generation_skipped", reason="skip=true")
            return GenerationResult(output_path=None, skipped=True)

        self.check()
        files = self.parse()
        content = self.render(files)

        output_path = self.config.output_path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")

        size = len(content.encode("utf-8"))
        logger.info("document_written", path=str(output_path), modules=len(files), size=size)
        return GenerationResult(output_path=output_path, files=files, size=size)
