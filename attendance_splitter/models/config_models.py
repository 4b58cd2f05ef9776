from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

"""Config dataclasses for the attendance division splitter.

Built by ``attendance_splitter.config.loader.load_config`` after the YAML file
has passed JSON schema validation, so defaults here mirror the schema defaults.
"""

DEFAULT_OUTPUT_TEMPLATE = "{stem} Divisions.xlsx"
DEFAULT_HEADER_SCAN_ROWS = 10
DEFAULT_PREVIEW_ROWS = 10
SHEET_NAME_POLICIES = ("truncate", "suffix")


@dataclass(frozen=True)
class SplitterConfig:
    """Root configuration object for a splitting run."""
    source_directory: str  # Directory to scan for .xlsx exports
    output_directory: str  # Directory receiving one workbook per input file
    header_scan_rows: int = DEFAULT_HEADER_SCAN_ROWS
    preview_rows: int = DEFAULT_PREVIEW_ROWS
    output_template: str = DEFAULT_OUTPUT_TEMPLATE  # {stem} = input file stem
    output_names: dict[str, str] = field(default_factory=dict)  # input name -> output name
    sheet_name_policy: str = "truncate"
    keep_na_strings: list[str] | None = None  # strings pandas must keep as-is (e.g. "NA")

    def output_path_for(self, source: Path) -> Path:
        """Resolve the output workbook path for an input file."""
        name = self.output_names.get(source.name) or self.output_template.format(stem=source.stem)
        return Path(self.output_directory) / name
