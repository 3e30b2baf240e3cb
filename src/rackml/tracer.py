"""
Debug tracing infrastructure for rackml.

When debug mode is enabled, the generator records a snapshot of each
pipeline stage so that a surprising drawing can be traced back to the step
that produced it.

Usage:
    >>> generator = RackDiagramGenerator()
    >>> document = generator.generate(markup, debug=True)
    >>> trace = generator.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("debug_trace.txt")

The trace captures:
- parse: rack and slot counts
- layout: canvas size and every device rectangle
- assemble: primitive counts and the serialized SVG
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class PipelineStage:
    """
    Snapshot of state at a pipeline stage.

    Attributes:
        name: Name of this pipeline stage
        data: Dictionary of relevant data at this stage
        svg_snapshot: Optional serialized document at this point
    """

    name: str
    data: Dict[str, Any]
    svg_snapshot: Optional[str] = None

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            # Truncate long values
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        if self.svg_snapshot:
            lines.append(f"  SVG: {len(self.svg_snapshot)} characters")
        return "\n".join(lines)


@dataclass
class RenderTrace:
    """
    Complete trace of a render operation.

    Attributes:
        stages: List of pipeline stages with their data
        input_text: The original markup
    """

    stages: List[PipelineStage] = field(default_factory=list)
    input_text: Union[str, bytes] = ""

    def add_stage(
        self, name: str, data: Dict[str, Any], svg: Optional[str] = None
    ) -> None:
        """
        Add a pipeline stage snapshot.

        Args:
            name: Name of the stage (e.g., "layout")
            data: Dictionary of relevant data at this stage
            svg: Optional serialized document to keep with the stage
        """
        self.stages.append(PipelineStage(name, data.copy(), svg))

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get a specific pipeline stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    @property
    def stage_names(self) -> List[str]:
        return [stage.name for stage in self.stages]

    def summary(self) -> str:
        """Generate a human-readable summary of the trace."""
        lines = [
            "=" * 60,
            "RENDER TRACE SUMMARY",
            "=" * 60,
            "",
            f"Input: {repr(self.input_text[:100])}"
            f"{'...' if len(self.input_text) > 100 else ''}",
            "",
            f"Pipeline stages: {len(self.stages)}",
        ]

        for stage in self.stages:
            has_svg = "+" if stage.svg_snapshot else "-"
            lines.append(f"  [{has_svg}] {stage.name}")

        return "\n".join(lines)

    def dump(self) -> str:
        """Generate a complete human-readable dump of the trace."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]

        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
