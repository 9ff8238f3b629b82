"""
Output formatters for the verifyctl CLI.

Resources are printed as YAML (default) or JSON envelopes; ``raw`` prints the
API payload as JSON without the envelope.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import click
import yaml
from pydantic import BaseModel

from verifyctl.errors import VerifyCtlError

logger = logging.getLogger(__name__)

FORMATS = ("yaml", "json", "raw")


def resolve_format(format_type: Optional[str], outfile: Optional[Path]) -> str:
    """Pick the output format, inferring it from the output file extension when unset."""
    if format_type:
        return format_type.lower()
    if outfile and Path(outfile).suffix.lower() == ".json":
        return "json"
    return "yaml"


def to_plain(data: Any) -> Any:
    """Convert envelopes and models into plain data for serialization."""
    if hasattr(data, "to_dict"):
        return data.to_dict()
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True, exclude_none=True, mode="json")
    if isinstance(data, (list, tuple)):
        return [to_plain(item) for item in data]
    return data


def dump_yaml(data: Any) -> str:
    return yaml.safe_dump(
        to_plain(data), sort_keys=False, default_flow_style=False, allow_unicode=True
    )


def dump_json(data: Any) -> str:
    return json.dumps(to_plain(data), indent=2, default=str)


class OutputFormatter:
    """Writes command results to stdout or to ``outfile``."""

    def __init__(self, format_type: Optional[str] = None, outfile: Optional[Path] = None):
        self.outfile = Path(outfile) if outfile else None
        self.format_type = resolve_format(format_type, self.outfile)

    @property
    def raw(self) -> bool:
        return self.format_type == "raw"

    def output(self, resource: Any, raw: Any = None) -> None:
        """
        Output a resource envelope in the selected format.

        Args:
            resource: Envelope to print for ``yaml`` and ``json``
            raw: API payload to print for ``raw``; defaults to the envelope data
        """
        if self.raw:
            if raw is None:
                raw = getattr(resource, "data", resource)
            self._write(dump_json(raw))
        elif self.format_type == "json":
            self._output_json(resource)
        else:
            self._output_yaml(resource)

    def output_bytes(self, content: bytes) -> None:
        """Output binary content unchanged."""
        if self.outfile:
            self._write_file(self.outfile, content)
        else:
            click.echo(content, nl=False)

    def _output_json(self, data: Any) -> None:
        self._write(dump_json(data))

    def _output_yaml(self, data: Any) -> None:
        self._write(dump_yaml(data))

    def _write(self, text: str) -> None:
        if self.outfile:
            if not text.endswith("\n"):
                text += "\n"
            self._write_file(self.outfile, text.encode("utf-8"))
        else:
            click.echo(text.rstrip("\n"))

    def _write_file(self, path: Path, content: bytes) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            raise VerifyCtlError(f"unable to write the output file '{path}': {e}") from e
        logger.info(f"Output written to {path}")
