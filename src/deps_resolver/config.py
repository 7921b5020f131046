"""Configuration settings for deps-resolver."""

from __future__ import annotations

from enum import Enum
from pathlib import Path  # noqa: TC003

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    CliImplicitFlag,
    SettingsConfigDict,
)


class OutputFormat(str, Enum):
    """Output formats for deps-resolver."""

    json = "json"
    dot = "dot"


class Settings(BaseSettings):
    """Settings for deps-resolver."""

    libraries: list[str] = Field(
        default_factory=list,
        description="""Names of the libraries to resolve. May be repeated or
            given as a comma-separated list.""",
    )
    index: list[str] = Field(
        default_factory=list,
        description="""Known library versions (NAME@VERSION) and dependency
            edges (NAME@VERSION->DEP@VERSION). Several edges from the same
            library version to different versions of one dependency mean any
            of them is acceptable. For example: `debug@2.6.9` or
            `express@4.17.1->debug@2.6.9`.""",
    )
    output_file: Path | None = Field(
        default=None,
        description="""Output file path. If not provided, the output will be
        written to stdout.""",
    )
    output_format: OutputFormat = Field(
        default=OutputFormat.json,
        description="""Output format: the resolved versions as JSON, or the
            resolved dependency graph as Graphviz dot.""",
    )
    force: CliImplicitFlag[bool] = Field(
        default=False,
        description="""Force the overwrite of the output file if it already
        exists.""",
    )
    timeout: float = Field(
        default=-1,
        description="""Abort the resolution after this many seconds. Negative
            values (the default) mean no timeout.""",
    )
    progress: CliImplicitFlag[bool] = Field(
        default=False,
        description="""Show a progress counter of the candidate versions tried.""",
    )
    log_level: str = Field(default="info", description="Log level")
    version: CliImplicitFlag[bool] = Field(
        default=False,
        description="""Show the version of deps-resolver and exit.""",
    )

    model_config = SettingsConfigDict(
        cli_parse_args=True,
        cli_prog_name="deps-resolver",
        cli_kebab_case=True,
        env_prefix="DEPS_RESOLVER_",
    )
