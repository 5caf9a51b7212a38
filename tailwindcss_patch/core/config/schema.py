"""Shape validation for the config file."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel


class OutputConfig(BaseModel):
    file: Optional[str] = None
    pretty: Optional[Union[bool, int]] = None
    strip_universal_selector: Optional[bool] = None


class ResolveConfig(BaseModel):
    paths: Optional[List[str]] = None


class TailwindRegistryConfig(BaseModel):
    version: Optional[int] = None
    package: Optional[str] = None
    resolve: Optional[ResolveConfig] = None
    cwd: Optional[str] = None
    config: Optional[str] = None
    classic: Optional[Dict[str, Any]] = None
    legacy: Optional[Dict[str, Any]] = None
    next: Optional[Dict[str, Any]] = None


class RegistryConfig(BaseModel):
    output: Optional[OutputConfig] = None
    tailwind: Optional[TailwindRegistryConfig] = None


class TransformerRegistryConfig(BaseModel):
    file: Optional[str] = None


class SourcesConfig(BaseModel):
    include: Optional[List[str]] = None
    exclude: Optional[List[str]] = None


class TransformerConfig(BaseModel):
    registry: Optional[TransformerRegistryConfig] = None
    sources: Optional[SourcesConfig] = None


class UserConfig(BaseModel):
    """Top level of ``tailwindcss-mangle.config.yaml``.

    ``patch`` is the legacy section, passed through unvalidated.
    """

    registry: Optional[RegistryConfig] = None
    transformer: Optional[TransformerConfig] = None
    patch: Optional[Dict[str, Any]] = None
