from __future__ import annotations

import os
from typing import Dict, List, Union, Optional

from pydantic import BaseModel, ConfigDict, Field


__all__ = (
    'EnvValue',
    'GeneratorConfig',
    'DatasourceConfig',
    'SchemaConfig',
)


class _BaseModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class EnvValue(_BaseModel):
    """A schema value that is either a literal or read from an environment variable"""

    value: Optional[str] = None
    from_env_var: Optional[str] = Field(default=None, alias='fromEnvVar')

    def resolve(self) -> Optional[str]:
        if self.from_env_var is None:
            return self.value
        return os.environ.get(self.from_env_var)


class GeneratorConfig(_BaseModel):
    name: str
    provider: EnvValue
    output: Optional[EnvValue] = None
    preview_features: List[str] = Field(default_factory=list, alias='previewFeatures')
    binary_targets: List[EnvValue] = Field(default_factory=list, alias='binaryTargets')
    config: Dict[str, Union[str, List[str]]] = Field(default_factory=dict)


class DatasourceConfig(_BaseModel):
    name: str
    provider: str
    url: Optional[EnvValue] = None


class SchemaConfig(_BaseModel):
    generators: List[GeneratorConfig] = Field(default_factory=list)
    datasources: List[DatasourceConfig] = Field(default_factory=list)
