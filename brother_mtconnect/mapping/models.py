"""Declarative record layouts ("DataMaps") for positional controller files."""

from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_DATA_MAP = "production_data3.json"
NUMBER = "Number"


class EnumValue(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    index: int
    value: str


class DataMapItem(BaseModel):
    """One comma separated field of a record."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    type: str = NUMBER
    enum_values: List[EnumValue] = Field(default_factory=list, alias="enumValues")

    def resolve(self, raw: str) -> Optional[str]:
        """Trimmed value of ``Number`` items, enum lookup for enum items.

        Any other item, such as the ``String`` symbol column, yields ``None``.
        """

        text = raw.strip()
        if self.type == NUMBER:
            return text
        if not self.enum_values:
            return None
        try:
            index = int(text)
        except ValueError:
            return None
        for entry in self.enum_values:
            if entry.index == index:
                return entry.value
        return None


class DataMapLine(BaseModel):
    """Record at line ``number`` whose first field must equal ``symbol``.

    ``items[0]`` describes the symbol field itself.
    """

    number: int
    symbol: str
    items: List[DataMapItem] = Field(default_factory=list)

    @field_validator("number")
    @classmethod
    def _ensure_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("line number must be >= 0")
        return value


class DataMap(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(alias="fileName")
    lines: List[DataMapLine] = Field(default_factory=list)


def load_data_map(path: str | Path | None = None) -> DataMap:
    """Load a DataMap from ``path`` or the packaged production data layout."""

    if path is None:
        text = resources.files(__package__).joinpath(DEFAULT_DATA_MAP).read_text(encoding="utf-8")
    else:
        text = Path(path).read_text(encoding="utf-8")
    return DataMap.model_validate_json(text)
